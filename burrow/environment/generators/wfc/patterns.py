"""Chunk patterns and adjacency constraints for Wave Function Collapse.

A source level is cut into square chunks. Each distinct chunk becomes a
`MapChunk`, which records where its borders are open (floor) and which other
chunks may sit against each side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

import numpy as np

from burrow.environment.tile_types import TileKind

if TYPE_CHECKING:
    from burrow.environment.map import Grid

# Direction utilities
DIRECTIONS = ["N", "E", "S", "W"]
OPPOSITE_DIR = {"N": "S", "E": "W", "S": "N", "W": "E"}
DIR_OFFSETS = {"N": (0, -1), "E": (1, 0), "S": (0, 1), "W": (-1, 0)}

Pattern: TypeAlias = tuple[int, ...]


@dataclass
class MapChunk:
    """One chunk pattern with its border exits and adjacency rules.

    Attributes:
        pattern: Tile kinds of the chunk, row-major, chunk_size**2 long.
        exits: Per direction, one flag per border cell; True where the border
            cell is floor. N/S are indexed by column, E/W by row.
        has_exits: False only when no border cell on any side is floor.
        compatible_with: Per direction D, indices of the chunks that may be
            placed on side D of this one.
    """

    pattern: Pattern
    exits: dict[str, list[bool]]
    has_exits: bool
    compatible_with: dict[str, list[int]] = field(
        default_factory=lambda: {d: [] for d in DIRECTIONS}
    )


def _check_chunk_size(chunk_size: int) -> None:
    if not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"Chunk size must be a positive integer, got {chunk_size!r}")


def build_patterns(
    grid: Grid,
    chunk_size: int,
    include_flips: bool = False,
    dedupe: bool = True,
) -> list[Pattern]:
    """Cut ``grid`` into non-overlapping ``chunk_size`` squares.

    Chunks are read in row-major chunk order; any partial strip along the
    right or bottom edge is ignored. With ``include_flips`` every chunk also
    yields its horizontal, vertical and both-axis mirror images. With
    ``dedupe`` identical patterns collapse to one; callers should treat the
    resulting order as arbitrary.
    """
    _check_chunk_size(chunk_size)
    chunks_x = grid.width // chunk_size
    chunks_y = grid.height // chunk_size
    if chunks_x == 0 or chunks_y == 0:
        raise ValueError(
            f"Chunk size {chunk_size} does not fit a {grid.width}x{grid.height} grid"
        )

    tiles = grid.as_2d()
    patterns: list[Pattern] = []
    for cy in range(chunks_y):
        for cx in range(chunks_x):
            block = tiles[
                cy * chunk_size : (cy + 1) * chunk_size,
                cx * chunk_size : (cx + 1) * chunk_size,
            ]
            patterns.append(tuple(block.ravel().tolist()))
            if include_flips:
                patterns.append(tuple(block[:, ::-1].ravel().tolist()))
                patterns.append(tuple(block[::-1, :].ravel().tolist()))
                patterns.append(tuple(block[::-1, ::-1].ravel().tolist()))

    if dedupe:
        patterns = list(dict.fromkeys(patterns))
    return patterns


def compute_exits(pattern: Pattern, chunk_size: int) -> dict[str, list[bool]]:
    if len(pattern) != chunk_size * chunk_size:
        raise ValueError(
            f"Pattern has {len(pattern)} tiles, expected {chunk_size * chunk_size}"
        )
    floor = np.array(pattern).reshape(chunk_size, chunk_size) == TileKind.FLOOR
    return {
        "N": floor[0, :].tolist(),
        "E": floor[:, -1].tolist(),
        "S": floor[-1, :].tolist(),
        "W": floor[:, 0].tolist(),
    }


def is_compatible(a: MapChunk, b: MapChunk, direction: str) -> bool:
    """May ``b`` be placed on side ``direction`` of ``a``?

    A side with no exits is a wildcard and accepts anything, as does a
    neighbour with no exits on the facing side. Otherwise at least one border
    slot must be open on both.
    """
    a_side = a.exits[direction]
    b_side = b.exits[OPPOSITE_DIR[direction]]
    if not any(a_side) or not any(b_side):
        return True
    return any(x and y for x, y in zip(a_side, b_side, strict=True))


def patterns_to_constraints(patterns: list[Pattern], chunk_size: int) -> list[MapChunk]:
    """Build a `MapChunk` per pattern with its compatibility lists filled in."""
    _check_chunk_size(chunk_size)
    chunks: list[MapChunk] = []
    for pattern in patterns:
        exits = compute_exits(pattern, chunk_size)
        has_exits = any(any(side) for side in exits.values())
        chunks.append(MapChunk(tuple(pattern), exits, has_exits))

    if not chunks:
        return chunks

    # exit_table[i, d, s]: chunk i has an exit on direction d at slot s
    exit_table = np.array(
        [[chunk.exits[d] for d in DIRECTIONS] for chunk in chunks], dtype=bool
    )
    for d_index, direction in enumerate(DIRECTIONS):
        own = exit_table[:, d_index, :]
        facing = exit_table[:, DIRECTIONS.index(OPPOSITE_DIR[direction]), :]
        shared = own.astype(np.int32) @ facing.T.astype(np.int32) > 0
        compatible = (
            shared
            | ~own.any(axis=1)[:, np.newaxis]
            | ~facing.any(axis=1)[np.newaxis, :]
        )
        for i, chunk in enumerate(chunks):
            chunk.compatible_with[direction] = np.flatnonzero(compatible[i]).tolist()

    return chunks
