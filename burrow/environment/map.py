from __future__ import annotations

import numpy as np

from burrow.environment import tile_types
from burrow.environment.tile_types import TILE_DTYPE, TileKind
from burrow.types import TileCoord, TileIndex, WorldTilePos


class Grid:
    """A dungeon level's tile storage.

    Tiles are kept in a flat, row-major ``uint8`` array so that
    ``index(x, y) == y * width + x``. The ``revealed``, ``visible`` and
    ``blocked`` arrays share that layout. ``tile_content`` holds per-tile
    occupant lists for the runtime; generation never writes to it.
    """

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        depth: int = 1,
        fill: TileKind = TileKind.WALL,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if depth < 1:
            raise ValueError(f"Grid depth must be at least 1, got {depth}")

        self.width: TileCoord = width
        self.height: TileCoord = height
        self.depth = depth

        size = width * height
        self.tiles = np.full(size, fill, dtype=TILE_DTYPE)
        self.revealed = np.zeros(size, dtype=bool)
        self.visible = np.zeros(size, dtype=bool)
        self.blocked = np.zeros(size, dtype=bool)
        self.tile_content: list[list[object]] = [[] for _ in range(size)]

    def __len__(self) -> int:
        return self.width * self.height

    def index(self, x: TileCoord, y: TileCoord) -> TileIndex:
        return y * self.width + x

    def position(self, idx: TileIndex) -> WorldTilePos:
        return idx % self.width, idx // self.width

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def as_2d(self) -> np.ndarray:
        """A (height, width) view of the tiles. Writes go through to the grid."""
        return self.tiles.reshape(self.height, self.width)

    def __getitem__(self, pos: WorldTilePos) -> TileKind:
        x, y = pos
        return TileKind(int(self.tiles[self.index(x, y)]))

    def __setitem__(self, pos: WorldTilePos, kind: TileKind) -> None:
        x, y = pos
        self.tiles[self.index(x, y)] = kind

    def is_void_or_wall(self, x: TileCoord, y: TileCoord) -> bool:
        return self.tiles[self.index(x, y)] in (TileKind.VOID, TileKind.WALL)

    def count(self, kind: TileKind) -> int:
        return int(np.count_nonzero(self.tiles == kind))

    def populate_blocked(self) -> None:
        """Recompute ``blocked`` from the current tiles."""
        self.blocked = tile_types.get_blocked_map(self.tiles)

    def copy(self) -> Grid:
        """Independent copy of the level. Occupant lists are not carried over."""
        clone = Grid(self.width, self.height, self.depth)
        clone.tiles = self.tiles.copy()
        clone.revealed = self.revealed.copy()
        clone.visible = self.visible.copy()
        clone.blocked = self.blocked.copy()
        return clone

    def snapshot(self) -> Grid:
        """A copy with every tile revealed and visible, for generation observers."""
        clone = self.copy()
        clone.revealed[:] = True
        clone.visible[:] = True
        return clone

    def to_text(self) -> str:
        glyphs = tile_types.get_glyph_map(self.as_2d())
        return "\n".join("".join(row) for row in glyphs)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, depth={self.depth})"
