"""Chunk-level Wave Function Collapse solver.

Unlike a textbook WFC solver there is no entropy tracking and no
backtracking: slots are filled one at a time, most-constrained first, from
the intersection of their filled neighbours' compatibility lists. A slot with
no legal pattern ends the run with ``possible = False``; the caller decides
whether to start over.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from burrow.util.dice import roll_d

from .patterns import DIR_OFFSETS, DIRECTIONS, OPPOSITE_DIR, MapChunk

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class Solver:
    """Fills a (width // C) x (height // C) grid of chunk slots."""

    def __init__(
        self, constraints: list[MapChunk], chunk_size: int, grid: Grid
    ) -> None:
        if not constraints:
            raise ValueError("Solver needs at least one chunk pattern")
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")

        self.constraints = constraints
        self.chunk_size = chunk_size
        self.chunks_x = grid.width // chunk_size
        self.chunks_y = grid.height // chunk_size
        if self.chunks_x == 0 or self.chunks_y == 0:
            raise ValueError(
                f"Chunk size {chunk_size} does not fit a "
                f"{grid.width}x{grid.height} grid"
            )

        self.chunks: list[int | None] = [None] * (self.chunks_x * self.chunks_y)
        self.remaining: list[int] = list(range(len(self.chunks)))
        self.possible = True

    def chunk_idx(self, chunk_x: int, chunk_y: int) -> int:
        return chunk_y * self.chunks_x + chunk_x

    def _neighbours(self, slot: int) -> list[tuple[str, int]]:
        """(direction from ``slot``, neighbour slot) for each in-bounds neighbour."""
        chunk_x = slot % self.chunks_x
        chunk_y = slot // self.chunks_x
        result = []
        for direction in DIRECTIONS:
            dx, dy = DIR_OFFSETS[direction]
            nx, ny = chunk_x + dx, chunk_y + dy
            if 0 <= nx < self.chunks_x and 0 <= ny < self.chunks_y:
                result.append((direction, self.chunk_idx(nx, ny)))
        return result

    def _filled_neighbour_count(self, slot: int) -> int:
        return sum(self.chunks[n] is not None for _, n in self._neighbours(slot))

    def _pick_slot(self, rng: RNG) -> int:
        counts = {slot: self._filled_neighbour_count(slot) for slot in self.remaining}
        # list.sort is stable, including with reverse=True
        self.remaining.sort(key=counts.__getitem__, reverse=True)
        if counts[self.remaining[0]] > 0:
            position = 0
        else:
            position = roll_d(rng, len(self.remaining)) - 1
        return self.remaining.pop(position)

    def iteration(self, grid: Grid, rng: RNG) -> bool:
        """Fill one slot. Returns True once there is nothing left to do.

        A contradiction also returns True, with ``possible`` set to False.
        """
        if not self.remaining:
            return True

        slot = self._pick_slot(rng)

        options: list[list[int]] = []
        for direction, neighbour in self._neighbours(slot):
            pattern_index = self.chunks[neighbour]
            if pattern_index is not None:
                # This slot lies on the opposite side of the neighbour
                facing = OPPOSITE_DIR[direction]
                options.append(self.constraints[pattern_index].compatible_with[facing])

        if not options:
            chosen = roll_d(rng, len(self.constraints)) - 1
        else:
            candidates = sorted(set(options[0]).intersection(*options[1:]))
            if not candidates:
                logger.debug(f"WFC contradiction at slot {slot}")
                self.possible = False
                return True
            if len(candidates) == 1:
                chosen = candidates[0]
            else:
                chosen = candidates[roll_d(rng, len(candidates)) - 1]

        self.chunks[slot] = chosen
        self._stamp(grid, slot, chosen)
        return False

    def _stamp(self, grid: Grid, slot: int, pattern_index: int) -> None:
        size = self.chunk_size
        left = (slot % self.chunks_x) * size
        top = (slot // self.chunks_x) * size
        block = np.array(self.constraints[pattern_index].pattern).reshape(size, size)
        grid.as_2d()[top : top + size, left : left + size] = block

    def solve(self, grid: Grid, rng: RNG) -> bool:
        """Run iterations to completion. Returns ``possible``."""
        while not self.iteration(grid, rng):
            pass
        return self.possible
