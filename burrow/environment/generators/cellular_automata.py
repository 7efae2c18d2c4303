"""Cave levels grown with a cellular automaton."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from burrow.environment.tile_types import TileKind

from .base import RegionMapBuilder
from .common import find_start_walking_left

if TYPE_CHECKING:
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)

# (dy, dx) offsets of the 8 neighbours, relative to the top-left of a 3x3 window
_NEIGHBOUR_OFFSETS = [
    (dy, dx) for dy in range(3) for dx in range(3) if (dy, dx) != (1, 1)
]


def smooth(tiles: np.ndarray) -> np.ndarray:
    """One automaton pass over a (height, width) tile array.

    Interior tiles with more than 4 wall neighbours, or none at all, become
    wall; every other interior tile becomes floor. The border is untouched.
    """
    height, width = tiles.shape
    walls = (tiles == TileKind.WALL).astype(np.int8)
    neighbours = np.zeros((height - 2, width - 2), dtype=np.int8)
    for dy, dx in _NEIGHBOUR_OFFSETS:
        neighbours += walls[dy : dy + height - 2, dx : dx + width - 2]

    result = tiles.copy()
    result[1:-1, 1:-1] = np.where(
        (neighbours > 4) | (neighbours == 0), TileKind.WALL, TileKind.FLOOR
    )
    return result


class CellularAutomataBuilder(RegionMapBuilder):
    """Random noise smoothed into caves.

    Each interior tile starts as floor when a d100 roll beats
    ``floor_threshold``. The automaton then runs ``passes`` times, the start
    is the first floor tile left of the centre, and unreachable pockets are
    pruned.
    """

    name = "cellular_automata"
    initial_fill = TileKind.WALL

    def __init__(
        self,
        depth: int,
        rng: RNG,
        *,
        floor_threshold: int = 55,
        passes: int = 15,
        **kwargs,
    ) -> None:
        super().__init__(depth, rng, **kwargs)
        self.floor_threshold = floor_threshold
        self.passes = passes

    def _build(self) -> None:
        tiles = self.grid.as_2d()
        rolls = np.array(
            [
                self.rng.randint(1, 100)
                for _ in range(1, self.height - 1)
                for _ in range(1, self.width - 1)
            ]
        ).reshape(self.height - 2, self.width - 2)
        tiles[1:-1, 1:-1] = np.where(
            rolls > self.floor_threshold, TileKind.FLOOR, TileKind.WALL
        )
        self.take_snapshot()

        for _ in range(self.passes):
            tiles[:] = smooth(tiles)
            self.take_snapshot()

        start = find_start_walking_left(self.grid)
        logger.debug(f"Cave start at {start}")
        self.finalize(start)
