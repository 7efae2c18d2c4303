"""Voronoi hive levels: cells of floor separated by thin walls."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from burrow import config
from burrow.environment.tile_types import TileKind
from burrow.util.dice import roll_d

from .base import RegionMapBuilder
from .common import find_start_walking_left
from .errors import MapGenerationError

if TYPE_CHECKING:
    from burrow.types import WorldTilePos
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class DistanceAlgorithm(Enum):
    PYTHAGORAS = "pythagoras"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"


def seed_distances(
    xs: np.ndarray, ys: np.ndarray, seeds: np.ndarray, algorithm: DistanceAlgorithm
) -> np.ndarray:
    """Distance from each (x, y) to each seed, shape (len(xs), len(seeds)).

    Pythagoras uses the squared distance; only the ordering matters.
    """
    dx = xs[:, np.newaxis] - seeds[np.newaxis, :, 0]
    dy = ys[:, np.newaxis] - seeds[np.newaxis, :, 1]
    match algorithm:
        case DistanceAlgorithm.PYTHAGORAS:
            return dx * dx + dy * dy
        case DistanceAlgorithm.MANHATTAN:
            return np.abs(dx) + np.abs(dy)
        case DistanceAlgorithm.CHEBYSHEV:
            return np.maximum(np.abs(dx), np.abs(dy))


class VoronoiBuilder(RegionMapBuilder):
    """Partition the map into Voronoi cells and hollow each one out.

    Every tile belongs to its nearest seed (the earliest seed on ties).
    Interior tiles with fewer than two orthogonal neighbours in another cell
    become floor, so only the cell borders stay wall.
    """

    initial_fill = TileKind.WALL

    def __init__(
        self,
        depth: int,
        rng: RNG,
        algorithm: DistanceAlgorithm = DistanceAlgorithm.PYTHAGORAS,
        *,
        n_seeds: int = 64,
        **kwargs,
    ) -> None:
        super().__init__(depth, rng, **kwargs)
        self.algorithm = algorithm
        self.n_seeds = n_seeds

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"voronoi_{self.algorithm.value}"

    @classmethod
    def pythagoras(cls, depth: int, rng: RNG, **kwargs) -> VoronoiBuilder:
        return cls(depth, rng, DistanceAlgorithm.PYTHAGORAS, **kwargs)

    @classmethod
    def manhattan(cls, depth: int, rng: RNG, **kwargs) -> VoronoiBuilder:
        return cls(depth, rng, DistanceAlgorithm.MANHATTAN, **kwargs)

    @classmethod
    def chebyshev(cls, depth: int, rng: RNG, **kwargs) -> VoronoiBuilder:
        return cls(depth, rng, DistanceAlgorithm.CHEBYSHEV, **kwargs)

    def _build(self) -> None:
        seeds = np.array(self._scatter_seeds(), dtype=np.int64)
        membership = self._membership(seeds)

        center = membership[1:-1, 1:-1]
        different = (
            (membership[1:-1, :-2] != center).astype(np.int8)
            + (membership[1:-1, 2:] != center)
            + (membership[:-2, 1:-1] != center)
            + (membership[2:, 1:-1] != center)
        )
        tiles = self.grid.as_2d()
        tiles[1:-1, 1:-1][different < 2] = TileKind.FLOOR
        self.take_snapshot()

        start = find_start_walking_left(self.grid)
        self.finalize(start)

    def _scatter_seeds(self) -> list[WorldTilePos]:
        """Pick ``n_seeds`` distinct points in 1..width-1 x 1..height-1."""
        seeds: list[WorldTilePos] = []
        seen: set[WorldTilePos] = set()
        attempts = 0
        while len(seeds) < self.n_seeds:
            attempts += 1
            if attempts > config.MAX_SEED_PLACEMENT_ATTEMPTS:
                raise MapGenerationError(
                    f"{self.name}: placed only {len(seeds)} of {self.n_seeds} seeds"
                )
            candidate = (
                roll_d(self.rng, self.width - 1),
                roll_d(self.rng, self.height - 1),
            )
            if candidate not in seen:
                seen.add(candidate)
                seeds.append(candidate)
        logger.debug(f"{self.name}: scattered {len(seeds)} seeds in {attempts} rolls")
        return seeds

    def _membership(self, seeds: np.ndarray) -> np.ndarray:
        """Nearest-seed id of every tile, shape (height, width)."""
        indices = np.arange(self.width * self.height)
        xs = indices % self.width
        ys = indices // self.width
        distances = seed_distances(xs, ys, seeds, self.algorithm)
        return np.argmin(distances, axis=1).reshape(self.height, self.width)
