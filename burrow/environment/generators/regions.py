"""Spawn-region partitioning.

Regions come from bucketing a cellular noise field sampled at each interior
floor tile. They resemble Voronoi cells but are not a geometric Voronoi
diagram of the floor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from burrow import config
from burrow.environment.tile_types import TileKind

from .noise import CellularNoise

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.types import RegionMap
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


def interior_floor_indices(grid: Grid) -> np.ndarray:
    """Indices of FLOOR tiles with 1 <= x < width-1 and 1 <= y < height-1."""
    interior = np.zeros((grid.height, grid.width), dtype=bool)
    interior[1:-1, 1:-1] = True
    mask = (grid.as_2d() == TileKind.FLOOR) & interior
    return np.flatnonzero(mask)


def generate_spawn_regions(
    grid: Grid,
    rng: RNG,
    frequency: float = config.REGION_NOISE_FREQUENCY,
) -> RegionMap:
    """Group interior floor tiles into spawn regions.

    The noise seed is drawn from ``rng``. Region ids are the truncated,
    scaled noise values; tiles within a region stay in index order.
    """
    noise = CellularNoise(rng.randint(1, 65536), frequency)

    indices = interior_floor_indices(grid)
    values = noise.sample(indices % grid.width, indices // grid.width)
    buckets = (values * config.REGION_NOISE_SCALE).astype(np.int64)

    regions: RegionMap = {}
    for idx, bucket in zip(indices.tolist(), buckets.tolist(), strict=True):
        regions.setdefault(bucket, []).append(idx)

    logger.debug(f"Partitioned {len(indices)} floor tiles into {len(regions)} regions")
    return regions
