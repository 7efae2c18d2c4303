"""Reachability from the start tile.

Distances are computed with ``tcod.path.dijkstra2d`` over the 8-connected tile
graph. tcod works in integers, so step costs are scaled by
``config.DISTANCE_SCALE`` (cardinal) and ``round(sqrt(2) * scale)``
(diagonal) and divided back out afterwards.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
import tcod.path

from burrow import config
from burrow.environment.tile_types import TileKind

from .errors import MapGenerationError

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.types import TileIndex

logger = logging.getLogger(__name__)

CARDINAL_COST = config.DISTANCE_SCALE
DIAGONAL_COST = round(math.sqrt(2) * config.DISTANCE_SCALE)

_UNREACHED = np.iinfo(np.int32).max


def compute_distance_map(
    grid: Grid,
    start_idx: TileIndex,
    max_distance: float = config.PRUNE_MAX_DISTANCE,
) -> np.ndarray:
    """Path cost from ``start_idx`` to every tile, as a flat float array.

    Blocked tiles (Wall, Void) are impassable. Tiles that cannot be reached,
    or only at a cost above ``max_distance``, are ``math.inf``.
    """
    grid.populate_blocked()
    cost = (~grid.blocked).reshape(grid.height, grid.width).astype(np.int32)

    dist = tcod.path.maxarray((grid.height, grid.width), dtype=np.int32)
    start_x, start_y = grid.position(start_idx)
    dist[start_y, start_x] = 0
    tcod.path.dijkstra2d(dist, cost, CARDINAL_COST, DIAGONAL_COST, out=dist)

    raw = dist.ravel()
    distances = raw.astype(np.float64) / config.DISTANCE_SCALE
    distances[(raw == _UNREACHED) | (distances > max_distance)] = math.inf
    return distances


def prune_and_find_exit(
    grid: Grid,
    start_idx: TileIndex,
    max_distance: float = config.PRUNE_MAX_DISTANCE,
) -> TileIndex:
    """Wall off unreachable floor and return the most distant reachable floor.

    Every FLOOR tile without a finite distance from ``start_idx`` becomes WALL.
    Of the remaining FLOOR tiles, the one with the largest distance is returned
    (the lowest index wins ties).

    Raises:
        MapGenerationError: If no FLOOR tile other than the start is reachable.
    """
    distances = compute_distance_map(grid, start_idx, max_distance)
    floor = grid.tiles == TileKind.FLOOR
    unreachable = floor & np.isinf(distances)

    pruned = int(np.count_nonzero(unreachable))
    grid.tiles[unreachable] = TileKind.WALL
    grid.populate_blocked()
    logger.debug(f"Pruned {pruned} unreachable floor tiles")

    candidates = np.where(floor & ~unreachable, distances, -1.0)
    candidates[start_idx] = -1.0
    exit_idx = int(np.argmax(candidates))
    if candidates[exit_idx] <= 0.0:
        raise MapGenerationError(
            f"No floor reachable from start tile {grid.position(start_idx)}"
        )

    logger.debug(
        f"Exit at {grid.position(exit_idx)}, distance {candidates[exit_idx]:.2f}"
    )
    return exit_idx


def unreachable_floor(grid: Grid, start_idx: TileIndex) -> list[TileIndex]:
    """Indices of walkable tiles with no path at all from ``start_idx``."""
    distances = compute_distance_map(grid, start_idx, max_distance=math.inf)
    walkable = (grid.tiles == TileKind.FLOOR) | (grid.tiles == TileKind.STAIRS_DOWN)
    return np.flatnonzero(walkable & np.isinf(distances)).tolist()
