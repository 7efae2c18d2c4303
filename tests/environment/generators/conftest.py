from __future__ import annotations

from collections.abc import Callable
from random import Random

import numpy as np
import pytest

from burrow.environment.generators import MapBuilder, MapGenerationError
from burrow.environment.generators.connectivity import unreachable_floor
from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind


def assert_finished_level(builder: MapBuilder) -> None:
    """The checks every built level must pass, whatever made it."""
    grid = builder.get_map()
    start = builder.get_starting_position()

    assert grid.tiles.shape == (grid.width * grid.height,)
    assert grid.count(TileKind.PLACEHOLDER) == 0
    assert grid.count(TileKind.STAIRS_DOWN) == 1
    assert grid.in_bounds(*start)
    assert grid[start] == TileKind.FLOOR
    assert unreachable_floor(grid, grid.index(*start)) == []
    solid = (grid.tiles == TileKind.WALL) | (grid.tiles == TileKind.VOID)
    assert np.array_equal(grid.blocked, solid)

    walkable = (grid.tiles == TileKind.FLOOR) | (grid.tiles == TileKind.STAIRS_DOWN)
    for tiles in builder.get_regions().values():
        assert tiles
        assert walkable[tiles].all()


def assert_floor_enclosed(grid: Grid) -> None:
    """No walkable tile touches void or the map edge."""
    tiles = grid.as_2d()
    walkable = (tiles == TileKind.FLOOR) | (tiles == TileKind.STAIRS_DOWN)
    assert not walkable[0, :].any() and not walkable[-1, :].any()
    assert not walkable[:, 0].any() and not walkable[:, -1].any()

    void = tiles == TileKind.VOID
    padded = np.pad(void, 1, constant_values=False)
    height, width = tiles.shape
    touching_void = np.zeros_like(void)
    for dy in range(3):
        for dx in range(3):
            touching_void |= padded[dy : dy + height, dx : dx + width]
    assert not (walkable & touching_void).any()


def build_first_success(
    make: Callable[[Random], MapBuilder], seeds: range = range(1, 11)
) -> MapBuilder:
    """Build with successive seeds until one succeeds, like generate_level does."""
    for seed in seeds:
        builder = make(Random(seed))
        try:
            builder.build()
        except MapGenerationError:
            continue
        return builder
    pytest.fail(f"No seed in {seeds} produced a level")


@pytest.fixture
def finished_level_check() -> Callable[[MapBuilder], None]:
    return assert_finished_level


@pytest.fixture
def enclosure_check() -> Callable[[Grid], None]:
    return assert_floor_enclosed


@pytest.fixture
def build_with_retries() -> Callable[..., MapBuilder]:
    return build_first_success
