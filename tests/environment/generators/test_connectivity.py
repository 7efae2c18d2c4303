import math

import pytest

from burrow.environment.generators.connectivity import (
    compute_distance_map,
    prune_and_find_exit,
    unreachable_floor,
)
from burrow.environment.generators.errors import MapGenerationError
from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind


def make_grid(rows: list[str]) -> Grid:
    """Grid from text: '.' floor, '#' wall, ' ' void, '>' stairs."""
    kinds = {
        ".": TileKind.FLOOR,
        "#": TileKind.WALL,
        " ": TileKind.VOID,
        ">": TileKind.STAIRS_DOWN,
    }
    grid = Grid(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            grid[x, y] = kinds[char]
    return grid


class TestDistanceMap:
    def test_cardinal_steps_cost_one(self) -> None:
        grid = make_grid(["#######", "#.....#", "#######"])
        distances = compute_distance_map(grid, grid.index(1, 1))
        assert distances[grid.index(1, 1)] == 0.0
        assert distances[grid.index(5, 1)] == pytest.approx(4.0)

    def test_diagonal_steps_cost_root_two(self) -> None:
        grid = make_grid(["#####", "#.###", "##.##", "###.#", "#####"])
        distances = compute_distance_map(grid, grid.index(1, 1))
        assert distances[grid.index(3, 3)] == pytest.approx(2 * math.sqrt(2), abs=1e-3)

    def test_walls_and_void_are_impassable(self) -> None:
        grid = make_grid(["#######", "#.. ..#", "#######"])
        distances = compute_distance_map(grid, grid.index(1, 1))
        assert math.isinf(distances[grid.index(4, 1)])
        assert math.isinf(distances[grid.index(0, 0)])

    def test_distances_beyond_cap_are_unreached(self) -> None:
        grid = make_grid(["#" * 12, "#" + "." * 10 + "#", "#" * 12])
        distances = compute_distance_map(grid, grid.index(1, 1), max_distance=5.0)
        assert distances[grid.index(6, 1)] == pytest.approx(5.0)
        assert math.isinf(distances[grid.index(7, 1)])


class TestPruneAndFindExit:
    def test_exit_is_farthest_floor(self) -> None:
        grid = make_grid(["########", "#......#", "########"])
        exit_idx = prune_and_find_exit(grid, grid.index(1, 1))
        assert grid.position(exit_idx) == (6, 1)

    def test_unreachable_floor_becomes_wall(self) -> None:
        grid = make_grid(["########", "#...#..#", "########"])
        prune_and_find_exit(grid, grid.index(1, 1))
        assert grid[5, 1] == TileKind.WALL
        assert grid[6, 1] == TileKind.WALL
        assert grid[3, 1] == TileKind.FLOOR
        assert unreachable_floor(grid, grid.index(1, 1)) == []

    def test_floor_past_the_cap_is_pruned(self) -> None:
        grid = make_grid(["#" * 12, "#" + "." * 10 + "#", "#" * 12])
        exit_idx = prune_and_find_exit(grid, grid.index(1, 1), max_distance=5.0)
        assert grid.position(exit_idx) == (6, 1)
        assert grid[7, 1] == TileKind.WALL

    def test_ties_go_to_lowest_index(self) -> None:
        grid = make_grid(["#####", "#...#", "#####"])
        exit_idx = prune_and_find_exit(grid, grid.index(2, 1))
        assert grid.position(exit_idx) == (1, 1)

    def test_start_alone_raises(self) -> None:
        grid = make_grid(["###", "#.#", "###"])
        with pytest.raises(MapGenerationError):
            prune_and_find_exit(grid, grid.index(1, 1))

    def test_blocked_is_refreshed(self) -> None:
        grid = make_grid(["######", "#..#.#", "######"])
        prune_and_find_exit(grid, grid.index(1, 1))
        assert grid.blocked[grid.index(4, 1)]


class TestUnreachableFloor:
    def test_reports_isolated_floor_and_stairs(self) -> None:
        grid = make_grid(["#######", "#..#.>#", "#######"])
        assert unreachable_floor(grid, grid.index(1, 1)) == [
            grid.index(4, 1),
            grid.index(5, 1),
        ]

    def test_no_distance_cap(self) -> None:
        grid = make_grid(["#" * 12, "#" + "." * 10 + "#", "#" * 12])
        assert unreachable_floor(grid, grid.index(1, 1)) == []
