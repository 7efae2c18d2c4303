import pytest

from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind


class TestGridLayout:
    def test_tile_array_matches_dimensions(self) -> None:
        grid = Grid(80, 43)
        assert grid.tiles.shape == (80 * 43,)
        assert len(grid) == 80 * 43
        assert grid.as_2d().shape == (43, 80)

    def test_default_fill_is_wall(self) -> None:
        grid = Grid(4, 3)
        assert grid.count(TileKind.WALL) == 12

    def test_custom_fill(self) -> None:
        grid = Grid(4, 3, fill=TileKind.VOID)
        assert grid.count(TileKind.VOID) == 12

    def test_index_is_row_major(self) -> None:
        grid = Grid(10, 5)
        assert grid.index(3, 2) == 23
        assert grid.position(23) == (3, 2)
        assert grid.position(grid.index(9, 4)) == (9, 4)

    def test_2d_view_writes_through(self) -> None:
        grid = Grid(10, 5)
        grid.as_2d()[2, 3] = TileKind.FLOOR
        assert grid[3, 2] == TileKind.FLOOR
        assert grid.tiles[23] == TileKind.FLOOR

    def test_item_access(self) -> None:
        grid = Grid(5, 5)
        grid[1, 4] = TileKind.STAIRS_DOWN
        assert grid[1, 4] is TileKind.STAIRS_DOWN
        assert grid.count(TileKind.STAIRS_DOWN) == 1

    def test_in_bounds(self) -> None:
        grid = Grid(5, 4)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 3)
        assert not grid.in_bounds(5, 0)
        assert not grid.in_bounds(0, -1)

    @pytest.mark.parametrize(("width", "height"), [(0, 5), (5, 0), (-1, 3)])
    def test_rejects_empty_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ValueError):
            Grid(width, height)

    def test_rejects_depth_below_one(self) -> None:
        with pytest.raises(ValueError):
            Grid(5, 5, depth=0)


class TestGridState:
    def test_populate_blocked(self) -> None:
        grid = Grid(3, 1)
        grid[1, 0] = TileKind.FLOOR
        grid[2, 0] = TileKind.VOID
        grid.populate_blocked()
        assert grid.blocked.tolist() == [True, False, True]

    def test_is_void_or_wall(self) -> None:
        grid = Grid(3, 1, fill=TileKind.VOID)
        grid[1, 0] = TileKind.WALL
        grid[2, 0] = TileKind.FLOOR
        assert grid.is_void_or_wall(0, 0)
        assert grid.is_void_or_wall(1, 0)
        assert not grid.is_void_or_wall(2, 0)

    def test_copy_is_independent(self) -> None:
        grid = Grid(4, 4, depth=3)
        clone = grid.copy()
        clone[1, 1] = TileKind.FLOOR
        clone.revealed[0] = True

        assert grid[1, 1] == TileKind.WALL
        assert not grid.revealed[0]
        assert clone.depth == 3

    def test_snapshot_reveals_everything(self) -> None:
        grid = Grid(4, 4)
        snap = grid.snapshot()
        assert snap.revealed.all()
        assert snap.visible.all()
        assert not grid.revealed.any()

    def test_to_text(self) -> None:
        grid = Grid(3, 2)
        grid[1, 0] = TileKind.FLOOR
        grid[2, 1] = TileKind.STAIRS_DOWN
        assert grid.to_text() == "#.#\n##>"
