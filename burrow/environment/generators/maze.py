"""Perfect mazes carved on a half-resolution cell grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from burrow.environment.tile_types import TileKind
from burrow.util.dice import roll_d

from .base import RegionMapBuilder

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)

TOP, RIGHT, BOTTOM, LEFT = range(4)


@dataclass
class MazeCell:
    row: int
    column: int
    walls: list[bool] = field(default_factory=lambda: [True, True, True, True])
    visited: bool = False

    def remove_walls(self, other: MazeCell) -> None:
        """Open the shared wall between two orthogonally adjacent cells."""
        dx = self.column - other.column
        dy = self.row - other.row
        if dx == 1:
            self.walls[LEFT] = other.walls[RIGHT] = False
        elif dx == -1:
            self.walls[RIGHT] = other.walls[LEFT] = False
        elif dy == 1:
            self.walls[TOP] = other.walls[BOTTOM] = False
        elif dy == -1:
            self.walls[BOTTOM] = other.walls[TOP] = False


class MazeGrid:
    """Growing-tree maze generator with a backtracking stack.

    From the current cell, step to a random unvisited neighbour (pushing the
    current cell), or pop back to the most recent cell with options left.
    """

    def __init__(self, width: int, height: int, rng: RNG) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Maze needs at least one cell, got {width}x{height}")
        self.width = width
        self.height = height
        self.rng = rng
        self.cells = [
            MazeCell(row, col) for row in range(height) for col in range(width)
        ]
        self.backtrace: list[int] = []
        self.current = 0

    def _index(self, row: int, column: int) -> int | None:
        if 0 <= row < self.height and 0 <= column < self.width:
            return column + row * self.width
        return None

    def _available_neighbours(self) -> list[int]:
        cell = self.cells[self.current]
        candidates = (
            self._index(cell.row - 1, cell.column),
            self._index(cell.row, cell.column + 1),
            self._index(cell.row + 1, cell.column),
            self._index(cell.row, cell.column - 1),
        )
        return [i for i in candidates if i is not None and not self.cells[i].visited]

    def _next_cell(self) -> int | None:
        neighbours = self._available_neighbours()
        if not neighbours:
            return None
        if len(neighbours) == 1:
            return neighbours[0]
        return neighbours[roll_d(self.rng, len(neighbours)) - 1]

    def generate(self) -> None:
        while True:
            self.cells[self.current].visited = True
            next_cell = self._next_cell()
            if next_cell is not None:
                self.cells[next_cell].visited = True
                self.backtrace.append(self.current)
                self.cells[self.current].remove_walls(self.cells[next_cell])
                self.current = next_cell
            elif self.backtrace:
                self.current = self.backtrace.pop()
            else:
                break

    def copy_to(self, grid: Grid) -> None:
        """Stamp cells onto ``grid``: cell (col, row) lands on (2(col+1), 2(row+1))."""
        grid.tiles[:] = TileKind.WALL
        for cell in self.cells:
            x = (cell.column + 1) * 2
            y = (cell.row + 1) * 2
            grid[x, y] = TileKind.FLOOR
            if not cell.walls[TOP]:
                grid[x, y - 1] = TileKind.FLOOR
            if not cell.walls[RIGHT]:
                grid[x + 1, y] = TileKind.FLOOR
            if not cell.walls[BOTTOM]:
                grid[x, y + 1] = TileKind.FLOOR
            if not cell.walls[LEFT]:
                grid[x - 1, y] = TileKind.FLOOR


class MazeBuilder(RegionMapBuilder):
    """Perfect maze carved by a randomized depth-first backtracker.

    Each maze cell spans two tiles. The player starts in the top-left cell.
    """

    name = "maze"
    initial_fill = TileKind.WALL

    def _build(self) -> None:
        maze = MazeGrid(self.width // 2 - 2, self.height // 2 - 2, self.rng)
        maze.generate()
        maze.copy_to(self.grid)
        self.take_snapshot()
        logger.debug(f"Carved a {maze.width}x{maze.height} cell maze")

        self.finalize((2, 2))
