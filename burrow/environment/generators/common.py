"""Carving helpers shared by the level builders."""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from burrow.environment.tile_types import TileKind

from .errors import MapGenerationError

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.types import TileCoord, WorldTilePos
    from burrow.util.coordinates import Rect
    from burrow.util.rng import RNG


class Symmetry(Enum):
    """Mirror axes applied when painting floor."""

    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()
    BOTH = auto()


def apply_room(grid: Grid, room: Rect) -> None:
    """Carve ``room`` as floor ringed by a one-tile wall.

    Floor covers x1+1..x2 and y1+1..y2 inclusive; the wall ring sits on
    x1, x2+1, y1 and y2+1.
    """
    tiles = grid.as_2d()
    tiles[room.y1 : room.y2 + 2, room.x1 : room.x2 + 2] = TileKind.WALL
    tiles[room.y1 + 1 : room.y2 + 1, room.x1 + 1 : room.x2 + 1] = TileKind.FLOOR


def _set_unless_floor(grid: Grid, x: TileCoord, y: TileCoord, kind: TileKind) -> None:
    if grid.in_bounds(x, y):
        idx = grid.index(x, y)
        if grid.tiles[idx] != TileKind.FLOOR:
            grid.tiles[idx] = kind


def apply_horizontal_tunnel(
    grid: Grid, x1: TileCoord, x2: TileCoord, y: TileCoord
) -> None:
    """Carve a walled one-tile-high tunnel along row ``y``.

    The walls run one tile past each end and both ends are capped, so the
    tunnel is fully enclosed until another tunnel or room opens it up.
    Existing floor is never overwritten.
    """
    left, right = min(x1, x2), max(x1, x2)
    for x in range(left - 1, right + 2):
        _set_unless_floor(grid, x, y - 1, TileKind.WALL)
        _set_unless_floor(grid, x, y + 1, TileKind.WALL)
    _set_unless_floor(grid, left - 1, y, TileKind.WALL)
    _set_unless_floor(grid, right + 1, y, TileKind.WALL)
    for x in range(left, right + 1):
        _set_unless_floor(grid, x, y, TileKind.FLOOR)


def apply_vertical_tunnel(
    grid: Grid, y1: TileCoord, y2: TileCoord, x: TileCoord
) -> None:
    """Carve a walled one-tile-wide tunnel along column ``x``."""
    top, bottom = min(y1, y2), max(y1, y2)
    for y in range(top - 1, bottom + 2):
        _set_unless_floor(grid, x - 1, y, TileKind.WALL)
        _set_unless_floor(grid, x + 1, y, TileKind.WALL)
    _set_unless_floor(grid, x, top - 1, TileKind.WALL)
    _set_unless_floor(grid, x, bottom + 1, TileKind.WALL)
    for y in range(top, bottom + 1):
        _set_unless_floor(grid, x, y, TileKind.FLOOR)


def draw_corridor(
    grid: Grid, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
) -> None:
    """Walk from (x1, y1) to (x2, y2), x first, carving a walled corridor."""
    x, y = x1, y1
    while x != x2 or y != y2:
        if x < x2:
            x += 1
        elif x > x2:
            x -= 1
        elif y < y2:
            y += 1
        else:
            y -= 1

        grid.tiles[grid.index(x, y)] = TileKind.FLOOR
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if (nx, ny) != (x, y):
                    _set_unless_floor(grid, nx, ny, TileKind.WALL)


def stagger(
    rng: RNG, x: TileCoord, y: TileCoord, width: TileCoord, height: TileCoord
) -> WorldTilePos:
    """One random-walk step, kept within 2..size-2 on both axes."""
    direction = rng.randint(1, 4)
    if direction == 1:
        if x > 2:
            x -= 1
    elif direction == 2:
        if x < width - 2:
            x += 1
    elif direction == 3:
        if y > 2:
            y -= 1
    elif y < height - 2:
        y += 1
    return x, y


def _apply_paint(grid: Grid, brush_size: int, x: TileCoord, y: TileCoord) -> None:
    if brush_size <= 1:
        if 1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2:
            grid.tiles[grid.index(x, y)] = TileKind.FLOOR
        return

    half = brush_size // 2
    for brush_y in range(y - half, y + half):
        for brush_x in range(x - half, x + half):
            if 1 <= brush_x <= grid.width - 2 and 1 <= brush_y <= grid.height - 2:
                grid.tiles[grid.index(brush_x, brush_y)] = TileKind.FLOOR


def paint(
    grid: Grid,
    symmetry: Symmetry,
    brush_size: int,
    x: TileCoord,
    y: TileCoord,
) -> None:
    """Paint floor at (x, y), mirrored about the grid centre per ``symmetry``.

    A brush of size 1 paints a single tile; larger brushes paint a
    ``brush_size`` square. The outer border is never painted.
    """
    center_x = grid.width // 2
    center_y = grid.height // 2

    match symmetry:
        case Symmetry.NONE:
            _apply_paint(grid, brush_size, x, y)
        case Symmetry.HORIZONTAL:
            if x == center_x:
                _apply_paint(grid, brush_size, x, y)
            else:
                dist_x = abs(center_x - x)
                _apply_paint(grid, brush_size, center_x + dist_x, y)
                _apply_paint(grid, brush_size, center_x - dist_x, y)
        case Symmetry.VERTICAL:
            if y == center_y:
                _apply_paint(grid, brush_size, x, y)
            else:
                dist_y = abs(center_y - y)
                _apply_paint(grid, brush_size, x, center_y + dist_y)
                _apply_paint(grid, brush_size, x, center_y - dist_y)
        case Symmetry.BOTH:
            if x == center_x and y == center_y:
                _apply_paint(grid, brush_size, x, y)
            else:
                dist_x = abs(center_x - x)
                dist_y = abs(center_y - y)
                _apply_paint(grid, brush_size, center_x + dist_x, y)
                _apply_paint(grid, brush_size, center_x - dist_x, y)
                _apply_paint(grid, brush_size, x, center_y + dist_y)
                _apply_paint(grid, brush_size, x, center_y - dist_y)


def find_start_walking_left(grid: Grid) -> WorldTilePos:
    """The first FLOOR tile found walking left from the grid centre.

    Raises:
        MapGenerationError: If the centre row has no floor left of centre.
    """
    x, y = grid.width // 2, grid.height // 2
    while grid.tiles[grid.index(x, y)] != TileKind.FLOOR:
        x -= 1
        if x < 1:
            raise MapGenerationError("No floor tile on the centre row to start from")
    return x, y


def floor_count(grid: Grid) -> int:
    return grid.count(TileKind.FLOOR)
