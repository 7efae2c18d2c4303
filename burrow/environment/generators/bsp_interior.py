"""Binary space partition interiors: a building divided into rooms."""

from __future__ import annotations

from burrow.environment.tile_types import TileKind
from burrow.util.coordinates import Rect
from burrow.util.dice import roll_d

from .base import RoomMapBuilder
from .common import draw_corridor


class BSPInteriorBuilder(RoomMapBuilder):
    """Recursively halves the whole map and carves every leaf edge to edge.

    Leaves are separated by a single wall, and consecutive leaves are joined
    by a corridor, which produces a floor plan of adjoining rooms rather than
    rooms scattered in rock.
    """

    name = "bsp_interior"
    initial_fill = TileKind.WALL
    room_inset = 0

    MIN_ROOM_SIZE = 8

    def _build(self) -> None:
        self.rects: list[Rect] = []
        first = Rect(1, 1, self.width - 2, self.height - 2)
        self.rects.append(first)
        self._add_subrects(first)

        for room in self.rects:
            self.rooms.append(room)
            tiles = self.grid.as_2d()
            tiles[room.y1 : room.y2, room.x1 : room.x2] = TileKind.FLOOR
            self.take_snapshot()

        for room, next_room in zip(self.rooms, self.rooms[1:], strict=False):
            start_x, start_y = self._random_floor_point(room)
            end_x, end_y = self._random_floor_point(next_room)
            draw_corridor(self.grid, start_x, start_y, end_x, end_y)
            self.take_snapshot()

        self.starting_position = self.rooms[0].center()
        stairs_x, stairs_y = self.rooms[-1].center()
        self.grid[stairs_x, stairs_y] = TileKind.STAIRS_DOWN
        self.take_snapshot()

    def _add_subrects(self, rect: Rect) -> None:
        """Replace the most recently added rect with its two halves.

        The first half is one tile short, which leaves the dividing wall.
        """
        if self.rects:
            self.rects.pop()

        width = rect.width
        height = rect.height
        half_width = width // 2
        half_height = height // 2

        if roll_d(self.rng, 4) <= 2:
            # Side by side
            left = Rect(rect.x1, rect.y1, half_width - 1, height)
            self.rects.append(left)
            if half_width > self.MIN_ROOM_SIZE:
                self._add_subrects(left)

            right = Rect(rect.x1 + half_width, rect.y1, half_width, height)
            self.rects.append(right)
            if half_width > self.MIN_ROOM_SIZE:
                self._add_subrects(right)
        else:
            # Stacked
            top = Rect(rect.x1, rect.y1, width, half_height - 1)
            self.rects.append(top)
            if half_height > self.MIN_ROOM_SIZE:
                self._add_subrects(top)

            bottom = Rect(rect.x1, rect.y1 + half_height, width, half_height)
            self.rects.append(bottom)
            if half_height > self.MIN_ROOM_SIZE:
                self._add_subrects(bottom)

    def _random_floor_point(self, room: Rect) -> tuple[int, int]:
        """A random tile of the leaf's floor (x1..x2-1, y1..y2-1)."""
        return (
            room.x1 + roll_d(self.rng, room.width) - 1,
            room.y1 + roll_d(self.rng, room.height) - 1,
        )
