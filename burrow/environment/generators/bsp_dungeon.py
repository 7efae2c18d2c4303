"""Binary space partition dungeons with walled rooms in a void."""

from __future__ import annotations

import logging

from burrow.environment.tile_types import TileKind
from burrow.util.coordinates import Rect
from burrow.util.dice import roll_d

from .base import RoomMapBuilder
from .common import apply_room, draw_corridor
from .errors import MapGenerationError

logger = logging.getLogger(__name__)


class BSPDungeonBuilder(RoomMapBuilder):
    """Rooms dropped into recursively quartered space.

    Starting from one big rect, the builder repeatedly picks a rect, tries to
    fit a randomly sized room inside it and, if the room fits, splits that
    rect into quadrants for later picks. Rooms are then sorted left to right
    and chained together with corridors.
    """

    name = "bsp_dungeon"
    initial_fill = TileKind.VOID

    PLACEMENT_ATTEMPTS = 240
    MAX_ROOM_SIZE = 10

    def _build(self) -> None:
        self.rects: list[Rect] = []
        first = Rect(2, 2, self.width - 5, self.height - 5)
        self.rects.append(first)
        self._add_subrects(first)

        for _ in range(self.PLACEMENT_ATTEMPTS):
            rect = self._random_rect()
            candidate = self._random_sub_rect(rect)
            if self._is_possible(candidate):
                apply_room(self.grid, candidate)
                self.rooms.append(candidate)
                self._add_subrects(rect)
                self.take_snapshot()

        if len(self.rooms) < 2:
            raise MapGenerationError(
                f"Placed only {len(self.rooms)} room(s); need at least 2"
            )
        logger.debug(f"Placed {len(self.rooms)} rooms from {len(self.rects)} rects")

        self.rooms.sort(key=lambda room: room.x1)
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
        """Push the four quadrants of ``rect``."""
        half_width = max(rect.width // 2, 1)
        half_height = max(rect.height // 2, 1)

        self.rects.append(Rect(rect.x1, rect.y1, half_width, half_height))
        self.rects.append(Rect(rect.x1, rect.y1 + half_height, half_width, half_height))
        self.rects.append(Rect(rect.x1 + half_width, rect.y1, half_width, half_height))
        self.rects.append(
            Rect(rect.x1 + half_width, rect.y1 + half_height, half_width, half_height)
        )

    def _random_rect(self) -> Rect:
        if len(self.rects) == 1:
            return self.rects[0]
        return self.rects[roll_d(self.rng, len(self.rects)) - 1]

    def _random_sub_rect(self, rect: Rect) -> Rect:
        w = max(3, roll_d(self.rng, min(rect.width, self.MAX_ROOM_SIZE)) - 1) + 1
        h = max(3, roll_d(self.rng, min(rect.height, self.MAX_ROOM_SIZE)) - 1) + 1
        x = rect.x1 + roll_d(self.rng, 6) - 1
        y = rect.y1 + roll_d(self.rng, 6) - 1
        return Rect(x, y, w, h)

    def _is_possible(self, rect: Rect) -> bool:
        """True if ``rect`` plus a clearance margin is in bounds and unbuilt."""
        x1, x2 = rect.x1 - 2, rect.x2 + 2
        y1, y2 = rect.y1 - 2, rect.y2 + 1
        if x1 < 1 or y1 < 1 or x2 > self.width - 2 or y2 > self.height - 2:
            return False
        return all(
            self.grid.is_void_or_wall(x, y)
            for y in range(y1, y2 + 1)
            for x in range(x1, x2 + 1)
        )

    def _random_floor_point(self, room: Rect) -> tuple[int, int]:
        """A random tile of the room's floor (x1+1..x2, y1+1..y2)."""
        return (
            room.x1 + roll_d(self.rng, room.width),
            room.y1 + roll_d(self.rng, room.height),
        )
