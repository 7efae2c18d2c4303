"""Classic rooms-and-corridors dungeons."""

from __future__ import annotations

import logging

from burrow.environment.tile_types import TileKind
from burrow.util.coordinates import Rect

from .base import RoomMapBuilder
from .common import apply_horizontal_tunnel, apply_room, apply_vertical_tunnel
from .errors import MapGenerationError

logger = logging.getLogger(__name__)


class SimpleRoomsBuilder(RoomMapBuilder):
    """Rejection-sampled rooms joined by L-shaped tunnels.

    Rooms are placed in order and each is tunnelled to the one before it, so
    every room is reachable without a pruning pass. The player starts in the
    first room and the stairs go in the centre of the last.
    """

    name = "simple_rooms"
    initial_fill = TileKind.VOID

    MAX_ROOMS = 30
    MIN_SIZE = 6
    MAX_SIZE = 10  # exclusive

    def _build(self) -> None:
        self._place_rooms()
        if len(self.rooms) < 2:
            raise MapGenerationError(
                f"Placed only {len(self.rooms)} room(s); need at least 2"
            )
        self._connect_rooms()

        stairs_x, stairs_y = self.rooms[-1].center()
        self.grid[stairs_x, stairs_y] = TileKind.STAIRS_DOWN
        self.starting_position = self.rooms[0].center()
        self.take_snapshot()

    def _place_rooms(self) -> None:
        for _ in range(self.MAX_ROOMS):
            w = self.rng.randrange(self.MIN_SIZE, self.MAX_SIZE)
            h = self.rng.randrange(self.MIN_SIZE, self.MAX_SIZE)
            if w + 2 > self.width or h + 2 > self.height:
                continue
            x = self.rng.randint(0, self.width - w - 2)
            y = self.rng.randint(0, self.height - h - 2)

            new_room = Rect(x, y, w, h)
            if any(new_room.intersects(other) for other in self.rooms):
                continue

            apply_room(self.grid, new_room)
            self.rooms.append(new_room)
            self.take_snapshot()

        logger.debug(f"Placed {len(self.rooms)} of {self.MAX_ROOMS} rooms")

    def _connect_rooms(self) -> None:
        for prev_room, room in zip(self.rooms, self.rooms[1:], strict=False):
            new_x, new_y = room.center()
            prev_x, prev_y = prev_room.center()

            if self.rng.randrange(0, 2) == 1:
                apply_horizontal_tunnel(self.grid, prev_x, new_x, prev_y)
                apply_vertical_tunnel(self.grid, prev_y, new_y, new_x)
            else:
                apply_vertical_tunnel(self.grid, prev_y, new_y, prev_x)
                apply_horizontal_tunnel(self.grid, prev_x, new_x, new_y)
            self.take_snapshot()
