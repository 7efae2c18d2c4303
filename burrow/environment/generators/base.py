"""Base classes for level builders."""

from __future__ import annotations

import abc
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, TypeAlias

from burrow import config
from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind

from .connectivity import prune_and_find_exit
from .regions import generate_spawn_regions

if TYPE_CHECKING:
    from burrow.game.spawner import Spawner
    from burrow.types import RegionMap, TileCoord, WorldTilePos
    from burrow.util.coordinates import Rect
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)

# Receives a revealed copy of the grid at interesting points during a build.
SnapshotObserver: TypeAlias = Callable[[Grid], None]


class MapBuilder(abc.ABC):
    """Abstract base class for level generation strategies.

    A builder owns one Grid for its whole life. ``build()`` fills it in
    exactly once; afterwards ``get_map()`` hands out copies, so callers never
    see (or disturb) the builder's own state.
    """

    name: ClassVar[str] = "builder"
    initial_fill: ClassVar[TileKind] = TileKind.WALL

    def __init__(
        self,
        depth: int,
        rng: RNG,
        *,
        width: TileCoord = config.MAP_WIDTH,
        height: TileCoord = config.MAP_HEIGHT,
        on_snapshot: SnapshotObserver | None = None,
    ) -> None:
        self.depth = depth
        self.rng = rng
        self.grid = Grid(width, height, depth, fill=self.initial_fill)
        self.on_snapshot = on_snapshot
        self.starting_position: WorldTilePos | None = None
        self._built = False

    @property
    def width(self) -> TileCoord:
        return self.grid.width

    @property
    def height(self) -> TileCoord:
        return self.grid.height

    @property
    def is_built(self) -> bool:
        return self._built

    def build(self) -> None:
        """Generate the level. May only be called once per builder."""
        if self._built:
            raise RuntimeError(f"{self.name} builder has already been built")
        self._built = True

        start_time = time.perf_counter()
        self._build()
        self.grid.populate_blocked()
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Built {self.name} level ({self.width}x{self.height}, "
            f"depth {self.depth}) in {elapsed_ms:.1f} ms"
        )

    @abc.abstractmethod
    def _build(self) -> None:
        """Fill in ``self.grid`` and set ``self.starting_position``."""
        raise NotImplementedError

    def get_map(self) -> Grid:
        return self.grid.copy()

    def get_starting_position(self) -> WorldTilePos:
        if self.starting_position is None:
            raise RuntimeError(f"{self.name} builder has no start yet; call build()")
        return self.starting_position

    @abc.abstractmethod
    def get_regions(self) -> RegionMap:
        """Spawn regions of the finished level, keyed by region id."""
        raise NotImplementedError

    def spawn(self, spawner: Spawner) -> None:
        """Populate every spawn region through ``spawner``."""
        for area in self.get_regions().values():
            spawner.spawn_region(area, self.depth, self.width)

    def take_snapshot(self) -> None:
        if self.on_snapshot is not None:
            self.on_snapshot(self.grid.snapshot())


class RoomMapBuilder(MapBuilder):
    """A builder whose layout is a list of rectangular rooms.

    Every room but the first (where the player starts) is a spawn region.
    Spawn tiles run from ``x1 + room_inset`` up to, but not including, x2
    (likewise on y). Rooms carved inside a wall ring use an inset of 1; rooms
    carved edge to edge use 0.
    """

    room_inset: ClassVar[int] = 1

    def __init__(self, depth: int, rng: RNG, **kwargs) -> None:
        super().__init__(depth, rng, **kwargs)
        self.rooms: list[Rect] = []

    def get_regions(self) -> RegionMap:
        inset = self.room_inset
        regions: RegionMap = {}
        for room_id, room in enumerate(self.rooms[1:], start=1):
            regions[room_id] = [
                self.grid.index(x, y)
                for y in range(room.y1 + inset, room.y2)
                for x in range(room.x1 + inset, room.x2)
                if self.grid.tiles[self.grid.index(x, y)] == TileKind.FLOOR
            ]
        return regions


class RegionMapBuilder(MapBuilder):
    """A builder that carves free-form caves and partitions them by noise."""

    def __init__(self, depth: int, rng: RNG, **kwargs) -> None:
        super().__init__(depth, rng, **kwargs)
        self.regions: RegionMap = {}

    def get_regions(self) -> RegionMap:
        return self.regions

    def finalize(self, start: WorldTilePos) -> None:
        """Prune unreachable floor, place the stairs and partition regions."""
        self.starting_position = start
        start_idx = self.grid.index(*start)
        exit_idx = prune_and_find_exit(self.grid, start_idx)
        self.grid.tiles[exit_idx] = TileKind.STAIRS_DOWN
        self.take_snapshot()
        self.regions = generate_spawn_regions(self.grid, self.rng)
