"""Caves dug by random walkers ("drunkards")."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from burrow import config
from burrow.environment.tile_types import TileKind

from .base import RegionMapBuilder
from .common import floor_count, stagger
from .errors import MapGenerationError

if TYPE_CHECKING:
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class DrunkSpawnMode(Enum):
    STARTING_POINT = auto()
    RANDOM = auto()


@dataclass(frozen=True)
class DrunkardSettings:
    """How walkers are released and when digging stops.

    Attributes:
        spawn_mode: Where each walker starts. RANDOM still starts the first
            walker at the centre so the start tile is always dug.
        lifetime: Steps each walker takes before giving up.
        floor_percent: Fraction of the grid that must be floor before the
            builder stops releasing walkers.
        name: Short label used in builder names and logs.
    """

    spawn_mode: DrunkSpawnMode
    lifetime: int
    floor_percent: float
    name: str


OPEN_AREA = DrunkardSettings(DrunkSpawnMode.STARTING_POINT, 400, 0.5, "open_area")
OPEN_HALLS = DrunkardSettings(DrunkSpawnMode.RANDOM, 400, 0.5, "open_halls")
WINDING_PASSAGES = DrunkardSettings(
    DrunkSpawnMode.STARTING_POINT, 100, 0.4, "winding_passages"
)


class DrunkardsWalkBuilder(RegionMapBuilder):
    """Caves carved by walkers released until enough of the map is floor.

    Each walker staggers from its spawn point for `lifetime` steps, marking the
    walls it crosses. Walkers keep being released until the floor fraction
    reaches `floor_percent`, or `config.MAX_WALKERS` is hit.
    """

    initial_fill = TileKind.WALL

    def __init__(
        self, depth: int, rng: RNG, settings: DrunkardSettings, **kwargs
    ) -> None:
        super().__init__(depth, rng, **kwargs)
        self.settings = settings

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"drunkard_{self.settings.name}"

    @classmethod
    def open_area(cls, depth: int, rng: RNG, **kwargs) -> DrunkardsWalkBuilder:
        return cls(depth, rng, OPEN_AREA, **kwargs)

    @classmethod
    def open_halls(cls, depth: int, rng: RNG, **kwargs) -> DrunkardsWalkBuilder:
        return cls(depth, rng, OPEN_HALLS, **kwargs)

    @classmethod
    def winding_passages(cls, depth: int, rng: RNG, **kwargs) -> DrunkardsWalkBuilder:
        return cls(depth, rng, WINDING_PASSAGES, **kwargs)

    def _build(self) -> None:
        start = (self.width // 2, self.height // 2)
        self.grid[start] = TileKind.FLOOR

        desired_floor = int(self.settings.floor_percent * len(self.grid))
        walkers = 0
        while floor_count(self.grid) < desired_floor:
            if walkers >= config.MAX_WALKERS:
                raise MapGenerationError(
                    f"{self.name}: {walkers} walkers did not reach "
                    f"{desired_floor} floor tiles"
                )
            self._release_walker(start, first=walkers == 0)
            walkers += 1

        logger.debug(f"{self.name}: released {walkers} walkers")
        self.finalize(start)

    def _release_walker(self, start: tuple[int, int], *, first: bool) -> None:
        if self.settings.spawn_mode is DrunkSpawnMode.RANDOM and not first:
            x = self.rng.randint(1, self.width - 3) + 1
            y = self.rng.randint(1, self.height - 3) + 1
        else:
            x, y = start

        dug = False
        for _ in range(self.settings.lifetime):
            idx = self.grid.index(x, y)
            if self.grid.tiles[idx] == TileKind.WALL:
                self.grid.tiles[idx] = TileKind.PLACEHOLDER
                dug = True
            x, y = stagger(self.rng, x, y, self.width, self.height)

        if dug:
            self.take_snapshot()
            self.grid.tiles[self.grid.tiles == TileKind.PLACEHOLDER] = TileKind.FLOOR
