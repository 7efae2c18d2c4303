"""Populating spawn regions with monsters, items and traps.

Generation does not create entities itself. It decides *what* goes *where*
and hands each placement to an `EntitySink`, which the runtime implements on
top of its own entity storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from burrow import config
from burrow.util.dice import roll_d

if TYPE_CHECKING:
    from burrow.types import TileIndex, WorldTileCoord
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class EntitySink(Protocol):
    """Anything that can create a named entity at a tile."""

    def spawn(self, kind: str, x: WorldTileCoord, y: WorldTileCoord) -> None: ...


@dataclass(frozen=True)
class RandomEntry:
    name: str
    weight: int


class RandomTable:
    """A weighted table of names, rolled with a single die."""

    def __init__(self) -> None:
        self.entries: list[RandomEntry] = []
        self.total_weight = 0

    def add(self, name: str, weight: int) -> RandomTable:
        """Add an entry. Non-positive weights are ignored. Returns self."""
        if weight > 0:
            self.entries.append(RandomEntry(name, weight))
            self.total_weight += weight
        return self

    def roll(self, rng: RNG) -> str | None:
        """Pick an entry with probability weight / total. None if empty."""
        if self.total_weight == 0:
            return None
        roll = roll_d(rng, self.total_weight) - 1
        for entry in self.entries:
            if roll < entry.weight:
                return entry.name
            roll -= entry.weight
        return None

    def __len__(self) -> int:
        return len(self.entries)


def room_table(depth: int) -> RandomTable:
    """What can turn up on a level. Deeper levels shift toward danger."""
    return (
        RandomTable()
        .add("Goblin", 10)
        .add("Orc", 1 + depth)
        .add("Health Potion", 7)
        .add("Fireball Scroll", 2 + depth)
        .add("Confusion Scroll", 2 + depth)
        .add("Magic Missile Scroll", 4)
        .add("Dagger", 3)
        .add("Shield", 3)
        .add("Long Sword", depth - 1)
        .add("Tower Shield", depth - 1)
        .add("Rations", 10)
        .add("Magic Mapping Scroll", 2)
        .add("Bear Trap", 2)
    )


class Spawner:
    """Scatters rolled entities over spawn regions."""

    def __init__(
        self,
        sink: EntitySink,
        rng: RNG,
        max_spawns_per_area: int = config.MAX_SPAWNS_PER_AREA,
    ) -> None:
        self.sink = sink
        self.rng = rng
        self.max_spawns_per_area = max_spawns_per_area

    def spawn_count(self, area_size: int, depth: int) -> int:
        """Roll how many entities one region receives (never more than its tiles)."""
        rolled = roll_d(self.rng, self.max_spawns_per_area + 3) + depth - 4
        return max(0, min(area_size, rolled))

    def spawn_region(
        self, area: list[TileIndex], depth: int, map_width: int
    ) -> dict[TileIndex, str]:
        """Place entities on distinct tiles of ``area``.

        Returns the placements made, tile index -> entity kind.
        """
        num_spawns = self.spawn_count(len(area), depth)
        if num_spawns == 0:
            return {}

        table = room_table(depth)
        available = list(area)
        spawn_points: dict[TileIndex, str] = {}
        for _ in range(num_spawns):
            if len(available) == 1:
                index = 0
            else:
                index = roll_d(self.rng, len(available)) - 1
            kind = table.roll(self.rng)
            tile = available.pop(index)
            if kind is not None:
                spawn_points[tile] = kind

        for tile, kind in spawn_points.items():
            self.sink.spawn(kind, tile % map_width, tile // map_width)

        logger.debug(
            f"Spawned {len(spawn_points)} entities in a {len(area)}-tile region"
        )
        return spawn_points
