"""Builder registry and level orchestration.

Every strategy is listed in `BUILDER_REGISTRY` under a stable key, so the full
set can be enumerated (by tests, or a debug menu) and one can be built by name.
`generate_level` is the single entry point the game uses on each descent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from burrow import config
from burrow.util import rng as rng_module
from burrow.util.dice import roll_d

from .bsp_dungeon import BSPDungeonBuilder
from .bsp_interior import BSPInteriorBuilder
from .cellular_automata import CellularAutomataBuilder
from .dla import DLABuilder
from .drunkard import DrunkardsWalkBuilder
from .errors import MapGenerationError
from .maze import MazeBuilder
from .simple_rooms import SimpleRoomsBuilder
from .voronoi import VoronoiBuilder
from .wfc import WaveformCollapseBuilder

if TYPE_CHECKING:
    from burrow.environment.map import Grid
    from burrow.game.spawner import Spawner
    from burrow.types import RegionMap, WorldTilePos
    from burrow.util.rng import RNG

    from .base import MapBuilder, SnapshotObserver

logger = logging.getLogger(__name__)

# (depth, rng, **common_kwargs) -> unbuilt builder. The common keyword
# arguments are width, height and on_snapshot.
BuilderFactory: TypeAlias = "Callable[..., MapBuilder]"

BUILDER_REGISTRY: dict[str, BuilderFactory] = {
    "simple_rooms": SimpleRoomsBuilder,
    "bsp_dungeon": BSPDungeonBuilder,
    "bsp_interior": BSPInteriorBuilder,
    "cellular_automata": CellularAutomataBuilder,
    "drunkard_open_area": DrunkardsWalkBuilder.open_area,
    "drunkard_open_halls": DrunkardsWalkBuilder.open_halls,
    "drunkard_winding_passages": DrunkardsWalkBuilder.winding_passages,
    "maze": MazeBuilder,
    "dla_walk_inwards": DLABuilder.walk_inwards,
    "dla_walk_outwards": DLABuilder.walk_outwards,
    "dla_central_attractor": DLABuilder.central_attractor,
    "dla_insectoid": DLABuilder.insectoid,
    "voronoi_pythagoras": VoronoiBuilder.pythagoras,
    "voronoi_manhattan": VoronoiBuilder.manhattan,
    "voronoi_chebyshev": VoronoiBuilder.chebyshev,
}


@dataclass
class GeneratedLevel:
    """A finished level, ready to hand to the runtime.

    Attributes:
        grid: The tiles, with fresh revealed/visible/blocked arrays.
        start: Where the player appears.
        regions: Spawn regions, region id -> tile indices.
    """

    grid: Grid
    start: WorldTilePos
    regions: RegionMap


def create_builder(name: str, depth: int, rng: RNG, **kwargs) -> MapBuilder:
    """Create an unbuilt builder by registry key.

    Raises:
        ValueError: If the name is not registered.
    """
    factory = BUILDER_REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Unknown builder name: {name!r}")
    return factory(depth, rng, **kwargs)


def random_builder(depth: int, rng: RNG, **kwargs) -> MapBuilder:
    """Pick a strategy uniformly; sometimes re-derive it through WFC."""
    names = list(BUILDER_REGISTRY)
    name = names[roll_d(rng, len(names)) - 1]
    builder = create_builder(name, depth, rng, **kwargs)

    if roll_d(rng, config.WFC_DERIVE_CHANCE) == 1:
        builder = WaveformCollapseBuilder.derived_map(depth, builder, **kwargs)

    logger.info(f"Selected {builder.name} for depth {depth}")
    return builder


def generate_level(
    depth: int,
    *,
    rng: RNG | None = None,
    spawner: Spawner | None = None,
    on_snapshot: SnapshotObserver | None = None,
    max_attempts: int = config.MAX_LEVEL_ATTEMPTS,
    **kwargs,
) -> GeneratedLevel:
    """Generate a complete level for ``depth``.

    Builds randomly chosen strategies until one succeeds. Each failure is
    logged and the next attempt continues the same RNG stream.

    Raises:
        MapGenerationError: The last failure, once ``max_attempts`` have failed.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if rng is None:
        rng = rng_module.get("map.generation")

    last_error: MapGenerationError | None = None
    for attempt in range(1, max_attempts + 1):
        builder = random_builder(depth, rng, on_snapshot=on_snapshot, **kwargs)
        try:
            builder.build()
        except MapGenerationError as e:
            last_error = e
            logger.warning(
                f"Level generation attempt {attempt}/{max_attempts} "
                f"({builder.name}) failed: {e}"
            )
            continue

        if spawner is not None:
            builder.spawn(spawner)
        return GeneratedLevel(
            grid=builder.get_map(),
            start=builder.get_starting_position(),
            regions=builder.get_regions(),
        )

    assert last_error is not None
    raise last_error
