from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from burrow import config
from burrow.environment.tile_types import TileKind

from ..base import MapBuilder, RegionMapBuilder
from ..common import find_start_walking_left
from ..errors import WFCContradiction
from .patterns import MapChunk, build_patterns, patterns_to_constraints
from .solver import Solver

if TYPE_CHECKING:
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class WaveformCollapseBuilder(RegionMapBuilder):
    """Re-derives another builder's level with Wave Function Collapse.

    The source level is cut into chunks (with mirror images), and a new level
    of the same size is assembled from chunks whose open borders line up.
    The result keeps the source's local texture but not its overall layout.
    """

    initial_fill = TileKind.WALL

    def __init__(
        self,
        depth: int,
        rng: RNG,
        source: MapBuilder,
        *,
        chunk_size: int = config.WFC_CHUNK_SIZE,
        max_attempts: int = config.WFC_MAX_ATTEMPTS,
        **kwargs,
    ) -> None:
        kwargs.setdefault("width", source.width)
        kwargs.setdefault("height", source.height)
        super().__init__(depth, rng, **kwargs)
        self.source = source
        self.chunk_size = chunk_size
        self.max_attempts = max_attempts
        self.constraints: list[MapChunk] = []

    @classmethod
    def derived_map(
        cls, depth: int, source: MapBuilder, **kwargs
    ) -> WaveformCollapseBuilder:
        """Wrap ``source``, sharing its RNG."""
        return cls(depth, source.rng, source, **kwargs)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"wfc({self.source.name})"

    def _build(self) -> None:
        if not self.source.is_built:
            self.source.build()

        source_map = self.source.get_map()
        source_map.tiles[source_map.tiles == TileKind.STAIRS_DOWN] = TileKind.FLOOR

        patterns = build_patterns(
            source_map, self.chunk_size, include_flips=True, dedupe=True
        )
        self.constraints = patterns_to_constraints(patterns, self.chunk_size)
        logger.debug(
            f"{self.name}: {len(self.constraints)} unique chunks from the source"
        )

        self._solve()
        self._wall_border()
        self.take_snapshot()

        start = find_start_walking_left(self.grid)
        self.finalize(start)

    def _solve(self) -> None:
        for attempt in range(1, self.max_attempts + 1):
            self.grid.tiles[:] = TileKind.WALL
            solver = Solver(self.constraints, self.chunk_size, self.grid)
            if solver.solve(self.grid, self.rng):
                logger.debug(f"{self.name}: solved on attempt {attempt}")
                return
            logger.debug(f"{self.name}: attempt {attempt} hit a contradiction")
        raise WFCContradiction(
            f"{self.name}: no consistent layout after {self.max_attempts} attempts"
        )

    def _wall_border(self) -> None:
        """Chunks may carry floor to the map edge; close it off."""
        tiles = self.grid.as_2d()
        tiles[0, :] = tiles[-1, :] = TileKind.WALL
        tiles[:, 0] = tiles[:, -1] = TileKind.WALL

