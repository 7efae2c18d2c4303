"""Diffusion-limited aggregation caves."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING

import tcod.los

from burrow import config
from burrow.environment.tile_types import TileKind

from .base import RegionMapBuilder
from .common import Symmetry, floor_count, paint, stagger
from .errors import MapGenerationError

if TYPE_CHECKING:
    from burrow.types import WorldTilePos
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class DLAAlgorithm(Enum):
    WALK_INWARDS = auto()
    WALK_OUTWARDS = auto()
    CENTRAL_ATTRACTOR = auto()


class DLABuilder(RegionMapBuilder):
    """Grows a cave outward from a central seed, one digger at a time.

    Each digger travels until it meets the existing cave (or, walking
    outwards, until it leaves it) and paints a brush of floor where it stops.
    Digging ends once ``floor_percent`` of the grid is floor.
    """

    initial_fill = TileKind.WALL

    def __init__(
        self,
        depth: int,
        rng: RNG,
        *,
        variant: str,
        algorithm: DLAAlgorithm,
        brush_size: int,
        symmetry: Symmetry = Symmetry.NONE,
        floor_percent: float = 0.25,
        **kwargs,
    ) -> None:
        super().__init__(depth, rng, **kwargs)
        self.variant = variant
        self.algorithm = algorithm
        self.brush_size = brush_size
        self.symmetry = symmetry
        self.floor_percent = floor_percent

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"dla_{self.variant}"

    @classmethod
    def walk_inwards(cls, depth: int, rng: RNG, **kwargs) -> DLABuilder:
        return cls(
            depth,
            rng,
            variant="walk_inwards",
            algorithm=DLAAlgorithm.WALK_INWARDS,
            brush_size=1,
            **kwargs,
        )

    @classmethod
    def walk_outwards(cls, depth: int, rng: RNG, **kwargs) -> DLABuilder:
        return cls(
            depth,
            rng,
            variant="walk_outwards",
            algorithm=DLAAlgorithm.WALK_OUTWARDS,
            brush_size=2,
            **kwargs,
        )

    @classmethod
    def central_attractor(cls, depth: int, rng: RNG, **kwargs) -> DLABuilder:
        return cls(
            depth,
            rng,
            variant="central_attractor",
            algorithm=DLAAlgorithm.CENTRAL_ATTRACTOR,
            brush_size=2,
            **kwargs,
        )

    @classmethod
    def insectoid(cls, depth: int, rng: RNG, **kwargs) -> DLABuilder:
        return cls(
            depth,
            rng,
            variant="insectoid",
            algorithm=DLAAlgorithm.CENTRAL_ATTRACTOR,
            brush_size=2,
            symmetry=Symmetry.HORIZONTAL,
            **kwargs,
        )

    def _build(self) -> None:
        start = (self.width // 2, self.height // 2)
        x, y = start
        for sx, sy in ((x, y), (x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            self.grid[sx, sy] = TileKind.FLOOR
        self.take_snapshot()

        desired_floor = int(self.floor_percent * len(self.grid))
        diggers = 0
        while floor_count(self.grid) < desired_floor:
            if diggers >= config.MAX_WALKERS:
                raise MapGenerationError(
                    f"{self.name}: {diggers} diggers did not reach "
                    f"{desired_floor} floor tiles"
                )
            match self.algorithm:
                case DLAAlgorithm.WALK_INWARDS:
                    self._walk_inwards()
                case DLAAlgorithm.WALK_OUTWARDS:
                    self._walk_outwards(start)
                case DLAAlgorithm.CENTRAL_ATTRACTOR:
                    self._central_attractor(start)
            diggers += 1
            if diggers % 50 == 0:
                self.take_snapshot()

        logger.debug(f"{self.name}: released {diggers} diggers")
        self.finalize(start)

    def _random_digger(self) -> WorldTilePos:
        return (
            self.rng.randint(1, self.width - 3) + 1,
            self.rng.randint(1, self.height - 3) + 1,
        )

    def _is_tile(self, x: int, y: int, kind: TileKind) -> bool:
        return self.grid.tiles[self.grid.index(x, y)] == kind

    def _walk_inwards(self) -> None:
        """Wander in from a random tile; paint where the cave was touched."""
        x, y = self._random_digger()
        prev_x, prev_y = x, y
        steps = 0
        while self._is_tile(x, y, TileKind.WALL):
            steps += 1
            if steps > config.MAX_WALKER_STEPS:
                raise MapGenerationError(f"{self.name}: digger wandered too long")
            prev_x, prev_y = x, y
            x, y = stagger(self.rng, x, y, self.width, self.height)
        paint(self.grid, self.symmetry, self.brush_size, prev_x, prev_y)

    def _walk_outwards(self, start: WorldTilePos) -> None:
        """Wander out from the centre; paint the first rock reached."""
        x, y = start
        steps = 0
        while self._is_tile(x, y, TileKind.FLOOR):
            steps += 1
            if steps > config.MAX_WALKER_STEPS:
                raise MapGenerationError(f"{self.name}: digger wandered too long")
            x, y = stagger(self.rng, x, y, self.width, self.height)
        paint(self.grid, self.symmetry, self.brush_size, x, y)

    def _central_attractor(self, start: WorldTilePos) -> None:
        """Travel in a straight line toward the centre until the cave is hit."""
        x, y = self._random_digger()
        prev_x, prev_y = x, y
        # The first point of the line is the digger's own tile.
        path = tcod.los.bresenham((x, y), start)[1:].tolist()
        for next_x, next_y in path:
            if not self._is_tile(x, y, TileKind.WALL):
                break
            prev_x, prev_y = x, y
            x, y = next_x, next_y
        paint(self.grid, self.symmetry, self.brush_size, prev_x, prev_y)
