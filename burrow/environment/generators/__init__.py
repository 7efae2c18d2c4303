"""Level generation algorithms for burrow.

Strategies (all `MapBuilder` subclasses):
- Room based: SimpleRoomsBuilder, BSPDungeonBuilder, BSPInteriorBuilder
- Cave/region based: CellularAutomataBuilder, DrunkardsWalkBuilder, MazeBuilder,
  DLABuilder, VoronoiBuilder
- WaveformCollapseBuilder, which re-derives any of the above

Shared machinery:
- connectivity: reachability pruning and exit selection
- regions: noise-bucket spawn regions
- factory: the builder registry and `generate_level`
"""

from .base import MapBuilder, RegionMapBuilder, RoomMapBuilder
from .bsp_dungeon import BSPDungeonBuilder
from .bsp_interior import BSPInteriorBuilder
from .cellular_automata import CellularAutomataBuilder
from .dla import DLABuilder
from .drunkard import DrunkardSettings, DrunkardsWalkBuilder
from .errors import MapGenerationError, WFCContradiction
from .factory import (
    BUILDER_REGISTRY,
    GeneratedLevel,
    create_builder,
    generate_level,
    random_builder,
)
from .maze import MazeBuilder
from .simple_rooms import SimpleRoomsBuilder
from .voronoi import VoronoiBuilder
from .wfc import WaveformCollapseBuilder

__all__ = [
    "BUILDER_REGISTRY",
    "BSPDungeonBuilder",
    "BSPInteriorBuilder",
    "CellularAutomataBuilder",
    "DLABuilder",
    "DrunkardSettings",
    "DrunkardsWalkBuilder",
    "GeneratedLevel",
    "MapBuilder",
    "MapGenerationError",
    "MazeBuilder",
    "RegionMapBuilder",
    "RoomMapBuilder",
    "SimpleRoomsBuilder",
    "VoronoiBuilder",
    "WFCContradiction",
    "WaveformCollapseBuilder",
    "create_builder",
    "generate_level",
    "random_builder",
]
