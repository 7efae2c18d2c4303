"""Wave Function Collapse re-derivation of finished levels.

- patterns: cut a level into chunks and derive adjacency constraints
- solver: fill a chunk grid from those constraints, no backtracking
- builder: WaveformCollapseBuilder, which wraps another builder as its source
"""

from .builder import WaveformCollapseBuilder
from .patterns import (
    DIR_OFFSETS,
    DIRECTIONS,
    OPPOSITE_DIR,
    MapChunk,
    build_patterns,
    is_compatible,
    patterns_to_constraints,
)
from .solver import Solver

__all__ = [
    "DIRECTIONS",
    "DIR_OFFSETS",
    "OPPOSITE_DIR",
    "MapChunk",
    "Solver",
    "WaveformCollapseBuilder",
    "build_patterns",
    "is_compatible",
    "patterns_to_constraints",
]
