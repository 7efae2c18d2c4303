"""Exceptions raised by level generation."""


class MapGenerationError(Exception):
    """A single generation attempt produced an unusable level.

    Raised when no exit is reachable from the start, too few rooms could be
    placed, no start tile exists, or a randomized loop ran past its cap. The
    orchestrator treats it as recoverable and retries with the continuing
    RNG stream.
    """


class WFCContradiction(MapGenerationError):
    """Raised when Wave Function Collapse cannot find a consistent layout."""
