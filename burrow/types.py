from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================

TileCoord = int  # Always integer tile position

# Game world coordinates - absolute positions on the level grid
WorldTileCoord: TypeAlias = TileCoord  # Example: x=5, y=3
WorldTilePos: TypeAlias = tuple[int, int]  # Example: (5, 3) = tile 5,3 on the grid

# Flat row-major index into a Grid's per-tile arrays (y * width + x)
TileIndex: TypeAlias = int

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None

# Spawn regions: region id -> ordered tile indices belonging to that region.
RegionMap: TypeAlias = dict[int, list[int]]
