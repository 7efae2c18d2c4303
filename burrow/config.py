"""
Configuration constants.

Centralizes the magic numbers used by level generation.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "burrito1"
RANDOM_SEED = None

# =============================================================================
# MAP DIMENSIONS
# =============================================================================

MAP_WIDTH = 80
MAP_HEIGHT = 43

# =============================================================================
# REACHABILITY
# =============================================================================

# Maximum accumulated path cost from the start tile. Anything further away
# is treated as unreachable and pruned.
PRUNE_MAX_DISTANCE = 200.0

# Integer scale applied to path costs before handing them to tcod.
# Cardinal steps cost DISTANCE_SCALE, diagonal steps round(sqrt(2) * scale).
DISTANCE_SCALE = 1000

# =============================================================================
# SPAWN REGIONS
# =============================================================================

REGION_NOISE_FREQUENCY = 0.08
# Noise values in [-1, 1) are multiplied by this and truncated to a bucket id
REGION_NOISE_SCALE = 10240.0
REGION_NOISE_JITTER = 0.45

# =============================================================================
# STRATEGY SELECTION
# =============================================================================

# One in N selected builders is re-derived through Wave Function Collapse
WFC_DERIVE_CHANCE = 3

# Whole-level attempts before generate_level() gives up
MAX_LEVEL_ATTEMPTS = 10

# =============================================================================
# WAVE FUNCTION COLLAPSE
# =============================================================================

WFC_CHUNK_SIZE = 8
# Fresh solver runs before a WFC build is declared contradictory
WFC_MAX_ATTEMPTS = 50

# =============================================================================
# HARDENING CAPS
# =============================================================================

# Walkers (drunkards, DLA diggers) released before a build is aborted
MAX_WALKERS = 20_000
# Steps a single DLA digger may take before a build is aborted
MAX_WALKER_STEPS = 1_000_000
# Attempts to scatter distinct Voronoi seeds
MAX_SEED_PLACEMENT_ATTEMPTS = 10_000

# =============================================================================
# SPAWNING
# =============================================================================

MAX_SPAWNS_PER_AREA = 4
