"""
Tile kinds and their per-kind properties.

A `Grid` stores one `TileKind` value per cell in a flat ``uint8`` array. The
properties of each kind (does it block movement, can it be walked on, how is it
drawn in a debug dump) live once in a structured ``TileKindData`` table, so
whole-map property lookups are a single numpy fancy-index:

    blocked = tile_types.get_blocked_map(grid.tiles)
"""

from enum import IntEnum

import numpy as np


class TileKind(IntEnum):
    VOID = 0
    # Transient marker used while carving. Never present in a finished grid.
    PLACEHOLDER = 1
    WALL = 2
    FLOOR = 3
    STAIRS_DOWN = 4


TILE_DTYPE = np.uint8

# Intrinsic data for one kind of tile.
TileKindData = np.dtype(
    [
        ("blocks_movement", bool),
        ("walkable", bool),
        ("glyph", "U1"),  # Character used by Grid.to_text()
    ]
)


def make_tile_kind_data(
    *,
    blocks_movement: bool,
    walkable: bool,
    glyph: str,
) -> np.ndarray:
    """Create a TileKindData instance."""
    return np.array((blocks_movement, walkable, glyph), dtype=TileKindData)


# Indexed by TileKind value, so the order must follow the enum.
_tile_kind_data: list[np.ndarray] = [
    make_tile_kind_data(blocks_movement=True, walkable=False, glyph=" "),
    make_tile_kind_data(blocks_movement=False, walkable=False, glyph="?"),
    make_tile_kind_data(blocks_movement=True, walkable=False, glyph="#"),
    make_tile_kind_data(blocks_movement=False, walkable=True, glyph="."),
    make_tile_kind_data(blocks_movement=False, walkable=True, glyph=">"),
]

# --- Pre-calculated Property Arrays for Efficient Lookups ---

_tile_kind_properties_blocks_movement = np.array(
    [t["blocks_movement"] for t in _tile_kind_data], dtype=bool
)
_tile_kind_properties_walkable = np.array(
    [t["walkable"] for t in _tile_kind_data], dtype=bool
)
_tile_kind_properties_glyph = np.array(
    [t["glyph"] for t in _tile_kind_data], dtype="U1"
)


def get_blocked_map(tile_kinds: np.ndarray) -> np.ndarray:
    """
    Converts an array of TileKind values into a boolean array of blocking.
    True means movement through that tile is impossible (Wall or Void).
    """
    return _tile_kind_properties_blocks_movement[tile_kinds]


def get_walkable_map(tile_kinds: np.ndarray) -> np.ndarray:
    """
    Converts an array of TileKind values into a boolean array of walkability.
    True means a finished level lets actors stand there (Floor or StairsDown).
    """
    return _tile_kind_properties_walkable[tile_kinds]


def get_glyph_map(tile_kinds: np.ndarray) -> np.ndarray:
    return _tile_kind_properties_glyph[tile_kinds]

