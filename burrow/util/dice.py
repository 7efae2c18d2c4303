"""
Dice rolls against an explicit RNG handle.

Generation code describes most of its random draws as dice ("roll 1d6 and
subtract one"), so these helpers keep that vocabulary without reaching for
the global ``random`` module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from burrow.util.rng import RNG


def roll_d(rng: RNG, sides: int) -> int:
    """Roll a single die: an integer between 1 and ``sides`` inclusive.

    Raises:
        ValueError: If ``sides`` is not a positive integer.
    """
    if not isinstance(sides, int) or sides <= 0:
        raise ValueError("Number of sides must be a positive integer.")
    return rng.randint(1, sides)

