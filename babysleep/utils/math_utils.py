"""
Numeric helpers shared by the analytics and prompt code.
"""

import math


def round_half_up(value) -> int:
    """Round to the nearest integer with .5 going towards +infinity (-2.5 -> -2)."""
    return int(math.floor(value + 0.5))
