"""
Scoring Helper Functions and Constants

Deterministic seed and pseudo-random primitives shared by every visibility
score, plus the score bands the synthesizer draws from.

Nothing in this module touches ambient random state: the same input always
produces the same output, across requests, restarts and machines.
"""

import math
from dataclasses import dataclass


# ============================================================================
# DETERMINISTIC HASH
# ============================================================================

_UINT32 = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _utf16_units(text: str):
    """Yield UTF-16 code units, the unit browsers hash names with."""
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_to_hash(text: str) -> int:
    """
    Map a string to a non-negative integer seed.

    Polynomial rolling hash (h = h * 31 + unit) with signed 32-bit
    wraparound after every step.

    Args:
        text: Any string (firm or competitor name)

    Returns:
        abs() of the wrapped 32-bit hash, 0 for the empty string
    """
    h = 0
    for unit in _utf16_units(text or ""):
        h = (h * 31 + unit) & _UINT32

    if h & _INT32_SIGN:
        h -= 1 << 32
    return abs(h)


# ============================================================================
# SEEDED PSEUDO-RANDOM
# ============================================================================

def pseudo_random(seed: int, min_value: int, max_value: int) -> int:
    """
    Reproducible integer in [min_value, max_value] derived from a seed.

    Args:
        seed: Integer seed (usually from string_to_hash)
        min_value: Inclusive lower bound
        max_value: Inclusive upper bound

    Returns:
        Integer within the closed range

    Raises:
        ValueError: If min_value > max_value
    """
    if min_value > max_value:
        raise ValueError(
            f"Invalid pseudo-random bounds: min {min_value} > max {max_value}"
        )

    x = math.sin(seed) * 10000
    frac = x - math.floor(x)
    value = math.floor(frac * (max_value - min_value + 1)) + min_value

    # frac is < 1 but the product can round up to the span
    return min(value, max_value)


# ============================================================================
# SCORE BANDS
# ============================================================================

@dataclass(frozen=True)
class ScoreBand:
    """Named closed integer interval a category of score must fall in."""
    name: str
    low: int
    high: int

    def contains(self, score: int) -> bool:
        return self.low <= score <= self.high

    def draw(self, seed: int) -> int:
        """Deterministic score inside the band for a seed."""
        return pseudo_random(seed, self.low, self.high)


CLIENT_BAND = ScoreBand("client", 14, 29)
COMPETITOR_BAND = ScoreBand("competitor", 75, 96)

# Margin range used when forcing the client below the weakest competitor
MIN_ADJUSTMENT_MARGIN = 2
MAX_ADJUSTMENT_MARGIN = 5

# Adjusted client scores never drop below this
SCORE_FLOOR = 5

# Competitors scored per request
MAX_SCORED_COMPETITORS = 8

assert CLIENT_BAND.high <= COMPETITOR_BAND.low - MIN_ADJUSTMENT_MARGIN
