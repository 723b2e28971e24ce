from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer, ties toward +infinity (70.5 -> 71, -0.5 -> 0).
    Python's round() is banker's rounding, which would disagree with the
    scores the web platform already displays on x.5 boundaries.
    """
    return int(math.floor(x + 0.5))


def round_half_up_places(x: float, places: int) -> float:
    """
    Round to `places` decimals, ties away from zero, on the float's exact
    binary value (same result as JS Number.toFixed): 0.125 -> 0.13, while
    2.675 (stored as 2.67499...) -> 2.67.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(x: float, lo: float = 0, hi: float = 100) -> float:
    return lo if x < lo else (hi if x > hi else x)


def clamp_score(x: float) -> int:
    return int(clamp(round_half_up(x), 0, 100))
