from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class FiveNumberSummary:
    min: float = 0.0
    q1: float = 0.0
    median: float = 0.0
    q3: float = 0.0
    max: float = 0.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like the dashboard does: halves go up, not to even."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: float, whole: float, ndigits: int = 0) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 100.0, ndigits)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Sample Pearson coefficient of two equally long series.

    Empty series or a series without variance has no defined correlation;
    that case is reported as 0.0.
    """
    if len(x) != len(y):
        raise ValueError(f"series length mismatch: {len(x)} != {len(y)}")
    n = len(x)
    if n == 0:
        return 0.0

    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = n * sum_xy - sum_x * sum_y
    spread_x = n * sum_x2 - sum_x ** 2
    spread_y = n * sum_y2 - sum_y ** 2
    # constant float series leave rounding noise in the spread terms
    if min(x) == max(x) or min(y) == max(y) or spread_x <= 0 or spread_y <= 0:
        return 0.0
    r = numerator / math.sqrt(spread_x * spread_y)
    return max(-1.0, min(1.0, r))


def five_number_summary(values: Sequence[float]) -> FiveNumberSummary:
    # nearest-rank quartiles (floor(n * p)), no interpolation
    if not values:
        return FiveNumberSummary()
    ordered = sorted(values)
    n = len(ordered)
    return FiveNumberSummary(
        min=ordered[0],
        q1=ordered[int(math.floor(n * 0.25))],
        median=ordered[int(math.floor(n * 0.5))],
        q3=ordered[int(math.floor(n * 0.75))],
        max=ordered[-1],
    )
