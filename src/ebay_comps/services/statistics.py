from __future__ import annotations

import math
from typing import Iterable, Sequence

from ebay_comps.models import SalesStatistics


def quantile(values: Sequence[float], q: float) -> float:
    """Linear-interpolation quantile over ``values`` (sorted internally).

    ``pos = (n - 1) * q``; the result interpolates between the order statistics
    at ``floor(pos)`` and the next one, or is the last one when there is no next.
    """
    if not values:
        raise ValueError("quantile of an empty sequence")
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"quantile level must be within [0, 1], got {q}")
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    base = math.floor(pos)
    rest = pos - base
    if base + 1 < len(ordered):
        return ordered[base] + rest * (ordered[base + 1] - ordered[base])
    return ordered[base]


def compute_statistics(prices: Iterable[float]) -> SalesStatistics:
    values = list(prices)
    if not values:
        return SalesStatistics(count=0)
    return SalesStatistics(
        count=len(values),
        p25=quantile(values, 0.25),
        median=quantile(values, 0.5),
        p75=quantile(values, 0.75),
    )
