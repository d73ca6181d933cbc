"""
Growth — the single growth-percent policy used by every series.

    previous > 0                 -> (current - previous) / previous * 100
    previous <= 0, current > 0   -> 100   (first activity after a zero baseline)
    otherwise                    -> 0, flagged as having no signal

Absent values (None) count as zero, except that two absent values give
an unavailable (None) growth rather than 0.
"""

from __future__ import annotations

from ..schemas import GrowthPoint, GrowthValue

ZERO_BASELINE_GROWTH = 100.0


def calc_growth(current: float | None, previous: float | None) -> GrowthValue:
    if current is None and previous is None:
        return GrowthValue(percent=None, has_signal=False)

    cur = current or 0.0
    prev = previous or 0.0

    if prev > 0:
        return GrowthValue(percent=(cur - prev) / prev * 100, has_signal=True)
    if cur > 0:
        return GrowthValue(percent=ZERO_BASELINE_GROWTH, has_signal=True)
    return GrowthValue(percent=0.0, has_signal=False)


def growth_point(
    period: str,
    previous_period: str,
    current: float | None,
    previous: float | None,
    require_both: bool = False,
) -> GrowthPoint:
    """With *require_both*, a single absent side gives unavailable growth."""
    if require_both and (current is None or previous is None):
        growth = GrowthValue(percent=None, has_signal=False)
    else:
        growth = calc_growth(current, previous)
    return GrowthPoint(
        period=period,
        previous_period=previous_period,
        current=current,
        previous=previous,
        percent=growth.percent,
        has_signal=growth.has_signal,
    )
