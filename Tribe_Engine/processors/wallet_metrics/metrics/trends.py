"""
Monthly Trends — one point per period of the transaction-count sheet,
joined with revenue, volume and (when exported) monthly active users,
plus the month-over-month growth series derived from those points.

Missing joined rows contribute zero for that metric at that period; a
row with an unparseable amount makes that value unavailable (None).
"""

from __future__ import annotations

import logging

from Tribe_Engine.config import (
    SHEET_MONTHLY_ACTIVE_USERS,
    SHEET_REVENUE,
    SHEET_TRANSACTION_COUNT,
    SHEET_VOLUME,
    TOTAL_ROW_KEY,
)

from ..core.currency import CurrencyConverter
from ..core.diagnostics import Diagnostics, IssueKind, report
from ..core.periods import PeriodResolver, sort_periods
from ..core.rows import read_count, read_currency_amounts
from ..core.sheets import SheetStore
from ..schemas import GrowthSeries, TrendPoint
from .growth import growth_point

logger = logging.getLogger(__name__)


def trend_periods(store: SheetStore) -> list[str]:
    """Distinct non-total periods of the transaction-count sheet, calendar order."""
    keys = [k for k in store.period_keys(SHEET_TRANSACTION_COUNT) if k != TOTAL_ROW_KEY]
    return sort_periods(keys)


def _base_sum(
    store: SheetStore,
    resolver: PeriodResolver,
    converter: CurrencyConverter,
    sheet: str,
    period: str,
    diagnostics: Diagnostics | None,
) -> float | None:
    if not resolver.has_period(sheet, period):
        report(diagnostics, IssueKind.MISSING_ROW, sheet, f"no row for {period}")
        return 0.0
    row = resolver.lookup_period(sheet, period)
    amounts = read_currency_amounts(row, store.currency_columns(sheet), sheet, period, diagnostics)
    if amounts is None:
        return None
    return converter.sum_to_base(amounts) or 0.0


def build_monthly_trends(
    store: SheetStore,
    converter: CurrencyConverter,
    diagnostics: Diagnostics | None = None,
) -> list[TrendPoint]:
    resolver = PeriodResolver(store)
    has_mau = store.has_sheet(SHEET_MONTHLY_ACTIVE_USERS)
    points: list[TrendPoint] = []

    for period in trend_periods(store):
        tx_row = resolver.lookup_period(SHEET_TRANSACTION_COUNT, period)
        tx_count = read_count(tx_row, store, SHEET_TRANSACTION_COUNT, period, diagnostics)

        active = None
        if has_mau:
            mau_row = resolver.lookup_period(SHEET_MONTHLY_ACTIVE_USERS, period)
            active = read_count(mau_row, store, SHEET_MONTHLY_ACTIVE_USERS, period, diagnostics) or 0.0

        points.append(TrendPoint(
            period=period,
            transaction_count=tx_count,
            revenue_base=_base_sum(store, resolver, converter, SHEET_REVENUE, period, diagnostics),
            volume_base=_base_sum(store, resolver, converter, SHEET_VOLUME, period, diagnostics),
            active_users=active,
        ))

    logger.debug("Built %d monthly trend points", len(points))
    return points


def build_growth_series(trends: list[TrendPoint]) -> GrowthSeries:
    """
    Month-over-month growth for users, revenue and volume.

    Entry i of each series compares the (i + 1)-th period against the
    i-th, in calendar order. A point with an unavailable side is itself
    unavailable.
    """
    by_period = {point.period: point for point in trends}
    pairs = [
        (by_period[prev], by_period[cur])
        for prev, cur in PeriodResolver.resolve_adjacent_periods(by_period)
    ]
    return GrowthSeries(
        users=[
            growth_point(cur.period, prev.period, cur.active_users, prev.active_users, require_both=True)
            for prev, cur in pairs
        ],
        revenue=[
            growth_point(cur.period, prev.period, cur.revenue_base, prev.revenue_base, require_both=True)
            for prev, cur in pairs
        ],
        volume=[
            growth_point(cur.period, prev.period, cur.volume_base, prev.volume_base, require_both=True)
            for prev, cur in pairs
        ],
    )
