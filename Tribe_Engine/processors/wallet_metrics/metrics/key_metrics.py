"""
Key Metrics — headline totals for the designated current period.
"""

from __future__ import annotations

from Tribe_Engine.config import (
    SHEET_REVENUE,
    SHEET_REVENUE_SUMMARY,
    SHEET_TRANSACTION_COUNT,
    SHEET_USER_STATISTICS,
    SHEET_WALLET_BALANCES,
    TOTAL_ROW_KEY,
)

from ..core.currency import CurrencyConverter
from ..core.diagnostics import Diagnostics
from ..core.rows import lookup_metric, read_count, read_currency_amounts
from ..core.sheets import SheetStore
from ..schemas import ActiveUserCounts, KeyMetrics
from .growth import calc_growth


def total_transactions(
    store: SheetStore,
    period: str,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    row = store.find_row(SHEET_TRANSACTION_COUNT, period)
    if row is None:
        return None
    return read_count(row, store, SHEET_TRANSACTION_COUNT, period, diagnostics)


def all_time_transactions(
    store: SheetStore,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    """Grand total from the 'Total' pseudo-row, else the revenue summary sheet."""
    row = store.find_row(SHEET_TRANSACTION_COUNT, TOTAL_ROW_KEY)
    if row is not None:
        count = read_count(row, store, SHEET_TRANSACTION_COUNT, TOTAL_ROW_KEY, diagnostics)
        if count is not None:
            return count
    return lookup_metric(store, SHEET_REVENUE_SUMMARY, "Total Successful Transactions", diagnostics)


def total_revenue_base(
    store: SheetStore,
    converter: CurrencyConverter,
    period: str,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    """
    Every currency of the period's revenue row, each converted once.

    None when the row is missing, holds no non-zero amount, or has an
    unparseable currency cell.
    """
    row = store.find_row(SHEET_REVENUE, period)
    if row is None:
        return None
    amounts = read_currency_amounts(
        row, store.currency_columns(SHEET_REVENUE), SHEET_REVENUE, period, diagnostics,
    )
    if amounts is None:
        return None
    return converter.sum_to_base(amounts)


def total_users(store: SheetStore, diagnostics: Diagnostics | None = None) -> int:
    """'Total Users' from the statistics sheet; falls back to the wallet row count."""
    value = lookup_metric(store, SHEET_USER_STATISTICS, "Total Users", diagnostics)
    if value is not None:
        return int(value)
    return len(store.user_records(SHEET_WALLET_BALANCES))


def calculate_key_metrics(
    store: SheetStore,
    converter: CurrencyConverter,
    current_period: str,
    current_active: ActiveUserCounts,
    previous_active: ActiveUserCounts,
    diagnostics: Diagnostics | None = None,
) -> KeyMetrics:
    return KeyMetrics(
        total_revenue_base=total_revenue_base(store, converter, current_period, diagnostics),
        total_transactions=total_transactions(store, current_period, diagnostics),
        all_time_transactions=all_time_transactions(store, diagnostics),
        total_users=total_users(store, diagnostics),
        active_users=current_active.distinct_users,
        active_users_currency_sum=current_active.currency_sum,
        previous_active_users=previous_active.distinct_users,
        active_user_growth=calc_growth(
            current_active.distinct_users, previous_active.distinct_users,
        ),
    )
