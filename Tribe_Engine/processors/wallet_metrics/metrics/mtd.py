"""
Month-to-date growth by currency — current vs previous designated period.

Each currency is computed independently (no cross-currency aggregation).
Growth rates are always computed on native-currency amounts; the
base-currency volume and revenue are reported alongside for comparison.
Zero cells are absent; an unparseable cell makes that growth unavailable.
"""

from __future__ import annotations

from Tribe_Engine.config import SHEET_REVENUE, SHEET_TRANSACTION_COUNT, SHEET_VOLUME

from ..core.currency import CurrencyConverter
from ..core.diagnostics import Diagnostics
from ..core.periods import PeriodResolver
from ..core.rows import read_currency_cell
from ..core.sheets import SheetStore
from ..schemas import ActiveUserCounts, CurrencyGrowthRow, GrowthValue
from .growth import calc_growth


def _pair(
    resolver: PeriodResolver,
    sheet: str,
    currency: str,
    current_period: str,
    previous_period: str,
    diagnostics: Diagnostics | None,
) -> tuple[float | None, float | None, GrowthValue]:
    current, cur_ok = read_currency_cell(
        resolver.lookup_period(sheet, current_period), currency, sheet, current_period, diagnostics,
    )
    previous, prev_ok = read_currency_cell(
        resolver.lookup_period(sheet, previous_period), currency, sheet, previous_period, diagnostics,
    )
    if cur_ok and prev_ok:
        growth = calc_growth(current, previous)
    else:
        growth = GrowthValue(percent=None, has_signal=False)
    return current, previous, growth


def calculate_mtd_growth(
    store: SheetStore,
    converter: CurrencyConverter,
    current_period: str,
    previous_period: str,
    current_active: ActiveUserCounts,
    previous_active: ActiveUserCounts,
    diagnostics: Diagnostics | None = None,
) -> list[CurrencyGrowthRow]:
    """
    One row per supported currency, in configured order.

    Returns:
        [
          CurrencyGrowthRow(currency="KES", exchange_rate=1.0,
                            transaction_count_growth=GrowthValue(percent=12.5, ...),
                            volume_base=..., user_growth=..., ...),
          ...
        ]
    """
    resolver = PeriodResolver(store)
    rows: list[CurrencyGrowthRow] = []

    for currency in converter.supported_currencies:
        cur_tx, prev_tx, tx_growth = _pair(
            resolver, SHEET_TRANSACTION_COUNT, currency, current_period, previous_period, diagnostics,
        )
        cur_vol, prev_vol, vol_growth = _pair(
            resolver, SHEET_VOLUME, currency, current_period, previous_period, diagnostics,
        )
        cur_rev, prev_rev, rev_growth = _pair(
            resolver, SHEET_REVENUE, currency, current_period, previous_period, diagnostics,
        )
        cur_users = current_active.by_currency.get(currency, 0)
        prev_users = previous_active.by_currency.get(currency, 0)

        rows.append(CurrencyGrowthRow(
            currency=currency,
            exchange_rate=converter.to_base(1.0, currency),

            current_transaction_count=cur_tx,
            previous_transaction_count=prev_tx,
            transaction_count_growth=tx_growth,

            current_transaction_volume=cur_vol,
            previous_transaction_volume=prev_vol,
            transaction_volume_growth=vol_growth,
            volume_base=converter.maybe_to_base(cur_vol, currency),
            previous_volume_base=converter.maybe_to_base(prev_vol, currency),

            current_revenue=cur_rev,
            previous_revenue=prev_rev,
            revenue_growth=rev_growth,
            revenue_base=converter.maybe_to_base(cur_rev, currency),
            previous_revenue_base=converter.maybe_to_base(prev_rev, currency),

            current_active_users=cur_users,
            previous_active_users=prev_users,
            user_growth=calc_growth(cur_users, prev_users),
        ))

    return rows
