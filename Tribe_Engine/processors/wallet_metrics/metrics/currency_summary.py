"""
Currency Summary — all-time transactions, volume and fees per currency,
read from the optional Currency_Summary sheet (long format, one row per
currency). Fees are additionally converted to the base currency.
"""

from __future__ import annotations

from Tribe_Engine.config import SHEET_CURRENCY_SUMMARY

from ..core.cleaning import is_blank
from ..core.columns import ColumnResolver
from ..core.currency import CurrencyConverter
from ..core.diagnostics import Diagnostics
from ..core.rows import read_amount
from ..core.sheets import SheetStore
from ..schemas import CurrencySummaryRow


def calculate_currency_summary(
    store: SheetStore,
    converter: CurrencyConverter,
    diagnostics: Diagnostics | None = None,
) -> list[CurrencySummaryRow]:
    if not store.has_sheet(SHEET_CURRENCY_SUMMARY):
        return []

    df = store.get_sheet(SHEET_CURRENCY_SUMMARY)
    currency_col = ColumnResolver.resolve(df, ColumnResolver.CURRENCY_CANDIDATES)
    if currency_col is None:
        return []
    tx_col = ColumnResolver.resolve(df, ColumnResolver.TRANSACTIONS_CANDIDATES)
    vol_col = ColumnResolver.resolve(df, ColumnResolver.VOLUME_CANDIDATES)
    fees_col = ColumnResolver.resolve(df, ColumnResolver.FEES_CANDIDATES)

    summary: list[CurrencySummaryRow] = []
    for rec in df.to_dict(orient="records"):
        if is_blank(rec[currency_col]):
            continue
        currency = str(rec[currency_col]).strip().upper()
        fees = read_amount(rec, fees_col, SHEET_CURRENCY_SUMMARY, currency, diagnostics)
        summary.append(CurrencySummaryRow(
            currency=currency,
            transactions=read_amount(rec, tx_col, SHEET_CURRENCY_SUMMARY, currency, diagnostics),
            volume=read_amount(rec, vol_col, SHEET_CURRENCY_SUMMARY, currency, diagnostics),
            fees=fees,
            fees_base=converter.maybe_to_base(fees, currency),
        ))
    return summary
