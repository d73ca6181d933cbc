"""
Row readers — typed access to cells of a SheetRow.

Every reader returns None for an absent cell and reports unparseable
text through the diagnostics channel instead of failing the run.
Currency-amount cells holding zero are absent too; a total built from
a row with an unparseable currency cell is unavailable (None), never a
partial sum.
"""

from __future__ import annotations

from .cleaning import is_blank, try_parse_amount
from .columns import ColumnResolver
from .diagnostics import Diagnostics, IssueKind, report
from .sheets import SheetRow, SheetStore


def read_cell(
    row: SheetRow,
    column: str | None,
    sheet: str,
    where: str,
    diagnostics: Diagnostics | None = None,
) -> tuple[float | None, bool]:
    """
    Parse one cell.

    Returns:
        (amount, ok): ok is False when the cell held unparseable text.
        *where* names the row (period, metric, currency) in the report.
    """
    if column is None or column not in row:
        return None, True
    amount, ok = try_parse_amount(row[column])
    if not ok:
        report(
            diagnostics, IssueKind.UNPARSEABLE_CELL, sheet,
            f"{where} column {column}: {row[column]!r}",
        )
    return amount, ok


def read_amount(
    row: SheetRow,
    column: str | None,
    sheet: str,
    where: str,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    return read_cell(row, column, sheet, where, diagnostics)[0]


def read_currency_cell(
    row: SheetRow,
    currency: str,
    sheet: str,
    where: str,
    diagnostics: Diagnostics | None = None,
) -> tuple[float | None, bool]:
    """read_cell for a native currency amount; a zero cell is absent."""
    amount, ok = read_cell(row, currency, sheet, where, diagnostics)
    if amount == 0:
        amount = None
    return amount, ok


def read_currency_amounts(
    row: SheetRow,
    currency_columns: list[str],
    sheet: str,
    where: str,
    diagnostics: Diagnostics | None = None,
) -> dict[str, float | None] | None:
    """
    {currency: native amount or None} for every currency column of the row.

    Returns None when any currency cell is unparseable.
    """
    amounts: dict[str, float | None] = {}
    complete = True
    for currency in currency_columns:
        amount, ok = read_currency_cell(row, currency, sheet, where, diagnostics)
        complete = complete and ok
        amounts[currency] = amount
    return amounts if complete else None


def read_count(
    row: SheetRow,
    store: SheetStore,
    sheet: str,
    where: str,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    """
    Cross-currency count of a wide-format row.

    The precomputed total column is the source of truth when present and
    filled; otherwise the currency columns are summed.
    """
    total = read_amount(row, store.total_column(sheet), sheet, where, diagnostics)
    if total is not None:
        return total
    amounts = read_currency_amounts(row, store.currency_columns(sheet), sheet, where, diagnostics)
    if amounts is None:
        return None
    present = [a for a in amounts.values() if a is not None]
    return sum(present) if present else None


def lookup_metric(
    store: SheetStore,
    sheet: str,
    metric: str,
    diagnostics: Diagnostics | None = None,
) -> float | None:
    """Value of *metric* in a two-column (Metric, Value) summary sheet, or None."""
    if not store.has_sheet(sheet):
        return None
    df = store.get_sheet(sheet)
    metric_col = ColumnResolver.resolve(df, ColumnResolver.METRIC_CANDIDATES)
    value_col = ColumnResolver.resolve(df, ColumnResolver.VALUE_CANDIDATES)
    if metric_col is None or value_col is None:
        report(diagnostics, IssueKind.MISSING_CELL, sheet, "no Metric/Value columns")
        return None
    for rec in df.to_dict(orient="records"):
        name = rec[metric_col]
        if not is_blank(name) and str(name).strip() == metric:
            return read_amount(rec, value_col, sheet, metric, diagnostics)
    return None
