"""
SheetStore — read-only holder for the parsed sheets of one input snapshot.

One store is built per aggregation run and never mutated afterwards;
concurrent runs each get their own store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

import pandas as pd

from Tribe_Engine.config import TOTAL_ROW_KEY

from .cleaning import (
    is_blank,
    normalize_period_key,
    parse_timestamp,
    strip_headers,
    try_parse_amount,
)
from .columns import ColumnResolver
from .diagnostics import Diagnostics, IssueKind, report
from .errors import MissingSheet

logger = logging.getLogger(__name__)

SheetRow = Mapping[str, object]


@dataclass(frozen=True)
class UserRecord:
    """One wallet holder: last activity plus per-currency balances (None = blank)."""
    user_id: str
    last_transaction: datetime | None
    balances: Mapping[str, float | None] = field(default_factory=dict)

    def holds(self, currency: str) -> bool:
        """True if the user has a non-zero, non-blank indicator for *currency*."""
        amount = self.balances.get(currency)
        return amount is not None and amount != 0


class SheetStore:
    """
    Named sheets of one workbook snapshot.

    Usage:
        store = SheetStore({"Monthly_Revenue": df, ...})
        row = store.find_row("Monthly_Revenue", "2025-02")
    """

    def __init__(
        self,
        sheets: Mapping[str, pd.DataFrame],
        diagnostics: Diagnostics | None = None,
    ):
        self._sheets: dict[str, pd.DataFrame] = {
            name: strip_headers(df) for name, df in sheets.items()
        }
        self._diagnostics = diagnostics
        self._period_index: dict[str, dict[str, int]] = {}
        self._user_records: dict[str, tuple[UserRecord, ...]] = {}

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def diagnostics(self) -> Diagnostics | None:
        return self._diagnostics

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    def has_sheet(self, name: str) -> bool:
        return name in self._sheets

    def get_sheet(self, name: str) -> pd.DataFrame:
        """Return a copy of sheet *name*; raises MissingSheet if absent."""
        if name not in self._sheets:
            raise MissingSheet(name)
        return self._sheets[name].copy()

    def rows(self, name: str) -> list[SheetRow]:
        """Return sheet *name* as a list of read-only row mappings."""
        df = self.get_sheet(name)
        return [MappingProxyType(rec) for rec in df.to_dict(orient="records")]

    def period_column(self, name: str) -> str | None:
        df = self._sheets.get(name)
        if df is None:
            raise MissingSheet(name)
        return ColumnResolver.resolve(df, ColumnResolver.PERIOD_CANDIDATES)

    def find_row(self, sheet_name: str, period_key: str) -> SheetRow | None:
        """
        Return the first row of *sheet_name* whose period equals *period_key*.

        Duplicate keys are reported as data-quality issues when the sheet
        is first indexed; the first occurrence wins.
        """
        index = self._index_for(sheet_name)
        pos = index.get(period_key)
        if pos is None:
            return None
        record = self._sheets[sheet_name].iloc[pos].to_dict()
        return MappingProxyType(record)

    def period_keys(self, sheet_name: str) -> list[str]:
        """Distinct period keys of *sheet_name* in sheet order (the total pseudo-row included)."""
        return list(self._index_for(sheet_name))

    def total_column(self, name: str) -> str | None:
        df = self._sheets.get(name)
        if df is None:
            raise MissingSheet(name)
        return ColumnResolver.resolve(df, ColumnResolver.TOTAL_CANDIDATES)

    def currency_columns(self, name: str) -> list[str]:
        """Wide-format currency columns of *name* (period and total columns excluded)."""
        df = self._sheets.get(name)
        if df is None:
            raise MissingSheet(name)
        return ColumnResolver.currency_columns(
            df, exclude=(self.period_column(name), self.total_column(name)),
        )

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def user_records(self, sheet_name: str) -> tuple[UserRecord, ...]:
        """Parse *sheet_name* (wallet balances) into UserRecords, once."""
        if sheet_name in self._user_records:
            return self._user_records[sheet_name]

        df = self.get_sheet(sheet_name)
        last_col = ColumnResolver.resolve(df, ColumnResolver.LAST_TRANSACTION_CANDIDATES)
        id_col = ColumnResolver.resolve(df, ColumnResolver.USER_ID_CANDIDATES)
        currency_cols = ColumnResolver.currency_columns(df, exclude=(last_col, id_col))

        if last_col is None:
            report(
                self._diagnostics, IssueKind.MISSING_CELL, sheet_name,
                "no last-transaction column; every user is treated as inactive",
            )

        records: list[UserRecord] = []
        for pos, rec in enumerate(df.to_dict(orient="records")):
            user_id = str(rec[id_col]) if id_col and not is_blank(rec[id_col]) else f"row-{pos}"

            last_tx = None
            if last_col is not None:
                raw = rec[last_col]
                last_tx = parse_timestamp(raw)
                if last_tx is None and not is_blank(raw):
                    report(
                        self._diagnostics, IssueKind.UNPARSEABLE_TIMESTAMP, sheet_name,
                        f"user {user_id}: {raw!r}",
                    )

            balances: dict[str, float | None] = {}
            for col in currency_cols:
                amount, ok = try_parse_amount(rec[col])
                if not ok:
                    report(
                        self._diagnostics, IssueKind.UNPARSEABLE_CELL, sheet_name,
                        f"user {user_id} column {col}: {rec[col]!r}",
                    )
                balances[col] = amount

            records.append(UserRecord(
                user_id=user_id,
                last_transaction=last_tx,
                balances=MappingProxyType(balances),
            ))

        logger.debug("Parsed %d user records from %s", len(records), sheet_name)
        self._user_records[sheet_name] = tuple(records)
        return self._user_records[sheet_name]

    # ------------------------------------------------------------------
    # Internal: period index
    # ------------------------------------------------------------------

    def _index_for(self, sheet_name: str) -> dict[str, int]:
        if sheet_name in self._period_index:
            return self._period_index[sheet_name]

        df = self.get_sheet(sheet_name)
        period_col = self.period_column(sheet_name)
        index: dict[str, int] = {}

        if period_col is None:
            report(
                self._diagnostics, IssueKind.MISSING_CELL, sheet_name,
                "no period column found; sheet contributes no periods",
            )
            self._period_index[sheet_name] = index
            return index

        for pos, raw in enumerate(df[period_col].tolist()):
            if not is_blank(raw) and str(raw).strip() == TOTAL_ROW_KEY:
                key = TOTAL_ROW_KEY
            else:
                key = normalize_period_key(raw)
            if key is None:
                if not is_blank(raw):
                    report(
                        self._diagnostics, IssueKind.INVALID_PERIOD_KEY, sheet_name,
                        f"row {pos}: {raw!r} is not a YYYY-MM period",
                    )
                continue
            if key in index:
                report(
                    self._diagnostics, IssueKind.DUPLICATE_PERIOD_ROW, sheet_name,
                    f"period {key} repeated at row {pos}; keeping row {index[key]}",
                )
                continue
            index[key] = pos

        self._period_index[sheet_name] = index
        return index
