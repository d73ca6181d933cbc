"""
Periods — calendar ordering of year-month keys and adjacent-period lookup.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

import pandas as pd

from .errors import InvalidPeriod
from .sheets import SheetRow, SheetStore

_EMPTY_ROW: SheetRow = MappingProxyType({})


def to_month(period_key: str) -> pd.Period:
    """'2025-02' -> Period('2025-02', 'M'); raises InvalidPeriod otherwise."""
    try:
        return pd.Period(period_key, freq="M")
    except (ValueError, TypeError):
        raise InvalidPeriod(period_key) from None


def previous_month(period_key: str) -> str:
    """The calendar month before *period_key*, as 'YYYY-MM'."""
    return str(to_month(period_key) - 1)


def sort_periods(periods: Iterable[str]) -> list[str]:
    """Distinct period keys sorted by calendar order, not insertion order."""
    return sorted(set(periods), key=to_month)


class PeriodResolver:
    """
    Locates matching rows across sheets for a sequence of periods.

    Usage:
        resolver = PeriodResolver(store)
        for previous, current in resolver.resolve_adjacent_periods(keys):
            row = resolver.lookup_period("Monthly_Revenue", current)
    """

    def __init__(self, store: SheetStore):
        self._store = store

    @staticmethod
    def resolve_adjacent_periods(periods: Iterable[str]) -> list[tuple[str, str]]:
        """One (previous, current) pair per consecutive period, ascending."""
        ordered = sort_periods(periods)
        return list(zip(ordered, ordered[1:]))

    def lookup_period(self, sheet_name: str, period_key: str) -> SheetRow:
        """
        Return the row for *period_key*, or an empty row if the sheet has none.

        An absent row reads as "all fields absent" so growth can still be
        computed against a defined baseline.
        """
        row = self._store.find_row(sheet_name, period_key)
        return row if row is not None else _EMPTY_ROW

    def has_period(self, sheet_name: str, period_key: str) -> bool:
        return self._store.find_row(sheet_name, period_key) is not None
