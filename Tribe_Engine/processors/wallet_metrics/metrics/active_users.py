"""
Active Users — who transacted inside a time window, overall and per currency.

Two window policies are supported as named strategies:

    CalendarWindow  (default) — the whole calendar month of the current
                    period; the previous window is the month before.
    RollingWindow   — the N days (default 30) up to a reference instant;
                    the previous window is the N days before that,
                    non-overlapping.

The exposed total is the count of DISTINCT active users. The sum of the
per-currency counts is reported separately as ``currency_sum`` because
a user holding several currencies is counted once per currency there.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

import pandas as pd

from ..core.sheets import UserRecord
from ..schemas import ActiveUserCounts


@dataclass(frozen=True)
class Window:
    """Half-open interval [start, end)."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime | None) -> bool:
        return moment is not None and self.start <= moment < self.end


class CalendarWindow:
    """Active within the named calendar month (YYYY-MM)."""

    name = "calendar"

    def __init__(self, period: str):
        self.period = period

    def current(self) -> Window:
        month = pd.Period(self.period, freq="M")
        return Window(
            start=month.start_time.to_pydatetime(),
            end=(month + 1).start_time.to_pydatetime(),
        )

    def previous(self) -> Window:
        month = pd.Period(self.period, freq="M") - 1
        return Window(
            start=month.start_time.to_pydatetime(),
            end=(month + 1).start_time.to_pydatetime(),
        )


class RollingWindow:
    """Active within the *days* days before the reference instant *as_of*."""

    name = "rolling"

    def __init__(self, as_of: datetime, days: int = 30):
        if days <= 0:
            raise ValueError("Rolling window length must be positive")
        self.as_of = as_of
        self.days = days

    def current(self) -> Window:
        # end is the instant just after as_of so a transaction at as_of counts
        end = self.as_of + timedelta(microseconds=1)
        return Window(start=self.as_of - timedelta(days=self.days), end=end)

    def previous(self) -> Window:
        cur = self.current()
        return Window(start=cur.start - timedelta(days=self.days), end=cur.start)


class ActiveUserCounter:
    """
    Counts active users per window.

    Usage:
        counter = ActiveUserCounter(["KES", "UGX", "NGN", "USD", "CNY"])
        counts = counter.count(users, CalendarWindow("2025-02").current())
    """

    def __init__(self, currencies: Sequence[str]):
        self._currencies = tuple(currencies)

    def active_users(self, users: Iterable[UserRecord], window: Window) -> list[UserRecord]:
        return [u for u in users if window.contains(u.last_transaction)]

    def count(self, users: Iterable[UserRecord], window: Window) -> ActiveUserCounts:
        active = self.active_users(users, window)
        by_currency = {
            currency: sum(1 for u in active if u.holds(currency))
            for currency in self._currencies
        }
        return ActiveUserCounts(
            window_start=window.start,
            window_end=window.end,
            distinct_users=len({u.user_id for u in active}),
            currency_sum=sum(by_currency.values()),
            by_currency=by_currency,
        )
