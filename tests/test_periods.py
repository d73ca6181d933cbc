"""Calendar ordering and adjacent-period resolution."""

import pytest

from Tribe_Engine.processors.wallet_metrics.core.errors import InvalidPeriod
from Tribe_Engine.processors.wallet_metrics.core.periods import (
    PeriodResolver,
    previous_month,
    sort_periods,
)


def test_sort_is_calendar_not_insertion_order():
    assert sort_periods(["2025-02", "2024-12", "2025-01", "2025-01"]) == [
        "2024-12", "2025-01", "2025-02",
    ]


def test_previous_month_crosses_year():
    assert previous_month("2025-01") == "2024-12"
    assert previous_month("2025-03") == "2025-02"


def test_invalid_period_raises():
    with pytest.raises(InvalidPeriod):
        previous_month("not-a-month")


class TestPeriodResolver:
    def test_adjacent_pairs(self):
        pairs = PeriodResolver.resolve_adjacent_periods(["2025-02", "2024-12", "2025-01"])
        assert pairs == [("2024-12", "2025-01"), ("2025-01", "2025-02")]

    def test_single_period_has_no_pairs(self):
        assert PeriodResolver.resolve_adjacent_periods(["2025-02"]) == []

    def test_lookup_absent_row_is_empty(self, store):
        resolver = PeriodResolver(store)
        assert dict(resolver.lookup_period("Monthly_Revenue", "2020-01")) == {}
        assert not resolver.has_period("Monthly_Revenue", "2020-01")

    def test_lookup_present_row(self, store):
        resolver = PeriodResolver(store)
        assert resolver.lookup_period("Monthly_Revenue", "2025-01")["KES"] == "1,000,000"
