"""Key metrics, monthly trends, growth series, MTD table and currency summary."""

import pytest

from Tribe_Engine.config import get_settings
from Tribe_Engine.processors.wallet_metrics.core.currency import (
    CurrencyConverter,
    ExchangeRateTable,
)
from Tribe_Engine.processors.wallet_metrics.core.diagnostics import IssueKind
from Tribe_Engine.processors.wallet_metrics.metrics.active_users import (
    ActiveUserCounter,
    CalendarWindow,
)
from Tribe_Engine.processors.wallet_metrics.metrics.currency_summary import calculate_currency_summary
from Tribe_Engine.processors.wallet_metrics.metrics.key_metrics import (
    all_time_transactions,
    calculate_key_metrics,
    total_revenue_base,
    total_transactions,
    total_users,
)
from Tribe_Engine.processors.wallet_metrics.metrics.mtd import calculate_mtd_growth
from Tribe_Engine.processors.wallet_metrics.metrics.trends import (
    build_growth_series,
    build_monthly_trends,
)


@pytest.fixture
def converter():
    return CurrencyConverter(ExchangeRateTable.from_settings(get_settings()))


@pytest.fixture
def active(store, converter):
    users = store.user_records("Wallet_Balances")
    counter = ActiveUserCounter(converter.supported_currencies)
    window = CalendarWindow("2025-02")
    return counter.count(users, window.current()), counter.count(users, window.previous())


class TestKeyMetrics:
    def test_precomputed_total_column_is_used(self, store):
        assert total_transactions(store, "2025-02") == 150

    def test_sums_currencies_without_total_column(self, records, make_store):
        for row in records["Monthly_Transaction_Count"]:
            row.pop("Total", None)
        store = make_store(records)
        assert total_transactions(store, "2025-02") == 120 + 20 + 4 + 5 + 1

    def test_revenue_in_base_currency(self, store, converter):
        assert total_revenue_base(store, converter, "2025-02") == pytest.approx(1_329_382.7)

    def test_missing_period_is_unavailable(self, store, converter):
        assert total_transactions(store, "2030-01") is None
        assert total_revenue_base(store, converter, "2030-01") is None

    def test_all_time_from_total_row(self, store):
        assert all_time_transactions(store) == 347

    def test_all_time_falls_back_to_revenue_summary(self, records, make_store):
        records["Monthly_Transaction_Count"].pop()
        records["Revenue_Summary"] = [{"Metric": "Total Successful Transactions", "Value": "9,999"}]
        assert all_time_transactions(make_store(records)) == 9999

    def test_total_users_from_statistics(self, store):
        assert total_users(store) == 1234

    def test_total_users_falls_back_to_wallet_rows(self, records, make_store):
        del records["User_Statistics"]
        assert total_users(make_store(records)) == 5

    def test_active_user_fields_are_explicit(self, store, converter, active):
        metrics = calculate_key_metrics(store, converter, "2025-02", *active)

        assert metrics.active_users == 3
        assert metrics.active_users_currency_sum == 4
        assert metrics.previous_active_users == 1
        assert metrics.active_user_growth.percent == pytest.approx(200)


class TestMonthlyTrends:
    def test_one_point_per_distinct_non_total_period(self, store, converter):
        trends = build_monthly_trends(store, converter)
        assert [p.period for p in trends] == ["2024-12", "2025-01", "2025-02"]

    def test_point_values(self, store, converter):
        point = build_monthly_trends(store, converter)[-1]

        assert point.transaction_count == 150
        assert point.revenue_base == pytest.approx(1_329_382.7)
        assert point.volume_base == pytest.approx(15000 + 1000)
        assert point.active_users == 50

    def test_volume_is_converted_per_currency_not_taken_from_total(self, store, converter):
        jan = build_monthly_trends(store, converter)[1]
        assert jan.volume_base == pytest.approx(11000)

    def test_missing_joined_rows_contribute_zero(self, records, make_store, converter, diagnostics):
        records["Monthly_Revenue"] = [r for r in records["Monthly_Revenue"] if r["YearMonth"] != "2025-01"]
        trends = build_monthly_trends(make_store(records), converter, diagnostics)

        assert trends[1].revenue_base == 0.0
        missing = diagnostics.of_kind(IssueKind.MISSING_ROW)
        assert any(i.sheet == "Monthly_Revenue" and "2025-01" in i.detail for i in missing)

    def test_active_users_unavailable_without_sheet(self, records, make_store, converter):
        del records["Monthly_Active_Users"]
        trends = build_monthly_trends(make_store(records), converter)
        assert all(p.active_users is None for p in trends)


class TestGrowthSeries:
    def test_length_is_trend_length_minus_one(self, store, converter):
        trends = build_monthly_trends(store, converter)
        series = build_growth_series(trends)

        for dimension in (series.users, series.revenue, series.volume):
            assert len(dimension) == len(trends) - 1

    def test_points_reference_adjacent_periods(self, store, converter):
        series = build_growth_series(build_monthly_trends(store, converter))

        assert [(p.previous_period, p.period) for p in series.revenue] == [
            ("2024-12", "2025-01"), ("2025-01", "2025-02"),
        ]

    def test_revenue_growth(self, store, converter):
        revenue = build_growth_series(build_monthly_trends(store, converter)).revenue

        assert revenue[0].percent == 100          # zero baseline in 2024-12
        assert round(revenue[1].percent, 2) == 32.94

    def test_volume_and_user_growth(self, store, converter):
        series = build_growth_series(build_monthly_trends(store, converter))

        assert series.volume[0].percent == pytest.approx(120)
        assert series.volume[1].percent == pytest.approx(100 * 5000 / 11000)
        assert series.users[0].percent == 100
        assert series.users[1].percent == pytest.approx(25)

    def test_user_growth_unavailable_without_sheet(self, records, make_store, converter):
        del records["Monthly_Active_Users"]
        series = build_growth_series(build_monthly_trends(make_store(records), converter))

        assert all(p.percent is None and not p.has_signal for p in series.users)


class TestMtdGrowth:
    @pytest.fixture
    def table(self, store, converter, active):
        rows = calculate_mtd_growth(store, converter, "2025-02", "2025-01", *active)
        return {row.currency: row for row in rows}

    def test_one_row_per_supported_currency_in_order(self, store, converter, active):
        rows = calculate_mtd_growth(store, converter, "2025-02", "2025-01", *active)
        assert [r.currency for r in rows] == ["KES", "UGX", "NGN", "USD", "CNY"]

    def test_base_currency_row(self, table):
        kes = table["KES"]
        assert kes.exchange_rate == 1.0
        assert kes.transaction_count_growth.percent == pytest.approx(20)
        assert kes.transaction_volume_growth.percent == pytest.approx(50)
        assert kes.revenue_growth.percent == pytest.approx(20)
        assert kes.user_growth.percent == 100
        assert kes.volume_base == 15000

    def test_native_growth_with_base_volume(self, table):
        ngn = table["NGN"]
        assert ngn.transaction_volume_growth.percent == 100
        assert ngn.current_transaction_volume == 11590
        assert ngn.volume_base == pytest.approx(1000)
        assert ngn.previous_volume_base is None

    def test_absent_revenue_is_unavailable_not_zero(self, table):
        ngn = table["NGN"]
        assert ngn.current_revenue is None
        assert ngn.revenue_growth.percent is None
        assert not ngn.revenue_growth.has_signal

    def test_drop_to_absent(self, table):
        ugx = table["UGX"]
        assert ugx.transaction_volume_growth.percent == pytest.approx(-100)
        assert ugx.previous_volume_base == pytest.approx(1000)

    def test_foreign_revenue_converted(self, table):
        usd = table["USD"]
        assert usd.revenue_base == pytest.approx(129_382.7)
        assert usd.transaction_count_growth.percent == 0
        assert usd.transaction_count_growth.has_signal

    def test_no_activity_currency(self, table):
        cny = table["CNY"]
        assert cny.user_growth.percent == 0
        assert not cny.user_growth.has_signal
        assert cny.transaction_count_growth.percent == 100


class TestCurrencySummary:
    def test_rows_with_base_fees(self, store, converter):
        rows = {r.currency: r for r in calculate_currency_summary(store, converter)}

        assert rows["KES"].transactions == 1000
        assert rows["KES"].fees_base == 2_200_000
        assert rows["USD"].fees_base == pytest.approx(129_382.7)

    def test_absent_sheet_gives_empty_summary(self, records, make_store, converter):
        del records["Currency_Summary"]
        assert calculate_currency_summary(make_store(records), converter) == []
