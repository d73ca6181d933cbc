"""Exchange-rate table and base-currency conversion."""

import pytest

from Tribe_Engine.config import get_settings
from Tribe_Engine.processors.wallet_metrics.core.currency import (
    CurrencyConverter,
    ExchangeRateTable,
)
from Tribe_Engine.processors.wallet_metrics.core.errors import UnknownCurrency


@pytest.fixture
def converter():
    return CurrencyConverter(ExchangeRateTable.from_settings(get_settings()))


class TestCurrencyConverter:
    """to_base / sum_to_base"""

    @pytest.mark.parametrize("amount", [0.0, 1.0, -25.5, 1_200_000.0])
    def test_base_currency_is_identity(self, converter, amount):
        assert converter.to_base(amount, "KES") == amount

    @pytest.mark.parametrize("currency", ["UGX", "NGN", "USD", "CNY"])
    def test_converting_base_amount_again_is_noop(self, converter, currency):
        once = converter.to_base(500.0, currency)
        assert converter.to_base(once, converter.base_currency) == once

    def test_usd_rate(self, converter):
        assert converter.to_base(1000, "USD") == pytest.approx(129382.7)

    def test_inverse_rates(self, converter):
        assert converter.to_base(11.59, "NGN") == pytest.approx(1.0)
        assert converter.to_base(28.4659, "UGX") == pytest.approx(1.0)

    def test_unknown_currency_raises(self, converter):
        usd = converter.to_base(10, "USD")
        with pytest.raises(UnknownCurrency) as exc_info:
            converter.to_base(10, "XYZ")
        assert exc_info.value.currency == "XYZ"
        # earlier results and later conversions are unaffected
        assert converter.to_base(10, "USD") == usd

    def test_sum_to_base_converts_each_once(self, converter):
        total = converter.sum_to_base({"KES": 1_200_000.0, "USD": 1000.0, "NGN": None})
        assert total == pytest.approx(1_329_382.7)

    def test_sum_to_base_all_absent(self, converter):
        assert converter.sum_to_base({"KES": None, "USD": None}) is None

    def test_maybe_to_base(self, converter):
        assert converter.maybe_to_base(None, "USD") is None
        assert converter.maybe_to_base(1.0, "CNY") == pytest.approx(17.80)


class TestExchangeRateTable:
    def test_base_maps_to_one(self):
        table = ExchangeRateTable("KES", {"USD": 129.3827})
        assert table.rate("KES") == 1.0
        assert table.currencies == ("KES", "USD")

    def test_rates_are_read_only(self):
        table = ExchangeRateTable("KES", {"USD": 129.3827})
        with pytest.raises(TypeError):
            table.rates["USD"] = 1.0

    def test_supported_currency_without_rate_is_rejected(self):
        with pytest.raises(UnknownCurrency):
            ExchangeRateTable("KES", {"USD": 129.3827}, currencies=("KES", "USD", "EUR"))

    def test_version_and_order_from_settings(self):
        table = ExchangeRateTable.from_settings(get_settings())
        assert table.version == "2025-02-27"
        assert list(table.as_dict()) == ["KES", "UGX", "NGN", "USD", "CNY"]
