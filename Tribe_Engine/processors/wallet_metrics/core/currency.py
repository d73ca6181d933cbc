"""
Currency — fixed exchange-rate table and base-currency conversion.

Rates are static, externally supplied configuration: a decimal multiplier
converting one unit of a currency into the base currency. They are never
derived from the data, and the table's version travels with every
snapshot that used it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from Tribe_Engine.config import EngineSettings

from .errors import UnknownCurrency


@dataclass(frozen=True)
class ExchangeRateTable:
    base_currency: str
    rates: Mapping[str, float]
    version: str = ""
    currencies: tuple[str, ...] = field(default=())

    def __post_init__(self):
        rates = {code.upper(): float(rate) for code, rate in self.rates.items()}
        rates[self.base_currency] = 1.0
        object.__setattr__(self, "rates", MappingProxyType(rates))
        if not self.currencies:
            ordered = [self.base_currency] + sorted(c for c in rates if c != self.base_currency)
            object.__setattr__(self, "currencies", tuple(ordered))
        for code in self.currencies:
            if code not in rates:
                raise UnknownCurrency(code)

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> "ExchangeRateTable":
        return cls(
            base_currency=settings.BASE_CURRENCY,
            rates=settings.EXCHANGE_RATES,
            version=settings.RATES_VERSION,
            currencies=tuple(settings.CURRENCIES),
        )

    def rate(self, currency: str) -> float:
        try:
            return self.rates[currency]
        except KeyError:
            raise UnknownCurrency(currency) from None

    def __contains__(self, currency: str) -> bool:
        return currency in self.rates

    def as_dict(self) -> dict[str, float]:
        """Rates in supported-currency order, then any extra configured codes."""
        ordered = {c: self.rates[c] for c in self.currencies if c in self.rates}
        for code in sorted(self.rates):
            ordered.setdefault(code, self.rates[code])
        return ordered


class CurrencyConverter:
    """
    Converts native-currency amounts into the base currency.

    Usage:
        converter = CurrencyConverter(ExchangeRateTable("KES", {"USD": 129.3827}))
        converter.to_base(1000, "USD")   # -> 129382.7
    """

    def __init__(self, table: ExchangeRateTable):
        self._table = table

    @property
    def table(self) -> ExchangeRateTable:
        return self._table

    @property
    def base_currency(self) -> str:
        return self._table.base_currency

    @property
    def supported_currencies(self) -> tuple[str, ...]:
        return self._table.currencies

    def to_base(self, amount: float, currency: str) -> float:
        """Convert *amount* of *currency* into the base currency."""
        if currency == self._table.base_currency:
            return amount
        return amount * self._table.rate(currency)

    def maybe_to_base(self, amount: float | None, currency: str) -> float | None:
        """to_base that passes an absent amount through as None."""
        if amount is None:
            return None
        return self.to_base(amount, currency)

    def sum_to_base(self, amounts: Mapping[str, float | None]) -> float | None:
        """
        Sum a {currency: amount} mapping in base currency.

        Each non-absent amount is converted exactly once. Returns None
        when every amount is absent.
        """
        total = None
        for currency, amount in amounts.items():
            if amount is None:
                continue
            total = (total or 0.0) + self.to_base(amount, currency)
        return total
