"""
Engine configuration — settings loaded from the environment plus the
static tables (sheet names, default exchange rates) every run relies on.

Environment variables use the ``TRIBE_`` prefix, e.g.::

    TRIBE_CURRENT_PERIOD=2025-02
    TRIBE_ACTIVE_WINDOW_POLICY=rolling
    TRIBE_CURRENCIES='["KES", "USD", "UGX"]'
    TRIBE_EXCHANGE_RATES='{"USD": 129.3827, "UGX": 0.0351}'
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- SHEET NAMES (as exported by the finance workbook) ---
SHEET_TRANSACTION_COUNT = "Monthly_Transaction_Count"
SHEET_REVENUE = "Monthly_Revenue"
SHEET_VOLUME = "Monthly_Transaction_Volume"
SHEET_WALLET_BALANCES = "Wallet_Balances"
SHEET_USER_STATISTICS = "User_Statistics"
SHEET_MONTHLY_ACTIVE_USERS = "Monthly_Active_Users"
SHEET_CURRENCY_SUMMARY = "Currency_Summary"
SHEET_REVENUE_SUMMARY = "Revenue_Summary"

REQUIRED_SHEETS = [
    SHEET_TRANSACTION_COUNT,
    SHEET_REVENUE,
    SHEET_VOLUME,
    SHEET_WALLET_BALANCES,
]

# Pseudo-period row carrying the grand total in monthly sheets
TOTAL_ROW_KEY = "Total"

# --- EXCHANGE RATES (1 unit of currency -> base currency) ---
DEFAULT_BASE_CURRENCY = "KES"
DEFAULT_CURRENCIES = ["KES", "UGX", "NGN", "USD", "CNY"]
DEFAULT_EXCHANGE_RATES = {
    "UGX": 1 / 28.4659,
    "NGN": 1 / 11.59,
    "USD": 129.3827,
    "CNY": 17.80,
}
DEFAULT_RATES_VERSION = "2025-02-27"

WINDOW_POLICIES = ("calendar", "rolling")

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class EngineSettings(BaseSettings):
    """Settings consumed by one metrics run."""

    model_config = SettingsConfigDict(
        env_prefix="TRIBE_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Currency configuration
    BASE_CURRENCY: str = DEFAULT_BASE_CURRENCY
    CURRENCIES: List[str] = list(DEFAULT_CURRENCIES)
    EXCHANGE_RATES: Dict[str, float] = dict(DEFAULT_EXCHANGE_RATES)
    RATES_VERSION: str = DEFAULT_RATES_VERSION

    # Designated MTD periods (None = derive from the data)
    CURRENT_PERIOD: Optional[str] = None
    PREVIOUS_PERIOD: Optional[str] = None

    # Active-user window
    ACTIVE_WINDOW_POLICY: str = "calendar"
    ACTIVE_WINDOW_DAYS: int = 30
    AS_OF: Optional[datetime] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("BASE_CURRENCY")
    @classmethod
    def _upper_base(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("CURRENCIES")
    @classmethod
    def _upper_currencies(cls, value: List[str]) -> List[str]:
        return [code.strip().upper() for code in value]

    @field_validator("EXCHANGE_RATES")
    @classmethod
    def _positive_rates(cls, value: Dict[str, float]) -> Dict[str, float]:
        for code, rate in value.items():
            if rate <= 0:
                raise ValueError(f"Exchange rate for {code} must be positive, got {rate}")
        return {code.strip().upper(): rate for code, rate in value.items()}

    @field_validator("CURRENT_PERIOD", "PREVIOUS_PERIOD")
    @classmethod
    def _period_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _PERIOD_RE.match(value):
            raise ValueError(f"Period must look like YYYY-MM, got {value!r}")
        return value

    @field_validator("ACTIVE_WINDOW_POLICY")
    @classmethod
    def _known_policy(cls, value: str) -> str:
        policy = value.strip().lower()
        if policy not in WINDOW_POLICIES:
            raise ValueError(f"ACTIVE_WINDOW_POLICY must be one of {WINDOW_POLICIES}")
        return policy

    @field_validator("ACTIVE_WINDOW_DAYS")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("ACTIVE_WINDOW_DAYS must be positive")
        return value

    @model_validator(mode="after")
    def _rates_cover_currencies(self) -> "EngineSettings":
        missing = [
            code for code in self.CURRENCIES
            if code != self.BASE_CURRENCY and code not in self.EXCHANGE_RATES
        ]
        if missing:
            raise ValueError(f"No exchange rate configured for: {', '.join(missing)}")
        return self


def get_settings(**overrides) -> EngineSettings:
    """Build a fresh settings object; keyword overrides win over the environment."""
    return EngineSettings(**overrides)
