"""Shared fixtures: a small finance export covering three months and five wallets."""

import copy

import pytest

from Tribe_Engine.config import get_settings
from Tribe_Engine.processors.wallet_metrics.core.diagnostics import Diagnostics
from Tribe_Engine.processors.wallet_metrics.workbook_ingestor import WorkbookIngestor


SAMPLE_RECORDS = {
    # Rows deliberately out of calendar order
    "Monthly_Transaction_Count": [
        {"YearMonth": "2025-01", "KES": 100, "UGX": 10, "NGN": 0, "USD": 5, "CNY": "", "Total": 115},
        {"YearMonth": "2024-12", "KES": 80, "UGX": "", "NGN": 0, "USD": 2, "CNY": "", "Total": 82},
        {"YearMonth": "2025-02", "KES": "120", "UGX": 20, "NGN": 4, "USD": 5, "CNY": 1, "Total": "150"},
        {"YearMonth": "Total", "Total": 347},
    ],
    "Monthly_Revenue": [
        {"YearMonth": "2024-12", "KES": 0, "USD": ""},
        {"YearMonth": "2025-01", "KES": "1,000,000", "USD": ""},
        {"YearMonth": "2025-02", "KES": "1,200,000", "USD": 1000},
    ],
    "Monthly_Transaction_Volume": [
        {"YearMonth": "2024-12", "KES": 5000, "UGX": "", "NGN": ""},
        {"YearMonth": "2025-01", "KES": 10000, "UGX": 28465.9, "NGN": "", "Total": 38465.9},
        {"YearMonth": "2025-02", "KES": 15000, "UGX": "", "NGN": 11590, "Total": 26590},
    ],
    "Wallet_Balances": [
        {"User ID": "u1", "Last Transaction": "2025-02-10 12:00:00", "KES": 500, "UGX": "", "NGN": 0, "USD": "", "CNY": ""},
        {"User ID": "u2", "Last Transaction": "2025-02-20", "KES": 0, "UGX": 0, "NGN": 250, "USD": 0, "CNY": 0},
        {"User ID": "u3", "Last Transaction": "2025-01-15", "KES": 100, "UGX": "", "NGN": "", "USD": 5, "CNY": ""},
        {"User ID": "u4", "Last Transaction": "", "KES": 900, "UGX": "", "NGN": "", "USD": "", "CNY": ""},
        {"User ID": "u5", "Last Transaction": "2025-02-27 08:00:00", "KES": 10, "UGX": "", "NGN": "", "USD": 3, "CNY": ""},
    ],
    "User_Statistics": [
        {"Metric": "Total Users", "Value": "1,234"},
        {"Metric": "Active Users", "Value": "3"},
    ],
    "Monthly_Active_Users": [
        {"YearMonth": "2025-01", "Total": 40},
        {"YearMonth": "2025-02", "Total": 50},
    ],
    "Currency_Summary": [
        {"Currency": "KES", "Transactions": "1,000", "Total_Volume": "30,000", "Total_Fees_Original": "2,200,000"},
        {"Currency": "USD", "Transactions": "12", "Total_Volume": "500", "Total_Fees_Original": "1,000"},
    ],
}


@pytest.fixture
def records():
    """Deep copy of the sample export so tests may edit it freely."""
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def make_store(diagnostics):
    """Factory: build a SheetStore from a records mapping."""

    def _make(recs):
        return WorkbookIngestor().from_records(recs, diagnostics)

    return _make


@pytest.fixture
def store(records, make_store):
    return make_store(records)


@pytest.fixture
def settings():
    return get_settings(CURRENT_PERIOD="2025-02", PREVIOUS_PERIOD="2025-01")
