"""
Column Resolver — Flexible column-name detection for the finance export.

The workbook has been regenerated by several exporter versions and the
headers drift ("YearMonth", "Year Month", "Period" ...). This module
centralises all column-name resolution into one place.
"""

from __future__ import annotations

import re

import pandas as pd

_CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


class ColumnResolver:
    """
    Finds columns in a DataFrame regardless of exact spelling or casing.

    Resolution order (first match wins):
        1. Exact name match
        2. Case/space-insensitive match
        3. Partial match — candidate is a substring of a real column (case-insensitive)
    """

    # ----- pre-built candidate lists for the export's fields -----

    PERIOD_CANDIDATES = [
        "YearMonth", "Year Month", "Year_Month", "Period", "Month",
    ]

    TOTAL_CANDIDATES = ["Total", "Grand Total", "All Currencies"]

    LAST_TRANSACTION_CANDIDATES = [
        "Last Transaction", "Last_Transaction", "Last Transaction Date",
        "Last Activity", "Last Active",
    ]

    USER_ID_CANDIDATES = [
        "User ID", "User_ID", "UserId", "User", "Customer ID", "Wallet ID", "Phone",
    ]

    METRIC_CANDIDATES = ["Metric", "Statistic", "Name"]

    VALUE_CANDIDATES = ["Value", "Amount", "Count"]

    CURRENCY_CANDIDATES = ["Currency", "Currency Code", "CCY"]

    TRANSACTIONS_CANDIDATES = ["Transactions", "Transaction Count", "Transaction_Count"]

    VOLUME_CANDIDATES = ["Total_Volume", "Total Volume", "Volume"]

    FEES_CANDIDATES = ["Total_Fees_Original", "Total Fees Original", "Total_Fees", "Fees"]

    # ----------------------------------------------------------------
    # Public API
    # ----------------------------------------------------------------

    @staticmethod
    def resolve(df: pd.DataFrame, candidates: list[str]) -> str | None:
        """
        Find the best-matching column in *df* from a list of candidates.

        Returns:
            The matched column name, or None if nothing matches.
        """
        columns = [str(c) for c in df.columns]

        # Tier 1: exact match
        for name in candidates:
            if name in columns:
                return name

        # Tier 2: ignore case, spaces and underscores
        def _squash(text: str) -> str:
            return re.sub(r"[\s_]", "", text).lower()

        squashed = {c: _squash(c) for c in columns}
        for name in candidates:
            target = _squash(name)
            for col, col_sq in squashed.items():
                if col_sq == target:
                    return col

        # Tier 3: partial match (case-insensitive)
        col_lower = {c: c.lower() for c in columns}
        for name in candidates:
            name_low = name.lower()
            for col, col_low in col_lower.items():
                if name_low in col_low:
                    return col

        return None

    @staticmethod
    def currency_columns(
        df: pd.DataFrame,
        exclude: tuple[str | None, ...] = (),
    ) -> list[str]:
        """
        Return the wide-format currency columns of *df*, in sheet order.

        A currency column is any header that is a three-letter upper-case
        code; columns listed in *exclude* are never returned.
        """
        skip = {c for c in exclude if c}
        return [
            str(c) for c in df.columns
            if str(c) not in skip and _CURRENCY_CODE_RE.match(str(c))
        ]
