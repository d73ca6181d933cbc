"""
Errors — fatal conditions that abort a metrics run.

Non-fatal data-quality conditions are not exceptions; they are reported
through core.diagnostics.Diagnostics.
"""

from __future__ import annotations


class MetricsError(Exception):
    """Base class for every fatal aggregation error."""


class MissingSheet(MetricsError):
    """A required sheet is absent from the input snapshot."""

    def __init__(self, sheet: str):
        self.sheet = sheet
        super().__init__(f"Required sheet '{sheet}' is missing from the workbook")


class UnknownCurrency(MetricsError):
    """A currency code appears in the data but has no configured exchange rate."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No exchange rate configured for currency '{currency}'")


class InvalidPeriod(MetricsError):
    """A configured period key is not a valid YYYY-MM month."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid period key: {value!r}")


class NoPeriodData(MetricsError):
    """A sheet that must define periods has none, and no period was configured."""

    def __init__(self, sheet: str):
        self.sheet = sheet
        super().__init__(f"Sheet '{sheet}' contains no YYYY-MM period rows")
