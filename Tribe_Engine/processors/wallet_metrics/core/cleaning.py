"""
Cleaning — Cell parsing for the finance workbook export.

The export is read with formatted (string) values, so amounts arrive as
"1,200,000" and blanks arrive as "" or NaN. Parsing keeps "no data"
(None) distinct from a legitimate zero.
"""

from __future__ import annotations

import re
from datetime import datetime

import numpy as np
import pandas as pd

_BLANK_TOKENS = ("", "-", "n/a", "N/A", "nan", "NaN", "None")
_STRIP_RE = re.compile(r"[,\$%\s]")


def is_blank(value) -> bool:
    """True for None, NaN/NaT and blank-looking strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in _BLANK_TOKENS
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_amount(value) -> float | None:
    """
    Parse a numeric cell into a float, or None when the cell is absent.

    Strips thousands separators, '$', '%' and whitespace.
    Raises ValueError for non-blank text that is not a number.
    """
    if is_blank(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"Not a numeric cell: {value!r}")
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    s = _STRIP_RE.sub("", str(value))
    if s in _BLANK_TOKENS:
        return None
    return float(s)


def try_parse_amount(value) -> tuple[float | None, bool]:
    """
    Lenient variant of parse_amount.

    Returns:
        (amount, ok) — ok is False when the cell held unparseable text;
        the amount is then None.
    """
    try:
        return parse_amount(value), True
    except ValueError:
        return None, False


def parse_timestamp(value) -> datetime | None:
    """
    Parse a last-transaction cell into a naive datetime (UTC if tz-aware).

    Returns None for blanks and for values pandas cannot interpret.
    """
    if is_blank(value):
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def normalize_period_key(value) -> str | None:
    """
    Normalize a period cell to 'YYYY-MM'.

    Accepts '2025-02', '2025-02-01', Timestamps and datetimes.
    Returns None if the cell does not describe a calendar month.
    """
    if is_blank(value):
        return None
    if isinstance(value, (datetime, pd.Timestamp)):
        return pd.Timestamp(value).strftime("%Y-%m")
    text = str(value).strip()
    match = re.match(r"^(\d{4})[-/](\d{1,2})(?:[-/]\d{1,2})?(?:[ T].*)?$", text)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return f"{year:04d}-{month:02d}"


def strip_headers(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of *df* with surrounding whitespace removed from headers."""
    out = df.copy()
    out.columns = [str(c).strip() for c in out.columns]
    return out
