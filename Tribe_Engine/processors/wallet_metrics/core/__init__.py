"""
Core utilities for the wallet metrics pipeline.

Modules:
    cleaning     — Cell parsing (nullable numbers, timestamps, period keys)
    columns      — Flexible column name resolution
    currency     — Exchange-rate table and base-currency conversion
    diagnostics  — Non-fatal data-quality reporting channel
    errors       — Fatal error taxonomy
    periods      — Period ordering and adjacent-period lookup
    rows         — Typed cell readers for sheet rows
    sheets       — Read-only store of the ingested sheets
"""
