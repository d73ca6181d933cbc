"""
Metrics — Pure-function business-logic modules for wallet metrics.

Each module returns schema objects. No I/O, no side effects.

Modules:
    growth            — Growth-percent policy shared by every series
    active_users      — Rolling / calendar active-user windows
    key_metrics       — Headline totals for the current period
    trends            — Monthly trend series and month-over-month growth
    mtd               — Per-currency month-to-date growth table
    currency_summary  — All-time per-currency activity
"""
