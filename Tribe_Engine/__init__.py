"""
Tribe_Engine — Metrics engine for the Alpha Tribe wallet dashboard.

Submodules:
    - config:     Engine settings, sheet names, default exchange rates
    - processors: Source-specific data pipelines (wallet_metrics)
"""
