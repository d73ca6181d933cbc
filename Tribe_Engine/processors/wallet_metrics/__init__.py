"""
Wallet Metrics — multi-currency dashboard metrics from the finance export.

Usage:
    from Tribe_Engine.processors.wallet_metrics import MetricsEngine, WorkbookIngestor

    store = WorkbookIngestor().ingest("financial_analysis.xlsx")
    snapshot = MetricsEngine().analyze(store)
"""

from .analyzer import MetricsEngine
from .workbook_ingestor import WorkbookIngestor

__all__ = ["MetricsEngine", "WorkbookIngestor"]
