"""
Metrics Engine — The single entry point for wallet dashboard metrics.

Orchestrates all metric modules and returns one immutable
MetricsSnapshot that any downstream consumer (dashboard, CLI, export)
can use directly. The computation is pure and synchronous: identical
sheets and settings always give an identical snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from Tribe_Engine.config import (
    REQUIRED_SHEETS,
    SHEET_REVENUE,
    SHEET_TRANSACTION_COUNT,
    SHEET_VOLUME,
    SHEET_WALLET_BALANCES,
    EngineSettings,
    get_settings,
)

from .core.currency import CurrencyConverter, ExchangeRateTable
from .core.diagnostics import Diagnostics, IssueKind, report
from .core.errors import MissingSheet, NoPeriodData
from .core.periods import previous_month
from .core.sheets import SheetStore
from .metrics.active_users import ActiveUserCounter, CalendarWindow, RollingWindow
from .metrics.currency_summary import calculate_currency_summary
from .metrics.key_metrics import calculate_key_metrics
from .metrics.mtd import calculate_mtd_growth
from .metrics.trends import build_growth_series, build_monthly_trends, trend_periods
from .schemas import MetricsSnapshot, SnapshotMeta

logger = logging.getLogger(__name__)


class MetricsEngine:
    """
    Takes a SheetStore and produces the full MetricsSnapshot.

    Usage:
        engine = MetricsEngine(get_settings(CURRENT_PERIOD="2025-02"))
        snapshot = engine.analyze(store)
    """

    def __init__(self, settings: EngineSettings | None = None):
        self._settings = settings if settings is not None else get_settings()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def analyze(self, store: SheetStore) -> MetricsSnapshot:
        """
        Run all metric calculations and return a MetricsSnapshot.

        Non-fatal data-quality conditions go to ``store.diagnostics``.

        Raises:
            MissingSheet:    a required sheet is absent.
            UnknownCurrency: a non-blank amount has no configured rate.
            NoPeriodData:    no current period configured and none in the data.
        """
        diagnostics = store.diagnostics
        self._require_sheets(store)

        converter = CurrencyConverter(ExchangeRateTable.from_settings(self._settings))
        current_period, previous_period = self._designated_periods(store)
        self._check_designated_rows(store, current_period, previous_period, diagnostics)

        window = self._window_strategy(current_period)
        logger.info(
            "Metrics run: current=%s previous=%s window=%s rates=%s",
            current_period, previous_period, window.name, converter.table.version,
        )

        users = store.user_records(SHEET_WALLET_BALANCES)
        counter = ActiveUserCounter(converter.supported_currencies)
        current_window, previous_window = window.current(), window.previous()
        current_active = counter.count(users, current_window)
        previous_active = counter.count(users, previous_window)

        trends = build_monthly_trends(store, converter, diagnostics)

        snapshot = MetricsSnapshot(
            meta=SnapshotMeta(
                base_currency=converter.base_currency,
                current_period=current_period,
                previous_period=previous_period,
                exchange_rates=converter.table.as_dict(),
                rates_version=converter.table.version,
                window_policy=window.name,
                current_window=[current_window.start, current_window.end],
                previous_window=[previous_window.start, previous_window.end],
                sheets=store.sheet_names,
            ),
            key_metrics=calculate_key_metrics(
                store, converter, current_period, current_active, previous_active, diagnostics,
            ),
            monthly_trends=trends,
            growth_rates=build_growth_series(trends),
            mtd_growth=calculate_mtd_growth(
                store, converter, current_period, previous_period,
                current_active, previous_active, diagnostics,
            ),
            currency_summary=calculate_currency_summary(store, converter, diagnostics),
        )

        logger.info(
            "Metrics run complete: %d trend points, %d active users",
            len(trends), current_active.distinct_users,
        )
        return snapshot

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _require_sheets(store: SheetStore) -> None:
        for name in REQUIRED_SHEETS:
            if not store.has_sheet(name):
                raise MissingSheet(name)

    def _designated_periods(self, store: SheetStore) -> tuple[str, str]:
        current = self._settings.CURRENT_PERIOD
        if current is None:
            periods = trend_periods(store)
            if not periods:
                raise NoPeriodData(SHEET_TRANSACTION_COUNT)
            current = periods[-1]
        previous = self._settings.PREVIOUS_PERIOD or previous_month(current)
        return current, previous

    @staticmethod
    def _check_designated_rows(
        store: SheetStore,
        current_period: str,
        previous_period: str,
        diagnostics: Diagnostics | None,
    ) -> None:
        for sheet in (SHEET_TRANSACTION_COUNT, SHEET_REVENUE, SHEET_VOLUME):
            for period in (current_period, previous_period):
                if store.find_row(sheet, period) is None:
                    report(diagnostics, IssueKind.MISSING_ROW, sheet, f"no row for {period}")

    def _window_strategy(self, current_period: str):
        if self._settings.ACTIVE_WINDOW_POLICY == "rolling":
            return RollingWindow(self._reference_instant(), self._settings.ACTIVE_WINDOW_DAYS)
        return CalendarWindow(current_period)

    def _reference_instant(self) -> datetime:
        as_of = self._settings.AS_OF
        if as_of is None:
            return datetime.now(timezone.utc).replace(tzinfo=None)
        if as_of.tzinfo is not None:
            as_of = as_of.astimezone(timezone.utc).replace(tzinfo=None)
        return as_of
