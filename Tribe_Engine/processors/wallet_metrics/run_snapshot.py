"""
Snapshot Runner — computes the MetricsSnapshot of one workbook export.

Usage:
    python -m Tribe_Engine.processors.wallet_metrics.run_snapshot financial_analysis.xlsx
    python -m Tribe_Engine.processors.wallet_metrics.run_snapshot export.xlsx --current 2025-02 -o snapshot.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from zipfile import BadZipFile

from pydantic import ValidationError

from Tribe_Engine.config import get_settings

from .analyzer import MetricsEngine
from .core.diagnostics import Diagnostics
from .core.errors import MetricsError
from .workbook_ingestor import WorkbookIngestor

logger = logging.getLogger("wallet_metrics")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute dashboard metrics from a finance workbook.")
    parser.add_argument("workbook", help="Path to the .xlsx export")
    parser.add_argument("--current", help="Current period (YYYY-MM)")
    parser.add_argument("--previous", help="Previous period (YYYY-MM)")
    parser.add_argument("--policy", choices=["calendar", "rolling"], help="Active-user window policy")
    parser.add_argument("--days", type=int, help="Rolling window length in days")
    parser.add_argument("-o", "--output", help="Write the snapshot JSON here instead of stdout")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    overrides = {
        "CURRENT_PERIOD": args.current,
        "PREVIOUS_PERIOD": args.previous,
        "ACTIVE_WINDOW_POLICY": args.policy,
        "ACTIVE_WINDOW_DAYS": args.days,
    }
    try:
        settings = get_settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.LOG_LEVEL)

    diagnostics = Diagnostics()
    try:
        store = WorkbookIngestor().ingest(args.workbook, diagnostics)
    except (OSError, ValueError, BadZipFile) as exc:
        logger.error("Could not read workbook %s: %s", args.workbook, exc)
        return 1

    try:
        snapshot = MetricsEngine(settings).analyze(store)
    except MetricsError as exc:
        logger.error("Metrics run failed: %s", exc)
        return 1

    payload = snapshot.to_json()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(payload)
        logger.info("Snapshot written to %s", args.output)
    else:
        print(payload)

    if diagnostics:
        for kind, count in sorted(diagnostics.counts().items()):
            logger.warning("Data quality: %d x %s", count, kind)
    return 0


if __name__ == "__main__":
    sys.exit(main())
