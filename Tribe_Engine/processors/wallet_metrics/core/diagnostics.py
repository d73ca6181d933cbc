"""
Diagnostics — optional channel for non-fatal data-quality conditions.

Every condition is logged at WARNING and, when a Diagnostics object is
supplied, recorded so the caller can surface "data quality" notices
without blocking the dashboard.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class IssueKind(str, Enum):
    """Kinds of non-fatal data-quality conditions."""
    DUPLICATE_PERIOD_ROW = "duplicate_period_row"
    MISSING_ROW = "missing_row"
    MISSING_CELL = "missing_cell"
    INVALID_PERIOD_KEY = "invalid_period_key"
    UNPARSEABLE_TIMESTAMP = "unparseable_timestamp"
    UNPARSEABLE_CELL = "unparseable_cell"


@dataclass(frozen=True)
class DataQualityIssue:
    kind: IssueKind
    sheet: str
    detail: str


class Diagnostics:
    """
    Collects DataQualityIssue records for one aggregation run.

    Several metrics read the same row or cell, so an identical issue
    (same kind, sheet and detail) is recorded only once.
    """

    def __init__(self):
        self._issues: list[DataQualityIssue] = []
        self._seen: set[DataQualityIssue] = set()

    def report(self, kind: IssueKind, sheet: str, detail: str) -> None:
        issue = DataQualityIssue(kind=kind, sheet=sheet, detail=detail)
        if issue in self._seen:
            return
        self._seen.add(issue)
        self._issues.append(issue)
        logger.warning("Data quality [%s] %s: %s", kind.value, sheet, detail)

    @property
    def issues(self) -> list[DataQualityIssue]:
        return list(self._issues)

    def counts(self) -> dict[str, int]:
        """Number of issues per kind, keyed by the kind's string value."""
        return dict(Counter(issue.kind.value for issue in self._issues))

    def of_kind(self, kind: IssueKind) -> list[DataQualityIssue]:
        return [issue for issue in self._issues if issue.kind == kind]

    def __len__(self) -> int:
        return len(self._issues)

    def __bool__(self) -> bool:
        return bool(self._issues)


def report(
    diagnostics: Diagnostics | None,
    kind: IssueKind,
    sheet: str,
    detail: str,
) -> None:
    """Report through *diagnostics* if given, otherwise only log."""
    if diagnostics is not None:
        diagnostics.report(kind, sheet, detail)
    else:
        logger.warning("Data quality [%s] %s: %s", kind.value, sheet, detail)
