"""
Workbook Ingestor — turns the finance export into a SheetStore.

Accepts an .xlsx path or file-like object (every sheet is read as
untyped cells, cleaning happens downstream), an in-memory mapping of
DataFrames, or a mapping of row-record lists.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Mapping, Sequence, Union

import pandas as pd

from .core.diagnostics import Diagnostics
from .core.sheets import SheetStore

logger = logging.getLogger(__name__)


class WorkbookIngestor:
    """
    Builds one fresh SheetStore per call; nothing is cached between calls.

    Usage:
        diagnostics = Diagnostics()
        store = WorkbookIngestor().ingest("financial_analysis.xlsx", diagnostics)
    """

    def __init__(self):
        self._sheet_info: list[dict] = []
        self._source_name: str = ""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ingest(
        self,
        source: Union[str, os.PathLike, BinaryIO],
        diagnostics: Diagnostics | None = None,
    ) -> SheetStore:
        """
        Read every sheet of an Excel workbook.

        Args:
            source: File path OR file-like object (e.g. BytesIO of an upload).
            diagnostics: Optional data-quality channel attached to the store.
        """
        if isinstance(source, (str, os.PathLike)):
            self._source_name = os.path.basename(os.fspath(source))
        else:
            self._source_name = getattr(source, "name", "upload.xlsx")

        sheets = pd.read_excel(source, sheet_name=None, engine="openpyxl", dtype=object)
        logger.info("Read %d sheets from %s", len(sheets), self._source_name)
        return self.from_frames(sheets, diagnostics)

    def from_frames(
        self,
        frames: Mapping[str, pd.DataFrame],
        diagnostics: Diagnostics | None = None,
    ) -> SheetStore:
        """Build a store from already-decoded DataFrames (copied, not shared)."""
        copies = {str(name).strip(): df.copy() for name, df in frames.items()}
        self._sheet_info = [
            {"sheet": name, "rows": len(df), "columns": len(df.columns)}
            for name, df in copies.items()
        ]
        for info in self._sheet_info:
            logger.debug("Sheet %s: %d rows x %d cols", info["sheet"], info["rows"], info["columns"])
        return SheetStore(copies, diagnostics)

    def from_records(
        self,
        records: Mapping[str, Sequence[Mapping[str, object]]],
        diagnostics: Diagnostics | None = None,
    ) -> SheetStore:
        """Build a store from {sheet name: [row dict, ...]}."""
        frames = {
            name: pd.DataFrame(list(rows), dtype=object)
            for name, rows in records.items()
        }
        return self.from_frames(frames, diagnostics)

    @property
    def sheet_info(self) -> list[dict]:
        return list(self._sheet_info)

    @property
    def source_name(self) -> str:
        return self._source_name
