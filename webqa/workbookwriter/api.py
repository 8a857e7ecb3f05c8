from __future__ import annotations

from webqa.workbookstore.api import Workbook
from .workbookwriter import SerializationError, WorkbookWriter


def save(workbook: Workbook, path: str) -> None:
    """Public API (WorkbookWriter)

    Contract:
    - Whole-file rewrite, no in-place patch, no backup.
    - Unencodable content (bad cell type, no sheets, bad sheet title) -> SerializationError,
      previous file left as it was.
    """
    WorkbookWriter().save(workbook, path)
