from __future__ import annotations

from .model import Sheet, Workbook
from .workbookstore import StorageError, WorkbookStore


def load(path: str) -> Workbook:
    """Public API (WorkbookStore)

    Contract:
    - Existing file -> parsed into sheets (row 1 = header, rest = data rows).
    - Missing file -> empty workbook, no sheets.
    - Existing but unreadable file -> StorageError (no retry).
    """
    return WorkbookStore().load(path)
