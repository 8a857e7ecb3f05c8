from __future__ import annotations

from typing import Any, Sequence

from webqa.workbookstore.api import Sheet, Workbook
from .sheetaccessor import SheetAccessor


def get_or_create(workbook: Workbook, sheet_name: str, columns: Sequence[Any]) -> Sheet:
    """Public API (SheetAccessor)

    Contract:
    - Existing sheet -> returned unchanged, columns ignored.
    - Otherwise a new sheet with header == columns is appended to the workbook.
    - Other sheets are never touched.
    """
    return SheetAccessor().get_or_create(workbook, sheet_name, columns)
