from __future__ import annotations

from typing import Any, Sequence

from webqa.workbookstore.api import Workbook
from .columnsizer import ColumnSizer, WIDTH_MARGIN


def resize(workbook: Workbook, columns: Sequence[Any]) -> None:
    """Public API (ColumnSizer)

    Contract:
    - Applies to every sheet in the workbook, not only the one just written.
    - width[i] = max(len(label i), len of every cell in column i incl. header) + 2.
    - Only indexes below len(columns) are recomputed.
    """
    ColumnSizer().resize(workbook, columns)
