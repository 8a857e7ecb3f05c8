from __future__ import annotations

from typing import Any, Sequence

from webqa.workbookstore.api import Sheet
from .rowappender import RowAppender, SchemaMismatchError


def append(sheet: Sheet, values: Sequence[Any], strict: bool = False) -> int:
    """Public API (RowAppender)

    Contract:
    - Row goes right after the last data row (first data row if only the header exists).
    - values[i] lands in column i; no length check against the header.
    - strict=True -> SchemaMismatchError when len(values) != len(header).
    - Returns the 1-based worksheet row number of the new row.
    """
    return RowAppender().append(sheet, values, strict=strict)
