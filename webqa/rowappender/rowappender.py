from __future__ import annotations

from typing import Any, Sequence

from webqa.workbookstore.api import Sheet


class SchemaMismatchError(RuntimeError):
    pass


class RowAppender:
    def append(self, sheet: Sheet, values: Sequence[Any], strict: bool = False) -> int:
        row = list(values)
        if strict and len(row) != len(sheet.header):
            raise SchemaMismatchError(
                f"row has {len(row)} values, sheet {sheet.name!r} has {len(sheet.header)} columns"
            )
        sheet.rows.append(row)
        # header occupies worksheet row 1
        return len(sheet.rows) + 1
