from __future__ import annotations

from typing import Any, List, Sequence

from webqa.workbookstore.api import Sheet, Workbook

WIDTH_MARGIN: int = 2


class ColumnSizer:
    """Recomputes display widths from every row of every sheet.

    Cost is O(total cells) per call. Reports are small enough that a full
    rescan on each write is acceptable.
    """

    def resize(self, workbook: Workbook, columns: Sequence[Any]) -> None:
        for sheet in workbook.sheets:
            self._resize_sheet(sheet, columns)

    def _resize_sheet(self, sheet: Sheet, columns: Sequence[Any]) -> None:
        rows = self._padded_rows(sheet)
        max_widths = [len(self._text(col)) for col in columns]

        for row in rows:
            for index, cell in enumerate(row):
                if index >= len(max_widths):
                    break
                length = len(self._text(cell))
                if length > max_widths[index]:
                    max_widths[index] = length

        # columns beyond len(columns) keep their previous width
        for index, width in enumerate(max_widths):
            sheet.column_widths[index] = width + WIDTH_MARGIN

    def _padded_rows(self, sheet: Sheet) -> List[List[Any]]:
        rows = [sheet.header] + sheet.rows
        size = max((len(r) for r in rows), default=0)
        return [[("" if c is None else c) for c in r] + [""] * (size - len(r)) for r in rows]

    def _text(self, value: Any) -> str:
        return "" if value is None else str(value)
