from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from openpyxl import load_workbook
from openpyxl.utils import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from .model import Sheet, Workbook

log = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


class WorkbookStore:
    def load(self, path: str) -> Workbook:
        p = Path(path)
        if not p.exists():
            log.debug("no report at %s, starting empty workbook", p)
            return Workbook(path=str(p))

        try:
            wb = load_workbook(p)
        except Exception as e:
            raise StorageError(f"cannot read workbook {p}: {e}") from e

        sheets = [self._read_sheet(ws) for ws in wb.worksheets]
        wb.close()
        log.debug("loaded %s with sheets %s", p, [s.name for s in sheets])
        return Workbook(path=str(p), sheets=sheets)

    def _read_sheet(self, ws: Worksheet) -> Sheet:
        rows = [self._trim(r) for r in ws.iter_rows(values_only=True)]
        header = rows[0] if rows else []
        return Sheet(name=ws.title, header=header, rows=rows[1:], column_widths=self._read_widths(ws))

    def _read_widths(self, ws: Worksheet) -> Dict[int, int]:
        widths: Dict[int, int] = {}
        for key, dim in ws.column_dimensions.items():
            if not dim.customWidth or dim.width is None:
                continue
            first = dim.min or column_index_from_string(key)
            last = dim.max or first
            for col in range(first, last + 1):
                widths[col - 1] = int(round(dim.width))
        return widths

    def _trim(self, row: Sequence[Any]) -> List[Any]:
        # openpyxl pads every row to the sheet's max column
        cells = list(row)
        while cells and cells[-1] is None:
            cells.pop()
        return cells
