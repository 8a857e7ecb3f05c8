from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, List

from openpyxl import Workbook as XlsxWorkbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from webqa.workbookstore.api import Sheet, Workbook

log = logging.getLogger(__name__)

_ENCODE_ERRORS = (ValueError, TypeError, IllegalCharacterError)


class SerializationError(RuntimeError):
    pass


class WorkbookWriter:
    def save(self, workbook: Workbook, path: str) -> None:
        if not workbook.sheets:
            raise SerializationError("workbook has no sheets")

        try:
            xlsx = self._build(workbook)
        except _ENCODE_ERRORS as e:
            raise SerializationError(f"cannot encode workbook {path}: {e}") from e

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._replace(xlsx, target)
        log.debug("saved %s with sheets %s", target, workbook.sheet_names)

    def _build(self, workbook: Workbook) -> XlsxWorkbook:
        xlsx = XlsxWorkbook()
        # drop the default sheet
        xlsx.remove(xlsx.active)
        for sheet in workbook.sheets:
            ws = xlsx.create_sheet(title=sheet.name)
            self._write_rows(ws, [sheet.header] + sheet.rows)
            self._write_widths(ws, sheet)
        return xlsx

    def _write_rows(self, ws: Worksheet, rows: List[List[Any]]) -> None:
        for row_idx, row in enumerate(rows, start=1):
            for col_idx, value in enumerate(row, start=1):
                if value is None:
                    continue
                cell = ws.cell(row=row_idx, column=col_idx)
                cell.value = value
                if isinstance(value, str):
                    # page text starting with "=" stays text, never a formula
                    cell.data_type = "s"

    def _write_widths(self, ws: Worksheet, sheet: Sheet) -> None:
        for index, width in sorted(sheet.column_widths.items()):
            ws.column_dimensions[get_column_letter(index + 1)].width = width

    def _replace(self, xlsx: XlsxWorkbook, target: Path) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=target.stem + "_", suffix=".tmp", dir=str(target.parent))
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            try:
                xlsx.save(tmp_path)
            except _ENCODE_ERRORS as e:
                raise SerializationError(f"cannot write workbook {target}: {e}") from e
            os.chmod(tmp_path, self._file_mode(target))
            os.replace(tmp_path, target)
        finally:
            tmp_path.unlink(missing_ok=True)

    def _file_mode(self, target: Path) -> int:
        # mkstemp creates 0600; keep the old report's mode, else follow the umask
        if target.exists():
            return stat.S_IMODE(target.stat().st_mode)
        mask = os.umask(0)
        os.umask(mask)
        return 0o666 & ~mask
