from __future__ import annotations

import logging
from typing import Any, Sequence

from webqa.workbookstore.api import Sheet, Workbook

log = logging.getLogger(__name__)


class SheetAccessor:
    def get_or_create(self, workbook: Workbook, sheet_name: str, columns: Sequence[Any]) -> Sheet:
        existing = workbook.get(sheet_name)
        if existing is not None:
            # header is pinned by the first call that created the sheet
            return existing

        sheet = Sheet(name=sheet_name, header=list(columns))
        workbook.sheets.append(sheet)
        log.info("created sheet %r in %s", sheet_name, workbook.path)
        return sheet
