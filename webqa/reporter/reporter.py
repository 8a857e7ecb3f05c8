from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Sequence

from webqa.columnsizer.api import resize
from webqa.rowappender.api import append
from webqa.sheetaccessor.api import get_or_create
from webqa.workbookstore.api import load
from webqa.workbookwriter.api import save
from .model import ReportOptions, ReportResult

log = logging.getLogger(__name__)


class Reporter:
    _locks: Dict[str, threading.Lock] = {}
    _registry_lock = threading.Lock()

    def add(self, values: Sequence[Any], options: ReportOptions) -> ReportResult:
        path = str(Path(options.file_path).resolve())
        with self._lock_for(path):
            return self._load_append_save(path, values, options)

    def _load_append_save(self, path: str, values: Sequence[Any], options: ReportOptions) -> ReportResult:
        file_existed = Path(path).exists()
        workbook = load(path)
        sheet_existed = workbook.get(options.sheet_name) is not None

        sheet = get_or_create(workbook, options.sheet_name, options.columns)
        row_number = append(sheet, values, strict=options.strict)
        resize(workbook, options.columns)
        save(workbook, path)

        if not file_existed:
            status = "created"
            log.info("created report %s", path)
        elif not sheet_existed:
            status = "sheet_created"
        else:
            status = "appended"
        return ReportResult(file_path=path, sheet_name=sheet.name, status=status, row_number=row_number)

    @classmethod
    def _lock_for(cls, path: str) -> threading.Lock:
        with cls._registry_lock:
            lock = cls._locks.get(path)
            if lock is None:
                lock = threading.Lock()
                cls._locks[path] = lock
            return lock
