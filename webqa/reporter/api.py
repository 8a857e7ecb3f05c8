from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

from .model import ReportOptions, ReportResult
from .reporter import Reporter


def add_to_report(values: Sequence[Any], options: Optional[ReportOptions] = None) -> ReportResult:
    """Public API (Reporter)

    Contract:
    - load -> get_or_create -> append -> resize (every sheet) -> save, from a fresh load each call.
    - File and sheet are created on demand; an existing sheet keeps its header.
    - Calls against the same path are serialized by a per-path lock (in-process only).
    - StorageError / SerializationError / SchemaMismatchError propagate to the caller.
    """
    return Reporter().add(values, options or ReportOptions())


async def add_to_report_async(values: Sequence[Any], options: Optional[ReportOptions] = None) -> ReportResult:
    """Same as add_to_report, run in a worker thread."""
    return await asyncio.to_thread(add_to_report, values, options)
