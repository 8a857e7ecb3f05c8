from __future__ import annotations

from typing import List

from webqa.runconfig.api import RunConfig
from .model import CheckOutcome, RunResult
from .runner import Runner, to_slug


def run_checks(config: RunConfig) -> RunResult:
    """Public API (Runner)

    Contract:
    - One report workbook per URL: report_dir / report_name.format(slug=...).
    - Page fetched once per URL and shared by every check.
    - A failing check is recorded as FAILED and the run continues.
    - Fetch failure -> every check of that URL FAILED, row in "Fetch Error".
    """
    return Runner().run_checks(config)


def cleanup_reports(directory: str, pattern: str) -> List[str]:
    """Public API (Runner)

    Contract:
    - Delete files whose name contains pattern or whose extension equals it.
    - Returns removed paths; missing directory -> FileNotFoundError.
    """
    return Runner().cleanup_reports(directory, pattern)
