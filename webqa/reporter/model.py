from dataclasses import dataclass
from typing import Tuple

DEFAULT_FILE_PATH = "report.xlsx"
DEFAULT_SHEET_NAME = "Report"
DEFAULT_COLUMNS: Tuple[str, ...] = ("URL", "Images without Alt")


@dataclass(frozen=True)
class ReportOptions:
    file_path: str = DEFAULT_FILE_PATH
    sheet_name: str = DEFAULT_SHEET_NAME
    columns: Tuple[str, ...] = DEFAULT_COLUMNS  # only used when the sheet must be created
    strict: bool = False


@dataclass(frozen=True)
class ReportResult:
    file_path: str
    sheet_name: str
    status: str  # created|sheet_created|appended
    row_number: int
