from pathlib import Path

import pytest
from openpyxl import Workbook as XlsxWorkbook

from webqa.workbookstore.api import StorageError, load


def test_load_missing_file_gives_empty_workbook(tmp_path: Path):
    wb = load(str(tmp_path / "nope.xlsx"))
    assert wb.sheets == []


def test_load_reads_header_rows_and_widths(tmp_path: Path):
    p = tmp_path / "r.xlsx"
    xlsx = XlsxWorkbook()
    ws = xlsx.active
    ws.title = "Links"
    ws.append(["URL", "Status"])
    ws.append(["https://a.test/", 200])
    ws.append(["https://b.test/"])
    ws.column_dimensions["A"].width = 17
    xlsx.save(p)

    wb = load(str(p))
    assert wb.sheet_names == ["Links"]
    sheet = wb.get("Links")
    assert sheet.header == ["URL", "Status"]
    assert sheet.rows == [["https://a.test/", 200], ["https://b.test/"]]
    assert sheet.column_widths[0] == 17


def test_load_corrupt_file_raises_storage_error(tmp_path: Path):
    p = tmp_path / "broken.xlsx"
    p.write_text("this is not a workbook", encoding="utf-8")
    with pytest.raises(StorageError):
        load(str(p))
