import asyncio
import threading
from pathlib import Path

import pytest

from webqa.reporter.api import ReportOptions, add_to_report, add_to_report_async
from webqa.rowappender.api import SchemaMismatchError
from webqa.workbookstore.api import load
from webqa.workbookwriter.api import SerializationError


def _opts(path: Path, sheet: str = "S", columns=("URL", "Count")) -> ReportOptions:
    return ReportOptions(file_path=str(path), sheet_name=sheet, columns=tuple(columns))


def test_creates_file_and_sheet(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    res = add_to_report(["u1", "5"], _opts(p, "Counts"))
    assert res.status == "created"
    assert res.row_number == 2

    wb = load(str(p))
    assert wb.sheet_names == ["Counts"]
    assert wb.get("Counts").header == ["URL", "Count"]
    assert wb.get("Counts").rows == [["u1", "5"]]


def test_rows_append_in_order(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    statuses = [add_to_report([v, 1], _opts(p)).status for v in ("A", "B", "C")]
    assert statuses == ["created", "appended", "appended"]
    assert load(str(p)).get("S").rows == [["A", 1], ["B", 1], ["C", 1]]


def test_other_sheet_is_untouched(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    add_to_report(["y1", "y2"], _opts(p, "Y", ["H1", "H2"]))
    y_before = load(str(p)).get("Y")

    res = add_to_report(["x1"], _opts(p, "X", ["URL", "Error"]))
    assert res.status == "sheet_created"

    wb = load(str(p))
    assert wb.sheet_names == ["Y", "X"]
    assert wb.get("Y").header == y_before.header
    assert wb.get("Y").rows == y_before.rows


def test_header_pinned_by_first_call(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    add_to_report(["a", "b"], _opts(p, "S", ["A", "B"]))
    add_to_report(["c", "d"], _opts(p, "S", ["C", "D"]))
    sheet = load(str(p)).get("S")
    assert sheet.header == ["A", "B"]
    assert sheet.rows == [["a", "b"], ["c", "d"]]


def test_width_grows_with_content(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    add_to_report(["abc"], _opts(p, "S", ["URL"]))
    first = load(str(p)).get("S").column_widths[0]
    add_to_report(["x" * 30], _opts(p, "S", ["URL"]))
    second = load(str(p)).get("S").column_widths[0]
    assert first == 5
    assert second >= 32
    assert second >= first


def test_defaults(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    add_to_report(["u", "img.png"])
    wb = load(str(tmp_path / "report.xlsx"))
    assert wb.sheet_names == ["Report"]
    assert wb.get("Report").header == ["URL", "Images without Alt"]


def test_concurrent_appends_are_all_kept(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    start = threading.Barrier(8)

    def worker(i: int) -> None:
        start.wait()
        add_to_report([f"u{i}", i], _opts(p))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    rows = load(str(p)).get("S").rows
    assert sorted(r[1] for r in rows) == list(range(8))


def test_async_calls_serialize(tmp_path: Path):
    p = tmp_path / "report.xlsx"

    async def run():
        await asyncio.gather(*(add_to_report_async([f"u{i}", i], _opts(p)) for i in range(5)))

    asyncio.run(run())
    assert len(load(str(p)).get("S").rows) == 5


def test_sheet_names_match_case_insensitively(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    statuses = [add_to_report([name], _opts(p, name, ["URL"])).status for name in ("Report", "report", "REPORT")]
    assert statuses == ["created", "appended", "appended"]

    wb = load(str(p))
    assert wb.sheet_names == ["Report"]
    assert wb.get("Report").rows == [["Report"], ["report"], ["REPORT"]]


def test_strict_mismatch_leaves_file_unchanged(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    add_to_report(["u1", "5"], _opts(p))
    before = p.read_bytes()

    strict = ReportOptions(file_path=str(p), sheet_name="S", columns=("URL", "Count"), strict=True)
    with pytest.raises(SchemaMismatchError):
        add_to_report(["u2"], strict)
    assert p.read_bytes() == before


def test_control_character_is_rejected(tmp_path: Path):
    p = tmp_path / "report.xlsx"
    add_to_report(["u1", "5"], _opts(p))
    before = p.read_bytes()

    with pytest.raises(SerializationError):
        add_to_report(["u2", "bad\x0bvalue"], _opts(p))
    assert p.read_bytes() == before
