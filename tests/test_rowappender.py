import pytest

from webqa.rowappender.api import SchemaMismatchError, append
from webqa.workbookstore.api import Sheet


def test_first_row_follows_header():
    sheet = Sheet(name="S", header=["URL", "Count"])
    assert append(sheet, ["u1", "5"]) == 2
    assert sheet.rows == [["u1", "5"]]


def test_rows_keep_call_order():
    sheet = Sheet(name="S", header=["v"])
    for v in ("A", "B", "C"):
        append(sheet, [v])
    assert sheet.rows == [["A"], ["B"], ["C"]]


def test_length_mismatch_is_accepted():
    sheet = Sheet(name="S", header=["URL", "Error"])
    append(sheet, ["u", "e", "extra"])
    append(sheet, ["u"])
    assert sheet.rows == [["u", "e", "extra"], ["u"]]


def test_strict_mode_rejects_mismatch():
    sheet = Sheet(name="S", header=["URL", "Error"])
    with pytest.raises(SchemaMismatchError):
        append(sheet, ["u"], strict=True)
    assert sheet.rows == []
