from webqa.columnsizer.api import resize
from webqa.workbookstore.api import Sheet, Workbook


def test_width_is_longest_cell_plus_margin():
    sheet = Sheet(name="S", header=["URL", "Count"], rows=[["https://a.test/", 5], ["b", 12345678]])
    wb = Workbook(path="x.xlsx", sheets=[sheet])
    resize(wb, ["URL", "Count"])
    assert sheet.column_widths == {0: len("https://a.test/") + 2, 1: 8 + 2}


def test_every_sheet_is_resized():
    a = Sheet(name="A", header=["URL", "E"], rows=[["x" * 20, "y"]])
    b = Sheet(name="B", header=["URL", "E"], rows=[["z" * 5]])
    wb = Workbook(path="x.xlsx", sheets=[a, b])
    resize(wb, ["URL", "E"])
    assert a.column_widths[0] == 22
    assert b.column_widths[0] == 7
    # missing cell counts as empty string, header label still wins
    assert b.column_widths[1] == 3


def test_columns_beyond_requested_keep_previous_width():
    sheet = Sheet(name="S", header=["URL"], rows=[["u", "a much longer value"]], column_widths={1: 9})
    wb = Workbook(path="x.xlsx", sheets=[sheet])
    resize(wb, ["URL"])
    assert sheet.column_widths == {0: 5, 1: 9}


def test_none_cells_count_as_empty():
    sheet = Sheet(name="S", header=["A"], rows=[[None]])
    wb = Workbook(path="x.xlsx", sheets=[sheet])
    resize(wb, ["A"])
    assert sheet.column_widths[0] == 3
