import zipfile
from xml.sax.saxutils import escape

import pytest

from edutest.service.workbook import WorkbookError, read_rows


def _column(index):
    name = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        name = chr(ord("A") + rem) + name
    return name


def _package(path, sheet_xml, *, shared_xml=None, sheets=True, rels=True):
    sheet_entry = '<sheet name="Sheet1" sheetId="1" r:id="rId1"/>' if sheets else ""
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(
            "xl/workbook.xml",
            '<workbook xmlns="urn:test:main" xmlns:r="urn:test:rel">'
            f"<sheets>{sheet_entry}</sheets></workbook>",
        )
        if rels:
            archive.writestr(
                "xl/_rels/workbook.xml.rels",
                '<Relationships xmlns="urn:test:pkg">'
                '<Relationship Id="rId1" Target="worksheets/sheet1.xml"/>'
                "</Relationships>",
            )
        archive.writestr("xl/worksheets/sheet1.xml", sheet_xml)
        if shared_xml is not None:
            archive.writestr("xl/sharedStrings.xml", shared_xml)
    return path


def _sheet(row_xml):
    return f'<worksheet xmlns="urn:test:main"><sheetData>{row_xml}</sheetData></worksheet>'


def write_xlsx(path, rows, *, shared=False, rels=True):
    strings = []
    row_parts = []
    for r, row in enumerate(rows, start=1):
        cells = []
        for c, value in enumerate(row):
            if value == "":
                continue
            ref = f"{_column(c)}{r}"
            if shared:
                if value not in strings:
                    strings.append(value)
                cells.append(f'<c r="{ref}" t="s"><v>{strings.index(value)}</v></c>')
            else:
                cells.append(f'<c r="{ref}" t="inlineStr"><is><t>{escape(value)}</t></is></c>')
        row_parts.append(f'<row r="{r}">{"".join(cells)}</row>')
    shared_xml = None
    if shared:
        items = "".join(f"<si><t>{escape(s)}</t></si>" for s in strings)
        shared_xml = f'<sst xmlns="urn:test:main">{items}</sst>'
    return _package(path, _sheet("".join(row_parts)), shared_xml=shared_xml, rels=rels)


def test_inline_strings_round_trip(tmp_path):
    rows = [["Nomer", "Name", "Lastname"], ["1", "Ali", "Valiyev"]]
    path = write_xlsx(tmp_path / "a.xlsx", rows)
    assert read_rows(path) == rows


def test_shared_strings_round_trip(tmp_path):
    rows = [["Fan", "Fan"], ["Tarix & Ona tili", "Fan"]]
    path = write_xlsx(tmp_path / "a.xlsx", rows, shared=True)
    assert read_rows(path) == rows


def test_gaps_and_empty_rows_are_kept(tmp_path):
    rows = [["a", "", "c"], [], ["x"]]
    path = write_xlsx(tmp_path / "a.xlsx", rows)
    assert read_rows(path) == rows


def test_trailing_empty_cells_and_rows_dropped(tmp_path):
    row = ["a", "b", ""]
    path = write_xlsx(tmp_path / "a.xlsx", [row, []])
    assert read_rows(path) == [row[:2]]


def test_numbers_and_booleans(tmp_path):
    sheet = _sheet('<row r="1"><c r="A1"><v>42</v></c><c r="B1" t="b"><v>1</v></c></row>')
    path = _package(tmp_path / "a.xlsx", sheet)
    assert read_rows(path) == [["42", "TRUE"]]


def test_rich_text_shared_string(tmp_path):
    sheet = _sheet('<row r="1"><c r="A1" t="s"><v>0</v></c></row>')
    shared = '<sst><si><r><t>Sa</t></r><r><t>vol</t></r></si></sst>'
    path = _package(tmp_path / "a.xlsx", sheet, shared_xml=shared)
    assert read_rows(path) == [["Sa" + "vol"]]


def test_default_sheet_without_relationships(tmp_path):
    rows = [["one", "two"]]
    path = write_xlsx(tmp_path / "a.xlsx", rows, rels=False)
    assert read_rows(path) == rows


def test_missing_file(tmp_path):
    with pytest.raises(WorkbookError):
        read_rows(tmp_path / "missing.xlsx")


def test_not_a_zip(tmp_path):
    path = tmp_path / "plain.xlsx"
    path.write_text("not a workbook")
    with pytest.raises(WorkbookError):
        read_rows(path)


def test_no_sheets(tmp_path):
    path = _package(tmp_path / "a.xlsx", _sheet(""), sheets=False)
    with pytest.raises(WorkbookError, match="no sheets"):
        read_rows(path)


def test_bad_shared_string_index(tmp_path):
    sheet = _sheet('<row r="1"><c r="A1" t="s"><v>5</v></c></row>')
    path = _package(tmp_path / "a.xlsx", sheet, shared_xml="<sst></sst>")
    with pytest.raises(WorkbookError):
        read_rows(path)