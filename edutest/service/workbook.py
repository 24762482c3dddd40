"""Reading the rows of the first sheet of an .xlsx workbook."""

from __future__ import annotations

import posixpath
import zipfile
from itertools import takewhile
from pathlib import Path
from xml.etree import ElementTree as ET

_WORKBOOK = "xl/workbook.xml"
_WORKBOOK_RELS = "xl/_rels/workbook.xml.rels"
_SHARED_STRINGS = "xl/sharedStrings.xml"
_DEFAULT_SHEET = "xl/worksheets/sheet1.xml"


class WorkbookError(ValueError):
    """The workbook cannot be opened or holds no readable sheet."""


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _first(element: ET.Element, name: str) -> ET.Element | None:
    return next((el for el in element.iter() if _local(el.tag) == name), None)


def _string_item(item: ET.Element) -> str:
    parts: list[str] = []
    for child in item:
        name = _local(child.tag)
        if name == "t":
            parts.append(child.text or "")
        elif name == "r":
            parts.extend(t.text or "" for t in _children(child, "t"))
    return "".join(parts)


def _shared_strings(archive: zipfile.ZipFile) -> list[str]:
    if _SHARED_STRINGS not in archive.namelist():
        return []
    root = ET.fromstring(archive.read(_SHARED_STRINGS))
    return [_string_item(item) for item in _children(root, "si")]


def _sheet_path(archive: zipfile.ZipFile) -> str:
    workbook = ET.fromstring(archive.read(_WORKBOOK))
    sheets = [el for el in workbook.iter() if _local(el.tag) == "sheet"]
    if not sheets:
        raise WorkbookError("workbook has no sheets")
    rel_id = next(
        (value for key, value in sheets[0].attrib.items() if _local(key) == "id"), None
    )
    if rel_id is None or _WORKBOOK_RELS not in archive.namelist():
        return _DEFAULT_SHEET
    rels = ET.fromstring(archive.read(_WORKBOOK_RELS))
    for rel in rels.iter():
        if _local(rel.tag) == "Relationship" and rel.get("Id") == rel_id:
            target = rel.get("Target", "")
            if target.startswith("/"):
                return target.lstrip("/")
            return posixpath.normpath(posixpath.join("xl", target))
    return _DEFAULT_SHEET


def _column_index(ref: str) -> int:
    index = 0
    for letter in takewhile(str.isalpha, ref.upper()):
        index = index * 26 + ord(letter) - ord("A") + 1
    return index - 1


def _cell_value(cell: ET.Element, shared: list[str]) -> str:
    kind = cell.get("t", "n")
    if kind == "inlineStr":
        inline = next(iter(_children(cell, "is")), None)
        return _string_item(inline) if inline is not None else ""
    value_el = next(iter(_children(cell, "v")), None)
    value = (value_el.text or "") if value_el is not None else ""
    if kind == "s":
        return shared[int(value)] if value else ""
    if kind == "b":
        return "TRUE" if value == "1" else "FALSE"
    return value


def _read_first_sheet(archive: zipfile.ZipFile) -> list[list[str]]:
    sheet_path = _sheet_path(archive)
    shared = _shared_strings(archive)
    root = ET.fromstring(archive.read(sheet_path))
    sheet_data = _first(root, "sheetData")
    if sheet_data is None:
        return []

    grid: dict[int, dict[int, str]] = {}
    next_row = 0
    for row_el in _children(sheet_data, "row"):
        ref = row_el.get("r")
        row_index = int(ref) - 1 if ref else next_row
        next_row = row_index + 1
        cells: dict[int, str] = {}
        next_col = 0
        for cell in _children(row_el, "c"):
            cell_ref = cell.get("r")
            col = _column_index(cell_ref) if cell_ref else next_col
            next_col = col + 1
            value = _cell_value(cell, shared)
            if value != "":
                cells[col] = value
        if cells:
            grid[row_index] = cells

    if not grid:
        return []
    rows: list[list[str]] = []
    for row_index in range(max(grid) + 1):
        cells = grid.get(row_index, {})
        width = max(cells) + 1 if cells else 0
        rows.append([cells.get(col, "") for col in range(width)])
    return rows


def read_rows(path: str | Path) -> list[list[str]]:
    """Return the rows of the workbook's first sheet as lists of cell texts.

    Gaps between cells are filled with empty strings; trailing empty cells
    and trailing empty rows are dropped.
    """
    try:
        with zipfile.ZipFile(path) as archive:
            return _read_first_sheet(archive)
    except WorkbookError:
        raise
    except (OSError, zipfile.BadZipFile, KeyError, IndexError, ValueError, ET.ParseError) as exc:
        raise WorkbookError(f"cannot read workbook {path}: {exc}") from exc