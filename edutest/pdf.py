"""Rendering of a student's test sheet as a PDF file."""

from __future__ import annotations

from pathlib import Path

from edutest.models import PdfTemplate

DEFAULT_PDF_DIR = "storage/pdfs"

_K = 72 / 25.4  # points per millimetre
_PAGE_W = 210.0
_PAGE_H = 297.0
_MARGIN = 10.0
_CELL_MARGIN = _MARGIN / 10
_BOTTOM_MARGIN = 20.0

_NARROW = set("ijlftI.,:;'!|`()[] ")
_WIDE = set("mwMW@%")


def _escape(text: str) -> bytes:
    raw = text.replace("\r", "").replace("\n", " ").encode("cp1252", errors="replace")
    return raw.replace(b"\\", b"\\\\").replace(b"(", b"\\(").replace(b")", b"\\)")


class _Document:
    """A small A4 page writer with cell and multi-line cell layout."""

    def __init__(self) -> None:
        self._pages: list[list[bytes]] = []
        self._x = _MARGIN
        self._y = _MARGIN
        self._bold = False
        self._size = 12.0

    def add_page(self) -> None:
        self._pages.append([])
        self._x = _MARGIN
        self._y = _MARGIN

    def set_font(self, size: float, bold: bool = False) -> None:
        self._size = size
        self._bold = bold

    def _text_width(self, text: str) -> float:
        ems = 0.0
        for ch in text:
            if ch in _NARROW:
                ems += 0.28
            elif ch in _WIDE:
                ems += 0.85
            elif ch.isupper():
                ems += 0.67
            else:
                ems += 0.556
        return ems * self._size / _K

    def _draw(self, text: str, x: float, w: float, h: float, align: str) -> None:
        if not text:
            return
        if align == "C":
            tx = x + (w - self._text_width(text)) / 2
        else:
            tx = x + _CELL_MARGIN
        ty = self._y + h / 2 + 0.3 * (self._size / _K)
        font = b"F2" if self._bold else b"F1"
        op = b"BT /%s %.2f Tf %.2f %.2f Td (%s) Tj ET\n" % (
            font,
            self._size,
            tx * _K,
            (_PAGE_H - ty) * _K,
            _escape(text),
        )
        self._pages[-1].append(op)

    def cell(self, h: float, text: str, align: str = "L", new_line: bool = False) -> None:
        if self._y + h > _PAGE_H - _BOTTOM_MARGIN:
            x = self._x
            self.add_page()
            self._x = x
        w = _PAGE_W - _MARGIN - self._x
        self._draw(text, self._x, w, h, align)
        if new_line:
            self._y += h
            self._x = _MARGIN
        else:
            self._x += w

    def ln(self, h: float) -> None:
        self._x = _MARGIN
        self._y += h

    def _wrap(self, text: str, width: float) -> list[str]:
        lines: list[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if self._text_width(candidate) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                current = ""
                for ch in word:
                    if current and self._text_width(current + ch) > width:
                        lines.append(current)
                        current = ch
                    else:
                        current += ch
            lines.append(current)
        return lines

    def multi_cell(self, h: float, text: str) -> None:
        width = _PAGE_W - 2 * _MARGIN - 2 * _CELL_MARGIN
        for line in self._wrap(text, width):
            self.cell(h, line, new_line=True)

    def save(self, path: Path) -> None:
        page_count = len(self._pages)
        objects: list[bytes] = [
            b"<< /Type /Catalog /Pages 2 0 R >>",
            b"<< /Type /Pages /Kids [%s] /Count %d >>"
            % (
                b" ".join(b"%d 0 R" % (5 + 2 * i) for i in range(page_count)),
                page_count,
            ),
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica"
            b" /Encoding /WinAnsiEncoding >>",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold"
            b" /Encoding /WinAnsiEncoding >>",
        ]
        for i, ops in enumerate(self._pages):
            objects.append(
                b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 %.2f %.2f]"
                b" /Resources << /Font << /F1 3 0 R /F2 4 0 R >> >>"
                b" /Contents %d 0 R >>" % (_PAGE_W * _K, _PAGE_H * _K, 6 + 2 * i)
            )
            content = b"".join(ops)
            objects.append(
                b"<< /Length %d >>\nstream\n%s\nendstream" % (len(content), content)
            )

        out = bytearray(b"%PDF-1.4\n")
        offsets = []
        for number, body in enumerate(objects, start=1):
            offsets.append(len(out))
            out += b"%d 0 obj\n%s\nendobj\n" % (number, body)
        xref_at = len(out)
        out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
        for offset in offsets:
            out += b"%010d 00000 n \n" % offset
        out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
            len(objects) + 1,
            xref_at,
        )
        path.write_bytes(bytes(out))


def _subject_heading(doc: _Document, title: str) -> None:
    doc.set_font(16, bold=True)
    doc.cell(10, title, align="C", new_line=True)
    doc.ln(5)
    doc.set_font(14)


def create_test_template(
    template: PdfTemplate, directory: str | Path = DEFAULT_PDF_DIR
) -> Path:
    """Write the test sheet for ``template`` and return the PDF's path."""
    doc = _Document()
    doc.add_page()
    doc.set_font(14)

    doc.cell(10, f"Student ID: {template.student_id}")
    doc.ln(8)
    doc.cell(10, f"Name: {template.name} {template.lastname}")
    doc.ln(15)

    for index, question in enumerate(template.questions):
        if index == 0:
            _subject_heading(doc, template.subject1)
        if index == 30:
            _subject_heading(doc, template.subject2)

        doc.set_font(12, bold=True)
        doc.multi_cell(7, f"{index + 1}. {question.question_text}")
        doc.set_font(12)
        doc.ln(3)

        opts = question.options
        for letter, text, gap in (
            ("A", opts.a, 7),
            ("B", opts.b, 7),
            ("C", opts.c, 7),
            ("D", opts.d, 15),
        ):
            doc.cell(7, f"{letter}) {text}")
            doc.ln(gap)

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{template.template_id}.pdf"
    doc.save(path)
    return path