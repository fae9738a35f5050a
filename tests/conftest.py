from io import BytesIO
from typing import Iterable, List, Sequence, Tuple, Union

import pytest
from docx import Document


# (text, x, y, size, bold) in PDF user space, origin bottom-left
PdfItem = Tuple[str, float, float, float, bool]
LineSpec = Union[str, Tuple[str, bool], None]

PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Iterable[PdfItem]]) -> bytes:
    """
    Write a minimal text-only PDF using the standard Helvetica fonts.

    Object layout: 1 catalog, 2 page tree, 3 Helvetica, 4 Helvetica-Bold,
    then a (page, content stream) pair per page.
    """
    page_nums = [5 + 2 * i for i in range(len(pages))]
    objects: List[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{n} 0 R" for n in page_nums), len(pages))
        ).encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold /Encoding /WinAnsiEncoding >>",
    ]
    for page_num, items in zip(page_nums, pages):
        ops = []
        for text, x, y, size, bold in items:
            font = "F2" if bold else "F1"
            ops.append(f"BT /{font} {size} Tf {x} {y} Td ({_escape(text)}) Tj ET")
        stream = "\n".join(ops).encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                f"/Resources << /Font << /F1 3 0 R /F2 4 0 R >> >> /Contents {page_num + 1} 0 R >>"
            ).encode("ascii")
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n".encode("ascii") + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("ascii")
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode("ascii")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n"
    ).encode("ascii")
    return bytes(out)


def lines_to_items(lines: Sequence[LineSpec], top: float = 740, spacing: float = 18,
                   x: float = 72, size: float = 11) -> List[PdfItem]:
    """Lay lines out top to bottom; None leaves an empty line."""
    items: List[PdfItem] = []
    y = top
    for line in lines:
        if line is not None:
            text, bold = (line, False) if isinstance(line, str) else line
            items.append((text, x, y, size, bold))
        y -= spacing
    return items


def build_docx(paragraphs: Sequence[str]) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def pdf_from_lines():
    def _make(*pages: Sequence[LineSpec]) -> bytes:
        return build_pdf([lines_to_items(p) for p in pages])
    return _make


@pytest.fixture
def make_docx():
    return build_docx


@pytest.fixture
def resume_lines():
    return [
        "Jane Doe",
        "jane.doe@example.com",
        "9876543210",
        ("EXPERIENCE", True),
        "Senior Developer at TechCorp Inc.",
        "2020 - Present",
        "Built scalable REST APIs.",
        ("SKILLS", True),
        "Python, React, Docker",
    ]
