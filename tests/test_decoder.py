"""Media-type dispatch, file loading and decoder failure modes."""

from io import BytesIO

import pytest
from docx import Document

from app.core.decoder import decode_document, load_raw_document, resolve_family, sniff_media_type
from app.core.docx_extractor import decode_docx, extract_docx_lines
from app.core.errors import CorruptDocumentError, DocumentNotFoundError, ParseErrorKind, UnsupportedFormatError
from app.core.pdf_extractor import decode_pdf
from app.core.schemas import FontWeightHint, RawDocument


DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@pytest.mark.parametrize("media_type,family", [
    ("pdf", "pdf"),
    ("application/pdf", "pdf"),
    ("docx", "flow"),
    (DOCX_MIME, "flow"),
    ("application/msword", "flow"),
    ("doc", "flow"),
])
def test_declared_media_types(media_type, family):
    assert resolve_family(RawDocument(content=b"x", media_type=media_type)) == family


def test_sniffing_generic_declarations():
    assert sniff_media_type(b"%PDF-1.4\n...") == "pdf"
    assert sniff_media_type(b"PK\x03\x04rest") == "docx"
    assert sniff_media_type(b"\xd0\xcf\x11\xe0rest") == "doc"
    assert sniff_media_type(b"hello") is None
    raw = RawDocument(content=b"%PDF-1.4\n", media_type="application/octet-stream")
    assert resolve_family(raw) == "pdf"


def test_extension_is_last_resort():
    raw = RawDocument(content=b"????", media_type="", filename="cv.docx")
    assert resolve_family(raw) == "flow"


def test_unsupported_format():
    with pytest.raises(UnsupportedFormatError) as exc:
        resolve_family(RawDocument(content=b"hello", media_type="text/plain"))
    assert exc.value.kind == ParseErrorKind.UNSUPPORTED_FORMAT


def test_empty_content_is_corrupt():
    with pytest.raises(CorruptDocumentError):
        decode_document(RawDocument(content=b"", media_type="pdf"))


def test_garbage_pdf_is_corrupt():
    with pytest.raises(CorruptDocumentError):
        decode_pdf(b"%PDF-1.4 this is not really a pdf")


def test_legacy_doc_is_corrupt():
    raw = RawDocument(content=b"\xd0\xcf\x11\xe0" + b"\x00" * 64, media_type="application/msword")
    with pytest.raises(CorruptDocumentError):
        decode_document(raw)


def test_pdf_without_text_is_corrupt(make_pdf):
    with pytest.raises(CorruptDocumentError):
        decode_pdf(make_pdf([[]]))


def test_pdf_runs_geometry_and_weight(make_pdf):
    pdf = make_pdf([[("Heading", 72, 700, 14, True), ("body", 72, 680, 11, False)]])
    decoded = decode_pdf(pdf)
    assert decoded.kind == "positioned"
    assert decoded.page_count == 1
    runs = decoded.pages[0].runs
    assert [r.text for r in runs] == ["Heading", "body"]
    heading, body = runs
    assert heading.font_weight == FontWeightHint.BOLD
    assert body.font_weight == FontWeightHint.NORMAL
    assert heading.y > body.y
    assert heading.height > body.height
    assert heading.x == pytest.approx(72, abs=0.5)


def test_docx_paragraphs_then_tables(make_docx):
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "B.Tech"
    table.rows[0].cells[1].text = "2016"
    buf = BytesIO()
    doc.save(buf)

    lines = extract_docx_lines(buf.getvalue())
    assert "Jane Doe" in lines
    assert lines[-1] == "B.Tech  2016"
    decoded = decode_docx(make_docx(["Jane Doe", "jane.doe@example.com"]))
    assert decoded.kind == "flow"
    assert decoded.text == "Jane Doe\njane.doe@example.com"


def test_load_raw_document(tmp_path):
    path = tmp_path / "resume.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    raw = load_raw_document(path)
    assert raw.media_type == "pdf"
    assert raw.filename == "resume.pdf"
    assert raw.content == b"%PDF-1.4\n"


def test_load_missing_file(tmp_path):
    with pytest.raises(DocumentNotFoundError) as exc:
        load_raw_document(tmp_path / "missing.pdf")
    assert exc.value.kind == ParseErrorKind.FILE_NOT_FOUND
