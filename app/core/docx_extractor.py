import logging
from io import BytesIO
from typing import List

from docx import Document

from app.core.errors import CorruptDocumentError
from app.core.schemas import DecodedDocument


logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = "  "


def extract_docx_lines(docx_bytes: bytes) -> List[str]:
    """
    Deterministically extract text lines from a DOCX.

    Body paragraphs come first in document order, then table rows (cells
    joined with the column separator). Empty paragraphs are kept as blank
    lines so paragraph breaks survive into the flat text.
    """
    doc = Document(BytesIO(docx_bytes))
    out: List[str] = [(p.text or "").strip() for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                t = (cell.text or "").strip()
                # Merged cells repeat the same object across the row
                if t and (not cells or cells[-1] != t):
                    cells.append(t)
            if cells:
                out.append(COLUMN_SEPARATOR.join(cells))
    return out


def decode_docx(docx_bytes: bytes) -> DecodedDocument:
    """
    Decode a word-processor document to flat text.

    Raises:
        CorruptDocumentError: python-docx cannot open the package (legacy
            binary .doc, truncated zip, encrypted file).
    """
    try:
        lines = extract_docx_lines(docx_bytes)
    except Exception as exc:
        logger.warning(f"DOCX decoding failed: {exc!r}")
        raise CorruptDocumentError(f"Failed to parse document: {exc}") from exc

    text = "\n".join(lines).strip()
    logger.debug(f"Decoded DOCX: {len(lines)} lines, {len(text)} characters")
    return DecodedDocument(kind="flow", text=text)
