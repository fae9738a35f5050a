"""
Document decoder: media-type dispatch for the two supported families.

Page-description documents (PDF) decode to positioned runs; flow documents
(DOC/DOCX) decode to a flat text stream.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from app.core.docx_extractor import decode_docx
from app.core.errors import CorruptDocumentError, DocumentNotFoundError, UnsupportedFormatError
from app.core.pdf_extractor import decode_pdf
from app.core.schemas import DecodedDocument, RawDocument


logger = logging.getLogger(__name__)

PDF_TYPES = {"pdf", ".pdf", "application/pdf"}
DOCX_TYPES = {
    "docx",
    ".docx",
    "doc",
    ".doc",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
GENERIC_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

PDF_MAGIC = b"%PDF-"
ZIP_MAGIC = b"PK\x03\x04"
OLE_MAGIC = b"\xd0\xcf\x11\xe0"

EXTENSION_TYPES = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".doc": "doc",
}


def sniff_media_type(content: bytes) -> Optional[str]:
    """Recognise a family from magic bytes. Returns 'pdf', 'docx', 'doc' or None."""
    head = content[:1024]
    if PDF_MAGIC in head:
        return "pdf"
    if content.startswith(ZIP_MAGIC):
        return "docx"
    if content.startswith(OLE_MAGIC):
        return "doc"
    return None


def resolve_family(raw: RawDocument) -> str:
    """
    Map the declared media type onto 'pdf' or 'flow'.

    A missing or generic declaration falls back to sniffing; the filename
    extension is the last resort.

    Raises:
        UnsupportedFormatError: neither declaration nor content identifies a
            supported family.
    """
    declared = (raw.media_type or "").strip().lower().split(";", 1)[0].strip()
    if declared in PDF_TYPES:
        return "pdf"
    if declared in DOCX_TYPES:
        return "flow"

    if declared in GENERIC_TYPES:
        sniffed = sniff_media_type(raw.content)
        if sniffed is None and raw.filename:
            sniffed = EXTENSION_TYPES.get(Path(raw.filename).suffix.lower())
        if sniffed == "pdf":
            return "pdf"
        if sniffed in ("docx", "doc"):
            return "flow"

    raise UnsupportedFormatError(
        f"Unsupported file format: {raw.media_type or 'unknown'}. Please upload PDF or DOCX files."
    )


def decode_document(raw: RawDocument) -> DecodedDocument:
    """
    Decode a RawDocument by family.

    Raises:
        UnsupportedFormatError, CorruptDocumentError
    """
    family = resolve_family(raw)
    if not raw.content:
        raise CorruptDocumentError("Document is empty.")
    logger.debug(f"Decoding {raw.filename or '<buffer>'} as {family} ({len(raw.content)} bytes)")
    if family == "pdf":
        return decode_pdf(raw.content)
    return decode_docx(raw.content)


def load_raw_document(path: Union[str, Path], media_type: Optional[str] = None) -> RawDocument:
    """
    Read a file fully and wrap it as a RawDocument.

    The media type defaults to one inferred from the extension.

    Raises:
        DocumentNotFoundError: the path does not exist or is not a file.
    """
    p = Path(path)
    if not p.is_file():
        raise DocumentNotFoundError(f"File not found: {os.fspath(path)}")
    with open(p, "rb") as fh:
        content = fh.read()
    if media_type is None:
        media_type = EXTENSION_TYPES.get(p.suffix.lower(), "")
    return RawDocument(content=content, media_type=media_type, filename=p.name)
