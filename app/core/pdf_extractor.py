"""
PDF decoding into positioned text runs.

pdfplumber reports word boxes in a top-left coordinate system (``top`` grows
downward). The layout reconstructor works in page space with the origin at
the bottom-left, so each word's baseline is flipped against the page height.
"""

import logging
from io import BytesIO
from typing import Any, Dict, List, Tuple

import pdfplumber

from app.core.errors import CorruptDocumentError
from app.core.schemas import DecodedDocument, FontWeightHint, PageLayout, PositionedTextRun


logger = logging.getLogger(__name__)

BOLD_FONT_MARKERS = ("bold", "black", "heavy", "semibold", "demi")


def _font_weight(fontname: str) -> FontWeightHint:
    """Guess weight from the font name, e.g. 'ABCDEE+Helvetica-Bold'."""
    if not fontname:
        return FontWeightHint.UNKNOWN
    # Subset fonts carry a random prefix before '+'
    if "+" in fontname:
        fontname = fontname.split("+", 1)[1]
    lowered = fontname.lower()
    if any(marker in lowered for marker in BOLD_FONT_MARKERS):
        return FontWeightHint.BOLD
    return FontWeightHint.NORMAL


def _word_to_run(word: Dict[str, Any], page_height: float) -> PositionedTextRun:
    x0 = float(word["x0"])
    x1 = float(word["x1"])
    top = float(word["top"])
    bottom = float(word["bottom"])
    return PositionedTextRun(
        text=word["text"],
        x=x0,
        y=page_height - bottom,
        width=max(0.0, x1 - x0),
        height=max(0.0, bottom - top),
        font_weight=_font_weight(word.get("fontname") or ""),
    )


def extract_page_runs(page: Any) -> List[PositionedTextRun]:
    """
    Extract word-level runs from one pdfplumber page.

    Words are split when font name or size changes so a bold heading glued to
    regular text still produces separate runs.
    """
    words = page.extract_words(
        x_tolerance=2,
        y_tolerance=2,
        keep_blank_chars=False,
        extra_attrs=["fontname", "size"],
    )
    height = float(page.height)
    return [_word_to_run(w, height) for w in words if (w.get("text") or "").strip()]


def extract_pdf_runs(pdf_bytes: bytes) -> Tuple[List[PageLayout], int]:
    """Open the PDF from memory and return one PageLayout per page plus the page count."""
    pages: List[PageLayout] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page_i, page in enumerate(pdf.pages, start=1):
            runs = extract_page_runs(page)
            pages.append(
                PageLayout(
                    number=page_i,
                    width=float(page.width),
                    height=float(page.height),
                    runs=runs,
                )
            )
        page_count = len(pdf.pages)
    return pages, page_count


def decode_pdf(pdf_bytes: bytes) -> DecodedDocument:
    """
    Decode a PDF into positioned runs.

    Raises:
        CorruptDocumentError: the file is encrypted or malformed, or carries no
            text layer at all (scanned image).
    """
    try:
        pages, page_count = extract_pdf_runs(pdf_bytes)
    except Exception as exc:  # pdfminer raises a wide variety of types
        logger.warning(f"PDF decoding failed: {exc!r}")
        raise CorruptDocumentError(
            "Unable to parse PDF file. It may be corrupted, password-protected, or a scanned image."
        ) from exc

    total_runs = sum(len(p.runs) for p in pages)
    logger.debug(f"Decoded PDF: {page_count} pages, {total_runs} runs")
    if total_runs == 0:
        raise CorruptDocumentError(
            "PDF appears to have no extractable text. It may be a scanned image."
        )

    return DecodedDocument(kind="positioned", pages=pages, page_count=page_count)
