"""
Text normalization helpers shared by the field extractors.

Structured text keeps its layout separators (double space between columns,
blank lines between paragraphs); these helpers turn it into clean lines and
cells without losing that information where it matters.
"""

import re
from typing import List


BULLET_RE = re.compile(r"^[\s•●▪◦■\-*>+–]+")
COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
WHITESPACE_RE = re.compile(r"\s+")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


def collapse_spaces(text: str) -> str:
    """Collapse any whitespace run (including column separators) to one space."""
    return WHITESPACE_RE.sub(" ", text or "").strip()


def strip_bullet(text: str) -> str:
    """Remove a leading bullet glyph or dash."""
    return BULLET_RE.sub("", text or "").strip()


def is_bullet(text: str) -> bool:
    return bool(BULLET_RE.match(text or "")) and bool(strip_bullet(text))


def non_empty_lines(text: str) -> List[str]:
    """Split into stripped, non-empty lines."""
    return [ln.strip() for ln in (text or "").splitlines() if ln.strip()]


def split_cells(line: str) -> List[str]:
    """Split a line on column separators (two or more spaces)."""
    return [c.strip() for c in COLUMN_SPLIT_RE.split(line.strip()) if c.strip()]


def count_digits(text: str) -> int:
    return sum(1 for c in text if c.isdigit())


def count_words(text: str) -> int:
    return len((text or "").split())


def find_years(text: str) -> List[str]:
    return YEAR_RE.findall(text or "")


def clean_fragment(text: str) -> str:
    """Trim separators and stray punctuation left around an extracted fragment."""
    t = collapse_spaces(text)
    return t.strip(" ,;:|-–—()")
