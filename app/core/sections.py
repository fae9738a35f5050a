"""
Section segmentation for résumé text.

A header is a short line (under 30 characters, at most three words) that
contains a known section keyword and, when style signals exist, stands out
as bold or taller than the document's median run height. Each section spans
from its header line up to the next header of any kind, so consecutive
sections abut and never overlap.
"""

import logging
import re
import statistics
from typing import Dict, List, Optional, Sequence

from app.core.config import EngineConfig
from app.core.schemas import LayoutLine, Section
from app.core.text_normalization import collapse_spaces, count_words


logger = logging.getLogger(__name__)


def split_flow_lines(text: str) -> List[LayoutLine]:
    """Line records for flow documents: offsets only, no style signals."""
    lines: List[LayoutLine] = []
    pos = 0
    for raw in text.split("\n"):
        lines.append(LayoutLine(text=raw, start=pos, end=pos + len(raw)))
        pos += len(raw) + 1
    return lines


def median_height(lines: Sequence[LayoutLine]) -> Optional[float]:
    heights = [ln.height for ln in lines if ln.height]
    if not heights:
        return None
    return statistics.median(heights)


def keyword_pattern(keyword: str) -> str:
    # Whole words only; a plural suffix is allowed ("Qualifications")
    return rf"\b{re.escape(keyword)}(?:s|es)?\b"


def match_section_keyword(line_text: str, section_keywords: Dict[str, List[str]]) -> Optional[str]:
    """Return the first section name with a keyword among the line's words (case-insensitive)."""
    for name, keywords in section_keywords.items():
        if any(re.search(keyword_pattern(kw), line_text, re.IGNORECASE) for kw in keywords):
            return name
    return None


def detect_header(
    line: LayoutLine,
    config: EngineConfig,
    height_median: Optional[float] = None,
) -> Optional[str]:
    """
    Classify a line as a section header.

    Returns the section name, or None when any of the rules fails.
    """
    text = collapse_spaces(line.text)
    # "Frameworks: React, Django" is a labelled value, not a header
    _, colon, value = text.partition(":")
    if colon and value.strip():
        return None
    text = text.strip(" :")
    if not text:
        return None
    if len(text) >= config.header_max_length:
        return None
    if count_words(text) > config.header_max_words:
        return None

    name = match_section_keyword(text, config.section_keywords)
    if name is None:
        return None

    has_style = line.bold is not None or line.height is not None
    if has_style:
        stands_out = bool(line.bold) or (
            height_median is not None and line.height is not None and line.height > height_median
        )
        if not stands_out:
            return None
    return name


def segment_sections(
    text: str,
    lines: Sequence[LayoutLine],
    config: Optional[EngineConfig] = None,
) -> List[Section]:
    """
    Compute section spans over ``text``.

    Args:
        text: Structured text the line offsets point into
        lines: Layout lines (PDF, with style) or split_flow_lines output
        config: Keyword sets and header limits

    Returns:
        Sections ordered by start_offset; empty when no header is recognised.
    """
    config = config or EngineConfig()
    height_median = median_height(lines)

    headers = []
    for line in lines:
        name = detect_header(line, config, height_median)
        if name is None:
            continue
        logger.debug(f"SECTION HEADER DETECTED at offset {line.start}: '{line.text.strip()}' -> '{name}'")
        headers.append((name, line))

    sections: List[Section] = []
    for i, (name, line) in enumerate(headers):
        end = headers[i + 1][1].start if i + 1 < len(headers) else len(text)
        content_start = min(line.end + 1, end)
        sections.append(
            Section(
                name=name,
                start_offset=line.start,
                end_offset=end,
                header_end_offset=content_start,
                header=collapse_spaces(line.text),
            )
        )
    return sections


def section_content(text: str, section: Section) -> str:
    """Text after the header line, up to the section end."""
    return text[section.header_end_offset:section.end_offset].strip("\n")


def find_sections(sections: Sequence[Section], name: str) -> List[Section]:
    return [s for s in sections if s.name == name]


def section_text(text: str, sections: Sequence[Section], name: str) -> Optional[str]:
    """
    Combined content of every section called ``name``.

    Returns None when the document has no such section, so callers can fall
    back to whole-document heuristics.
    """
    matches = find_sections(sections, name)
    if not matches:
        return None
    return "\n".join(section_content(text, s) for s in matches)
