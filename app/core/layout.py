"""
Layout reconstruction from positioned text runs.

PDF pages carry no semantic structure, only absolute positions. Reading order
is rebuilt by sorting runs top-to-bottom, left-to-right and classifying each
gap between consecutive runs:

    vertical gap > 1.5 x run height   -> line break        "\\n"
    vertical gap > 3 x run height     -> paragraph break   "\\n\\n"
    horizontal jump past the run      -> column separator  "  "
    otherwise                         -> word space        " "

The page's run list is treated as an arena; ordering goes through a separate
index array so no run objects are copied or nested.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from app.core.config import EngineConfig
from app.core.schemas import LayoutLine, PageLayout, PositionedTextRun


logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"
COLUMN_SEPARATOR = "  "


def reading_order(runs: Sequence[PositionedTextRun], y_tolerance: float = 1.0) -> List[int]:
    """
    Indices of ``runs`` sorted by descending y, then ascending x.

    Baselines that fall in the same ``y_tolerance`` bucket count as one row so
    bold and regular words on one line are not split by sub-point jitter.
    """
    tol = y_tolerance if y_tolerance > 0 else 1.0
    return sorted(range(len(runs)), key=lambda i: (-round(runs[i].y / tol), runs[i].x))


def classify_gap(
    run: PositionedTextRun,
    last_y: float,
    last_x: float,
    config: EngineConfig,
) -> str:
    """Separator to insert before ``run`` given the previous run's baseline and right edge."""
    height = run.height or config.default_run_height
    dy = abs(run.y - last_y)
    if dy > height * config.line_break_ratio:
        if dy > height * config.paragraph_break_ratio:
            return "\n\n"
        return "\n"
    if run.x > last_x + run.width + config.column_gap:
        return COLUMN_SEPARATOR
    return " "


class _LineBuilder:
    """Accumulates style signals for the line currently being written."""

    def __init__(self, start: int):
        self.start = start
        self.all_bold = True
        self.max_height = 0.0

    def add(self, run: PositionedTextRun) -> None:
        self.all_bold = self.all_bold and run.is_bold
        self.max_height = max(self.max_height, run.height)

    def close(self, text: str, end: int) -> LayoutLine:
        return LayoutLine(
            text=text[self.start:end],
            start=self.start,
            end=end,
            bold=self.all_bold,
            height=self.max_height,
        )


def reconstruct_page(
    page: PageLayout,
    config: Optional[EngineConfig] = None,
) -> Tuple[str, List[LayoutLine]]:
    """
    Rebuild one page's text in reading order.

    Returns:
        (page_text, lines) where each line's offsets index into page_text.
    """
    config = config or EngineConfig()
    runs = page.runs
    order = [i for i in reading_order(runs, config.sort_y_tolerance) if runs[i].text.strip()]

    parts: List[str] = []
    length = 0
    lines: List[LayoutLine] = []
    current: Optional[_LineBuilder] = None
    last_y = 0.0
    last_x = 0.0

    for idx in order:
        run = runs[idx]
        text = run.text.strip()
        if current is None:
            current = _LineBuilder(start=0)
        else:
            sep = classify_gap(run, last_y, last_x, config)
            if sep in ("\n", "\n\n"):
                lines.append(current.close("".join(parts), length))
                current = _LineBuilder(start=length + len(sep))
            parts.append(sep)
            length += len(sep)
        parts.append(text)
        length += len(text)
        current.add(run)
        last_y = run.y
        last_x = run.x + run.width

    page_text = "".join(parts)
    if current is not None:
        lines.append(current.close(page_text, length))
    return page_text, lines


def reconstruct_document(
    pages: Sequence[PageLayout],
    config: Optional[EngineConfig] = None,
) -> Tuple[str, List[LayoutLine]]:
    """
    Reconstruct every page and join them with a paragraph break.

    Line offsets are shifted so they index into the combined text.
    """
    config = config or EngineConfig()
    texts: List[str] = []
    all_lines: List[LayoutLine] = []
    offset = 0
    for page in pages:
        page_text, page_lines = reconstruct_page(page, config)
        if not page_text:
            continue
        if texts:
            offset += len(PAGE_SEPARATOR)
        for line in page_lines:
            all_lines.append(line.model_copy(update={"start": line.start + offset, "end": line.end + offset}))
        texts.append(page_text)
        offset += len(page_text)

    text = PAGE_SEPARATOR.join(texts)
    logger.debug(f"Reconstructed {len(pages)} pages into {len(all_lines)} lines")
    return text, all_lines
