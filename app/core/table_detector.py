"""
Best-effort table detection over positioned runs.

Runs are bucketed into rows by rounding y to a fixed tolerance. Inside a row,
runs separated by less than the cell gap merge into one cell. Three or more
consecutive rows with at least two cells each form a table. The result is
advisory and is not consumed by the field extractors.
"""

import logging
from typing import Dict, List, Optional, Sequence

from app.core.config import EngineConfig
from app.core.schemas import PositionedTextRun


logger = logging.getLogger(__name__)

Table = List[List[str]]


def bucket_rows(runs: Sequence[PositionedTextRun], tolerance: float) -> List[List[int]]:
    """Group run indices by rounded y, rows ordered top to bottom, indices by x."""
    tol = tolerance if tolerance > 0 else 1.0
    buckets: Dict[float, List[int]] = {}
    for i, run in enumerate(runs):
        if not run.text.strip():
            continue
        key = round(run.y / tol) * tol
        buckets.setdefault(key, []).append(i)
    rows = []
    for key in sorted(buckets, reverse=True):
        rows.append(sorted(buckets[key], key=lambda i: runs[i].x))
    return rows


def row_cells(runs: Sequence[PositionedTextRun], row: Sequence[int], cell_gap: float) -> List[str]:
    """Merge horizontally adjacent runs of one row into cell strings."""
    cells: List[str] = []
    right_edge: Optional[float] = None
    for i in row:
        run = runs[i]
        text = run.text.strip()
        if right_edge is not None and run.x - right_edge <= cell_gap:
            cells[-1] = f"{cells[-1]} {text}"
        else:
            cells.append(text)
        right_edge = run.x + run.width
    return cells


def detect_tables(
    runs: Sequence[PositionedTextRun],
    config: Optional[EngineConfig] = None,
) -> List[Table]:
    """
    Find grids in one page's runs.

    Returns:
        Tables as row-major lists of cell strings, cells ordered by ascending x.
    """
    config = config or EngineConfig()
    rows = [
        row_cells(runs, row, config.table_cell_gap)
        for row in bucket_rows(runs, config.table_row_tolerance)
    ]

    tables: List[Table] = []
    i = 0
    while i < len(rows):
        j = i
        while j < len(rows) and len(rows[j]) >= config.table_min_columns:
            j += 1
        if j - i >= config.table_min_rows:
            tables.append(rows[i:j])
            i = j
        else:
            i += 1
    if tables:
        logger.debug(f"Detected {len(tables)} table(s): {[len(t) for t in tables]} rows")
    return tables
