"""
Education parsing module for detecting and extracting education entries from resumes.

A line matching one of the ordered degree patterns opens a new entry. The
degree line itself may already carry the field of study, institution, year
and grade; later lines fill whatever is still missing until the next degree
line or the end of the section.
"""

import re
from typing import List, Optional, Tuple

from app.core.config import EngineConfig
from app.core.scanner import scan_entries
from app.core.schemas import EducationEntry
from app.core.text_normalization import clean_fragment, find_years, non_empty_lines, strip_bullet


# Splits a line into the pieces résumé writers separate with commas, pipes,
# dashes or column gaps.
PART_SPLIT_RE = re.compile(r"\s{2,}|,|\||\s[-–—]\s")
FIELD_IN_RE = re.compile(r"\bin\s+([^,|()\d]+)", re.IGNORECASE)
FIELD_PAREN_RE = re.compile(r"\(([^)\d]+)\)")
FIELD_CUT_RE = re.compile(r"\s[-–—]\s|\s+(?:from|at)\s+|\s{2,}", re.IGNORECASE)
FROM_AT_RE = re.compile(r"\b(?:from|at)\s+(.+)$", re.IGNORECASE)
YEAR_SPAN_RE = re.compile(r"\(?\b(?:19|20)\d{2}\b(?:\s*(?:[-–—]|to)\s*(?:\b(?:19|20)\d{2}\b|present|current))?\)?", re.IGNORECASE)


class EducationExtractor:
    """Education entries from an Education section (or the whole text)."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._degrees: List[Tuple[str, re.Pattern]] = [
            (d.label, re.compile(d.pattern, re.IGNORECASE)) for d in self.config.degree_patterns
        ]
        institutions = "|".join(re.escape(k) for k in self.config.institution_keywords)
        self._institution_re = re.compile(rf"\b(?:{institutions})\b", re.IGNORECASE)
        grades = "|".join(re.escape(k) for k in self.config.grade_keywords)
        self._grade_re = re.compile(
            rf"\b(?:{grades})\b\s*[:\-]?\s*(\d+(?:\.\d+)?(?:\s*/\s*\d+(?:\.\d+)?)?\s*%?)",
            re.IGNORECASE,
        )

    # ----- line classifiers -------------------------------------------------

    def match_degree(self, line: str) -> Optional[Tuple[str, re.Match]]:
        for label, pattern in self._degrees:
            m = pattern.search(line)
            if m:
                return label, m
        return None

    def institution_in(self, line: str) -> Optional[str]:
        """Institution name from the part of ``line`` holding an institution keyword."""
        for part in PART_SPLIT_RE.split(line):
            if not self._institution_re.search(part):
                continue
            if self.match_degree(part):
                # "B.Tech from XYZ Institute": keep what follows from/at
                m = FROM_AT_RE.search(part)
                if not m:
                    continue
                part = m.group(1)
            value = clean_fragment(YEAR_SPAN_RE.sub("", part))
            if value:
                return value
        return None

    def grade_in(self, line: str) -> Optional[str]:
        m = self._grade_re.search(line)
        return m.group(1).strip() if m else None

    @staticmethod
    def field_of_study_in(rest: str) -> str:
        """Field of study from the text after the degree keyword."""
        m = FIELD_IN_RE.search(rest) or FIELD_PAREN_RE.search(rest)
        if not m:
            return ""
        value = FIELD_CUT_RE.split(m.group(1), maxsplit=1)[0]
        return clean_fragment(value)

    # ----- scanner rules ----------------------------------------------------

    def start(self, line: str) -> Optional[EducationEntry]:
        hit = self.match_degree(line)
        if hit is None:
            return None
        label, m = hit
        years = find_years(line)
        return EducationEntry(
            qualification=label,
            field_of_study=self.field_of_study_in(line[m.end():]),
            institution=self.institution_in(line) or "",
            graduation_year=years[-1] if years else None,
            grade_or_gpa=self.grade_in(line),
        )

    def extend(self, entry: EducationEntry, line: str) -> EducationEntry:
        update = {}
        if not entry.institution:
            institution = self.institution_in(line)
            if institution:
                update["institution"] = institution
        if entry.grade_or_gpa is None:
            grade = self.grade_in(line)
            if grade:
                update["grade_or_gpa"] = grade
        if entry.graduation_year is None:
            years = find_years(line)
            if years:
                update["graduation_year"] = years[-1]
        return entry.model_copy(update=update) if update else entry

    def extract(self, text: str) -> List[EducationEntry]:
        lines = [strip_bullet(ln) for ln in non_empty_lines(text)]
        return scan_entries(lines, "education", self)
