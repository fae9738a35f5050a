"""
Name and contact-detail extraction.

Each extractor is a small strategy object with ``extract(text)``; patterns
and word lists come from EngineConfig so they can be tuned per deployment.
"""

import re
from typing import List, Optional

from app.core.config import EngineConfig
from app.core.text_normalization import clean_fragment, count_digits, non_empty_lines, split_cells


EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/(?:in|pub)/[\w\-%À-ÿ]+/?", re.IGNORECASE)
GITHUB_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[\w\-%À-ÿ]+", re.IGNORECASE)
LONG_DIGIT_RUN_RE = re.compile(r"\d{10,}")
NAME_WORD_RE = re.compile(r"^[A-Za-z]+\.?$")
NAME_CLEAN_RE = re.compile(r"[^\w\s.]")


class NameExtractor:
    """Candidate name from the first few non-empty lines."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        words = "|".join(re.escape(w) for w in self.config.name_boilerplate_words)
        titles = "|".join(re.escape(t) for t in self.config.name_title_prefixes)
        domains = "|".join(re.escape(d) for d in self.config.name_domains)
        self._exclusions: List[re.Pattern] = [
            re.compile(r"@"),
            LONG_DIGIT_RUN_RE,
            re.compile(rf"\b(?:{words})\b", re.IGNORECASE),
            re.compile(rf"^(?:{titles})\.?\s", re.IGNORECASE),
            re.compile(rf"\.(?:{domains})\b", re.IGNORECASE),
        ]

    def is_excluded(self, line: str) -> bool:
        return any(p.search(line) for p in self._exclusions)

    @staticmethod
    def looks_like_name(line: str) -> bool:
        words = line.split()
        if not 4 <= len(line) <= 60:
            return False
        if not 2 <= len(words) <= 4:
            return False
        return all(NAME_WORD_RE.match(w) and w[0].isupper() for w in words)

    def extract(self, text: str) -> Optional[str]:
        for line in non_empty_lines(text)[: self.config.name_scan_lines]:
            # Two-column headers put the name in the left cell
            candidate = split_cells(line)[0]
            if self.is_excluded(candidate):
                continue
            if self.looks_like_name(candidate):
                return NAME_CLEAN_RE.sub("", candidate).strip()
        return None


class EmailExtractor:
    def extract(self, text: str) -> Optional[str]:
        m = EMAIL_RE.search(text or "")
        return m.group(0) if m else None


class PhoneExtractor:
    """
    Try region-aware patterns in priority order; the first candidate with a
    plausible digit count wins.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._patterns = [re.compile(p, re.IGNORECASE) for p in self.config.phone_patterns]

    def extract(self, text: str) -> Optional[str]:
        for pattern in self._patterns:
            for m in pattern.finditer(text or ""):
                value = m.group("number") if "number" in pattern.groupindex else m.group(0)
                value = value.strip()
                if self.config.phone_min_digits <= count_digits(value) <= self.config.phone_max_digits:
                    return value
        return None


class LocationExtractor:
    """
    Location in three passes: after a context keyword, a ``City, Region``
    line, then a known-city lookup.
    """

    CITY_REGION_RE = re.compile(
        r"^(?P<city>[A-Z][A-Za-z.'-]+(?: [A-Z][A-Za-z.'-]+){0,2}),\s*"
        r"(?P<region>[A-Z]{2}|[A-Z][A-Za-z]+(?: [A-Z][A-Za-z]+){0,2})$"
    )

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        keywords = "|".join(re.escape(k) for k in self.config.location_keywords)
        # The keyword must act as a label: first on its line, or followed by a colon
        self._context_re = re.compile(
            rf"(?:^[^\S\n]*(?:{keywords})\b[^\S\n]*:?|\b(?:{keywords})[^\S\n]*:)[^\S\n]*([^\n.|]+)",
            re.IGNORECASE | re.MULTILINE,
        )
        cities = "|".join(re.escape(c) for c in sorted(self.config.known_cities, key=len, reverse=True))
        self._city_re = re.compile(rf"\b(?:{cities})\b", re.IGNORECASE) if cities else None
        self._skill_words = {s.lower() for s in self.config.all_skills()}

    def _from_context(self, text: str) -> Optional[str]:
        for m in self._context_re.finditer(text):
            value = clean_fragment(split_cells(m.group(1))[0])
            if "@" in value or count_digits(value) > 6:
                continue
            if 2 < len(value) < 100:
                return value
        return None

    def _from_shape(self, text: str) -> Optional[str]:
        for line in non_empty_lines(text)[: self.config.location_scan_lines]:
            for cell in split_cells(line):
                m = self.CITY_REGION_RE.match(cell)
                if not m:
                    continue
                if m.group("city").lower() in self._skill_words or m.group("region").lower() in self._skill_words:
                    continue
                return cell
        return None

    def _from_gazetteer(self, text: str) -> Optional[str]:
        if self._city_re is None:
            return None
        m = self._city_re.search(text)
        if not m:
            return None
        found = m.group(0).lower()
        # Report the city with the gazetteer's casing
        return next(c for c in self.config.known_cities if c.lower() == found)

    def extract(self, text: str) -> Optional[str]:
        text = text or ""
        return self._from_context(text) or self._from_shape(text) or self._from_gazetteer(text)


class LinkedInExtractor:
    def extract(self, text: str) -> Optional[str]:
        m = LINKEDIN_RE.search(text or "")
        return m.group(0).rstrip("/") if m else None


class GitHubExtractor:
    def extract(self, text: str) -> Optional[str]:
        m = GITHUB_RE.search(text or "")
        return m.group(0) if m else None
