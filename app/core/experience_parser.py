"""
Work-experience extraction.

Job lines are recognised by three shapes, tried in order:

    Senior Developer at TechCorp Inc.
    Senior Developer - TechCorp Inc.
    Senior Developer, TechCorp Inc.

A date range on the job line is cut out before matching and parsed into
start/end dates; a line holding only a date range dates the entry above it.
Longer free-text lines become the entry's description.
"""

import logging
import re
from typing import List, Optional, Tuple

from app.core.config import EngineConfig
from app.core.scanner import scan_entries
from app.core.schemas import WorkEntry
from app.core.text_normalization import clean_fragment, collapse_spaces, count_words, non_empty_lines, strip_bullet


logger = logging.getLogger(__name__)

MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
DATE = rf"(?:{MONTH}\s+)?(?:19|20)\d{{2}}"
DATE_RANGE_RE = re.compile(
    rf"\b(?P<start>{DATE})\s*(?:-|–|—|to)\s*(?P<end>{DATE}\b|present\b|current\b|now\b)",
    re.IGNORECASE,
)
ONGOING = {"present", "current", "now"}

JOB_PATTERNS = [
    re.compile(r"^(?P<position>[A-Z][^|@]*?)\s+(?:at|@)\s+(?P<company>[A-Z0-9].*)$"),
    re.compile(r"^(?P<position>[A-Z][^|]*?)\s+[-–—|]\s+(?P<company>[A-Z0-9].*)$"),
    re.compile(r"^(?P<position>[A-Z][^,]*?),\s+(?P<company>[A-Z0-9].*)$"),
]
MAX_SIDE_WORDS = 6
COMPANY_SUFFIXES = {"inc", "ltd", "corp", "co", "llc", "pvt", "plc", "gmbh", "llp", "ag", "sa", "limited"}
TOKEN_RE = re.compile(r"[a-z0-9]+")
SENTENCE_STARTERS = {
    "led", "built", "ran", "won", "drove", "owned", "helped", "responsible", "involved", "worked",
}
CONNECTORS = {"of", "and", "for", "in", "to", "the", "de", "&"}


def extract_date_range(text: str) -> Tuple[Optional[str], Optional[str], bool, str]:
    """
    Find a date range and return (start, end, is_current, remainder).

    "Present", "Current" and "Now" mark an ongoing role: ``end`` is None and
    ``is_current`` is True. ``remainder`` is the text with the range removed.
    """
    m = DATE_RANGE_RE.search(text)
    if not m:
        return None, None, False, text
    start = collapse_spaces(m.group("start"))
    end = collapse_spaces(m.group("end"))
    is_current = end.lower() in ONGOING
    remainder = text[: m.start()] + " " + text[m.end():]
    return start, (None if is_current else end), is_current, remainder


def _looks_like_sentence(position: str, company: str, line: str) -> bool:
    first = position.split()[0]
    # Achievement bullets open with a verb ("Developed", "Led", "Responsible for")
    if first.lower() in SENTENCE_STARTERS:
        return True
    if len(first) > 3 and first.lower().endswith("ed"):
        return True
    # Titles and company names are capitalised apart from short connectors
    for word in (position + " " + company).split():
        if word[0].isalpha() and word.islower() and word not in CONNECTORS:
            return True
    if line.rstrip().endswith("."):
        last = TOKEN_RE.findall(company.lower())
        if not last or last[-1] not in COMPANY_SUFFIXES:
            return True
    return False


def match_job_line(text: str) -> Optional[Tuple[str, str]]:
    """Return (position, company) for a job line, or None."""
    candidate = clean_fragment(text)
    if not candidate:
        return None
    for pattern in JOB_PATTERNS:
        m = pattern.match(candidate)
        if not m:
            continue
        position = clean_fragment(m.group("position"))
        company = clean_fragment(m.group("company"))
        if not position or not company:
            continue
        if count_words(position) > MAX_SIDE_WORDS or count_words(company) > MAX_SIDE_WORDS:
            continue
        if _looks_like_sentence(position, company, candidate):
            continue
        return position, company
    return None


class WorkExperienceExtractor:

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def level_hint(self, position: str) -> Optional[str]:
        tokens = set(TOKEN_RE.findall(position.lower()))
        for level, keywords in self.config.experience_levels.items():
            if tokens.intersection(keywords):
                return level
        return None

    def start(self, line: str) -> Optional[WorkEntry]:
        start, end, is_current, remainder = extract_date_range(line)
        job = match_job_line(remainder)
        if job is None:
            return None
        position, company = job
        return WorkEntry(
            company=company,
            position=position,
            start_date=start,
            end_date=end,
            is_current=is_current,
            experience_level_hint=self.level_hint(position),
        )

    def extend(self, entry: WorkEntry, line: str) -> WorkEntry:
        start, end, is_current, remainder = extract_date_range(line)
        if start is not None and not clean_fragment(remainder):
            if entry.start_date is None:
                return entry.model_copy(update={"start_date": start, "end_date": end, "is_current": is_current})
            return entry
        if len(line) > self.config.description_min_length:
            description = f"{entry.description} {line}".strip()
            return entry.model_copy(update={"description": description})
        return entry

    def extract(self, text: Optional[str]) -> List[WorkEntry]:
        """
        Entries from the Experience section content.

        Without a section, or when nothing is recognised, a single blank
        entry is returned for the form to fill in.
        """
        entries: List[WorkEntry] = []
        if text:
            lines = [strip_bullet(ln) for ln in non_empty_lines(text)]
            entries = scan_entries(lines, "experience", self)
        if not entries:
            logger.debug("No work entries recognised, returning blank entry")
            return [WorkEntry()]
        return entries
