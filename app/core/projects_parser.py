"""
Projects and certifications extraction.

Both read their own section's content. Projects use the entry scanner: a
short title-like line opens a project, a "Technologies:" line lists its
stack, anything else extends the description. Certifications are one per
line; without a section only vendor "... Certified ..." phrases are taken.
"""

import re
from typing import List, Optional

from app.core.config import EngineConfig
from app.core.scanner import scan_entries
from app.core.schemas import ProjectEntry
from app.core.skills_extractor import SkillsExtractor
from app.core.text_normalization import clean_fragment, count_words, is_bullet, non_empty_lines, strip_bullet


TECH_LINE_RE = re.compile(r"^(?:technologies|tech stack|tools|built with|stack)\s*(?:used)?\s*[:\-]\s*(.+)$", re.IGNORECASE)
TECH_SPLIT_RE = re.compile(r"\s*[,;/|]\s*")
TITLE_SPLIT_RE = re.compile(r"\s+[|–—-]\s+|:\s+")
MAX_TITLE_WORDS = 8
MAX_TITLE_LENGTH = 80


def _merge(existing: List[str], extra: List[str]) -> List[str]:
    out = list(existing)
    for item in extra:
        if item and item.lower() not in {e.lower() for e in out}:
            out.append(item)
    return out


class ProjectsExtractor:

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._skills = SkillsExtractor(self.config)

    @staticmethod
    def is_title(line: str) -> bool:
        if is_bullet(line) or TECH_LINE_RE.match(line):
            return False
        text = line.strip()
        if not text or not text[0].isupper() or text.endswith("."):
            return False
        if len(text) > MAX_TITLE_LENGTH or count_words(text) > MAX_TITLE_WORDS:
            return False
        first = text.split()[0]
        return not (len(first) > 3 and first.lower().endswith("ed"))

    def start(self, line: str) -> Optional[ProjectEntry]:
        if not self.is_title(line):
            return None
        parts = TITLE_SPLIT_RE.split(line.strip(), maxsplit=1)
        name = clean_fragment(parts[0])
        technologies: List[str] = []
        if len(parts) > 1:
            technologies = self._skills.extract(parts[1])
        return ProjectEntry(name=name, technologies=technologies)

    def extend(self, entry: ProjectEntry, line: str) -> ProjectEntry:
        text = strip_bullet(line)
        m = TECH_LINE_RE.match(text)
        if m:
            listed = [clean_fragment(t) for t in TECH_SPLIT_RE.split(m.group(1))]
            return entry.model_copy(update={"technologies": _merge(entry.technologies, listed)})
        description = f"{entry.description} {text}".strip()
        return entry.model_copy(update={"description": description})

    def extract(self, text: Optional[str]) -> List[ProjectEntry]:
        if not text:
            return []
        projects = scan_entries(non_empty_lines(text), "projects", self)
        # Stack mentioned in prose counts too
        return [
            p.model_copy(update={
                "technologies": _merge(p.technologies, self._skills.extract(f"{p.name} {p.description}"))
            })
            for p in projects
        ]


class CertificationsExtractor:

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        vendors = "|".join(re.escape(v) for v in self.config.certification_vendors)
        self._vendor_re = re.compile(
            rf"\b(?:{vendors})\s+(?:[A-Z][\w\-]*\s+)*?Certified(?:\s+[A-Z][\w\-]*)*"
        )

    def extract(self, text: Optional[str], section: Optional[str] = None) -> List[str]:
        """
        Args:
            text: Whole document text, searched for vendor phrases when no
                section is given
            section: Certifications section content, one certification per line
        """
        found: List[str] = []
        if section is not None:
            candidates = [clean_fragment(strip_bullet(ln)) for ln in non_empty_lines(section)]
        else:
            candidates = [clean_fragment(m.group(0)) for m in self._vendor_re.finditer(text or "")]
        for c in candidates:
            if 2 < len(c) <= 120 and c not in found:
                found.append(c)
        return found
