"""
Skill extraction against a fixed technology dictionary.

Matches are boundary-aware so "Java" does not fire inside "JavaScript" and
"C++"/"Node.js" keep their punctuation. Results use the dictionary's casing,
are deduplicated, and are ordered by first occurrence in the text.
"""

import re
from typing import Dict, List, Optional, Tuple

from app.core.config import EngineConfig


def _term_pattern(term: str) -> str:
    return rf"(?<![A-Za-z0-9]){re.escape(term)}(?![A-Za-z0-9+#])"


class SkillsExtractor:

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        case_sensitive = set(self.config.case_sensitive_skills)
        self._matchers: List[Tuple[str, re.Pattern]] = []
        for skill in self.config.all_skills():
            terms = [skill] + self.config.skill_aliases.get(skill, [])
            flags = 0 if skill in case_sensitive else re.IGNORECASE
            pattern = "|".join(_term_pattern(t) for t in terms)
            self._matchers.append((skill, re.compile(pattern, flags)))

    def find_positions(self, text: str) -> Dict[str, int]:
        """First offset of every dictionary skill present in ``text``."""
        found: Dict[str, int] = {}
        for skill, matcher in self._matchers:
            m = matcher.search(text)
            if m:
                found[skill] = m.start()
        return found

    def extract(self, text: str) -> List[str]:
        positions = self.find_positions(text or "")
        # Longer names win ties at one offset ("React Native" over "React")
        ordered = sorted(positions.items(), key=lambda kv: (kv[1], -len(kv[0])))
        return [skill for skill, _ in ordered]
