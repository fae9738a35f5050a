"""
Confidence scoring for extracted résumé text.

The score gates automatic pre-fill of the candidate form: anything at or below
the validity threshold should be shown to the candidate for review instead.

Scoring (start at 100):
  -30  usable text shorter than the configured minimum (100 chars)
  -20  garbled characters above 10% of the text
  -15  no contact keyword (email / phone / contact)
  -15  no work keyword (experience / work / job / position)

Deductions total at most 80, so the score stays within [20, 100].
"""

import logging
import re
from typing import List, Optional

from app.core.config import EngineConfig
from app.core.schemas import ExtractedProfile, ValidationResult


logger = logging.getLogger(__name__)

# Anything outside ASCII word characters, whitespace and common punctuation
GARBLED_RE = re.compile(r"[^\w\s.,;:!?()\[\]{}<>@#$%^&*+=/\\|`~'\"\-]", re.ASCII)

VALIDITY_THRESHOLD = 50

SHORT_TEXT_PENALTY = 30
GARBLED_PENALTY = 20
NO_CONTACT_PENALTY = 15
NO_EXPERIENCE_PENALTY = 15


def _keyword_re(keywords: List[str]) -> re.Pattern:
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


class ConfidenceCalculator:
    """Central place for all extraction confidence logic."""

    @staticmethod
    def garbled_count(text: str) -> int:
        return len(GARBLED_RE.findall(text))

    @staticmethod
    def usable_length(text: str) -> int:
        """Length of ``text`` not counting garbled characters."""
        return len(text) - ConfidenceCalculator.garbled_count(text)

    @staticmethod
    def has_keyword(text: str, keywords: List[str]) -> bool:
        return bool(keywords) and _keyword_re(keywords).search(text) is not None

    @staticmethod
    def profile_warnings(profile: ExtractedProfile) -> List[str]:
        """Informational warnings about fields the candidate will have to fill in."""
        warnings = []
        if not profile.personal_info.name:
            warnings.append("Candidate name could not be extracted")
        if not profile.contact.email:
            warnings.append("Email address could not be extracted")
        return warnings

    @staticmethod
    def validate(
        text: str,
        profile: Optional[ExtractedProfile] = None,
        config: Optional[EngineConfig] = None,
    ) -> ValidationResult:
        """
        Score extracted text for plausibility.

        Args:
            text: Structured text produced by layout reconstruction
            profile: Extracted profile, when available, for extra warnings
            config: Thresholds and keyword lists

        Returns:
            ValidationResult with confidence 0-100, validity and warnings
        """
        config = config or EngineConfig()
        text = text or ""
        confidence = 100
        warnings: List[str] = []

        if ConfidenceCalculator.usable_length(text) < config.min_text_length:
            confidence -= SHORT_TEXT_PENALTY
            warnings.append("Document text is very short, may indicate parsing issues")

        garbled = ConfidenceCalculator.garbled_count(text)
        if text and garbled > len(text) * config.garbled_ratio:
            confidence -= GARBLED_PENALTY
            warnings.append("Document may contain encoding issues or garbled text")

        if not ConfidenceCalculator.has_keyword(text, config.contact_keywords):
            confidence -= NO_CONTACT_PENALTY
            warnings.append("No contact information detected")

        if not ConfidenceCalculator.has_keyword(text, config.experience_keywords):
            confidence -= NO_EXPERIENCE_PENALTY
            warnings.append("No work experience section detected")

        if profile is not None:
            warnings.extend(ConfidenceCalculator.profile_warnings(profile))

        confidence = max(0, min(100, confidence))
        logger.debug(f"Validation: confidence={confidence}, garbled={garbled}, warnings={len(warnings)}")
        return ValidationResult(
            confidence=confidence,
            is_valid=confidence > VALIDITY_THRESHOLD,
            warnings=warnings,
        )
