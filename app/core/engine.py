"""
Résumé extraction pipeline.

    RawDocument -> decode -> reconstruct layout -> segment sections
                -> (tables, field extractors) -> validate -> ParseResult

The engine holds only configuration and compiled extractors, so one instance
can be shared across threads. ``parse`` never raises for document problems:
decoder failures come back as a tagged ParseFailure.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Union

from app.core.confidence_calculator import ConfidenceCalculator
from app.core.config import EngineConfig
from app.core.contact_extractor import (
    EmailExtractor,
    GitHubExtractor,
    LinkedInExtractor,
    LocationExtractor,
    NameExtractor,
    PhoneExtractor,
)
from app.core.decoder import decode_document, load_raw_document
from app.core.education_parser import EducationExtractor
from app.core.errors import DocumentError
from app.core.experience_parser import WorkExperienceExtractor
from app.core.field_extractor import FieldExtractor
from app.core.layout import reconstruct_document
from app.core.projects_parser import CertificationsExtractor, ProjectsExtractor
from app.core.schemas import (
    ContactInfo,
    DecodedDocument,
    DocumentMetadata,
    ExtractedProfile,
    LayoutLine,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    PersonalInfo,
    RawDocument,
    Section,
    ValidationResult,
)
from app.core.sections import section_text, segment_sections, split_flow_lines
from app.core.skills_extractor import SkillsExtractor
from app.core.table_detector import Table, detect_tables


logger = logging.getLogger(__name__)


class ResumeExtractionEngine:
    """Turns one résumé document into a structured profile plus a confidence score."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.name: FieldExtractor[str] = NameExtractor(self.config)
        self.email: FieldExtractor[str] = EmailExtractor()
        self.phone: FieldExtractor[str] = PhoneExtractor(self.config)
        self.location: FieldExtractor[str] = LocationExtractor(self.config)
        self.linkedin: FieldExtractor[str] = LinkedInExtractor()
        self.github: FieldExtractor[str] = GitHubExtractor()
        self.skills = SkillsExtractor(self.config)
        self.education = EducationExtractor(self.config)
        self.work = WorkExperienceExtractor(self.config)
        self.projects = ProjectsExtractor(self.config)
        self.certifications = CertificationsExtractor(self.config)

    # ----- public boundary ---------------------------------------------------

    def parse(self, raw: RawDocument) -> ParseResult:
        """
        Run the full pipeline on an in-memory document.

        Returns:
            ParseSuccess (possibly with ``validation.is_valid == False``), or
            ParseFailure tagged with the decoder failure kind.
        """
        started = time.perf_counter()
        try:
            decoded = decode_document(raw)
        except DocumentError as exc:
            logger.warning(f"Parse failed [{exc.kind.value}] for {raw.filename or '<buffer>'}: {exc.message}")
            return ParseFailure(kind=exc.kind, message=exc.message)

        text, lines = self._structure(decoded)
        sections = segment_sections(text, lines, self.config)
        tables = self._tables(decoded)
        profile = self.extract_profile(text, sections)
        validation = self.validate(text, profile)

        metadata = DocumentMetadata(
            filename=raw.filename,
            media_type=raw.media_type,
            file_size=len(raw.content),
            page_count=decoded.page_count,
            word_count=len(text.split()),
            character_count=len(text),
            decoder_warnings=list(decoded.warnings),
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"Parsed {raw.filename or '<buffer>'} in {elapsed_ms:.1f}ms: "
            f"{len(sections)} sections, {len(tables)} tables, confidence={validation.confidence}"
        )
        return ParseSuccess(
            profile=profile,
            validation=validation,
            text=text,
            sections=sections,
            tables=tables,
            metadata=metadata,
        )

    def parse_file(self, path: Union[str, Path], media_type: Optional[str] = None) -> ParseResult:
        try:
            raw = load_raw_document(path, media_type)
        except DocumentError as exc:
            logger.warning(f"Parse failed [{exc.kind.value}]: {exc.message}")
            return ParseFailure(kind=exc.kind, message=exc.message)
        return self.parse(raw)

    def extract_profile(self, text: str, sections: Optional[Sequence[Section]] = None) -> ExtractedProfile:
        """
        Run every field extractor over structured text.

        When ``sections`` is not given they are segmented from ``text`` using
        the plain-text header rules.
        """
        if sections is None:
            sections = segment_sections(text, split_flow_lines(text), self.config)

        skills_text = section_text(text, sections, "skills")
        education_text = section_text(text, sections, "education")
        certifications_text = section_text(text, sections, "certifications")

        return ExtractedProfile(
            personal_info=PersonalInfo(name=self.name.extract(text)),
            contact=ContactInfo(
                email=self.email.extract(text),
                phone=self.phone.extract(text),
                location=self.location.extract(text),
                linkedin=self.linkedin.extract(text),
                github=self.github.extract(text),
            ),
            skills=self.skills.extract(skills_text or text),
            education=self.education.extract(education_text or text),
            work_experience=self.work.extract(section_text(text, sections, "experience")),
            projects=self.projects.extract(section_text(text, sections, "projects")),
            certifications=self.certifications.extract(text, certifications_text),
        )

    def validate(self, text: str, profile: Optional[ExtractedProfile] = None) -> ValidationResult:
        return ConfidenceCalculator.validate(text, profile, self.config)

    # ----- pipeline steps ----------------------------------------------------

    def _structure(self, decoded: DecodedDocument):
        """Structured text plus line records for the segmenter."""
        if decoded.kind == "positioned":
            return reconstruct_document(decoded.pages, self.config)
        text = decoded.text or ""
        lines: List[LayoutLine] = split_flow_lines(text)
        return text, lines

    def _tables(self, decoded: DecodedDocument) -> List[Table]:
        tables: List[Table] = []
        for page in decoded.pages:
            tables.extend(detect_tables(page.runs, self.config))
        return tables
