from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import ParseErrorKind


ExperienceLevel = Literal["entry", "mid", "senior", "lead"]


class FontWeightHint(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    UNKNOWN = "unknown"


class RawDocument(BaseModel):
    """Uploaded file bytes plus the media type the caller declared."""
    model_config = ConfigDict(frozen=True)

    content: bytes
    media_type: str = Field(default="", description="Short name (pdf, docx) or MIME type")
    filename: Optional[str] = None


class PositionedTextRun(BaseModel):
    """One decoded word run. Origin bottom-left, y is the baseline and grows upward."""
    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_weight: FontWeightHint = FontWeightHint.UNKNOWN

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def is_bold(self) -> bool:
        return self.font_weight == FontWeightHint.BOLD


class PageLayout(BaseModel):
    number: int
    width: float = 0.0
    height: float = 0.0
    runs: List[PositionedTextRun] = Field(default_factory=list)


class DecodedDocument(BaseModel):
    kind: Literal["positioned", "flow"]
    pages: List[PageLayout] = Field(default_factory=list)
    text: Optional[str] = None  # flow documents only
    page_count: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)


class LayoutLine(BaseModel):
    """A reconstructed line with offsets into the structured text."""
    text: str
    start: int
    end: int
    bold: Optional[bool] = None  # None when no style signal exists
    height: Optional[float] = None


class Section(BaseModel):
    name: str
    start_offset: int = Field(..., description="Start of the header line")
    end_offset: int = Field(..., description="Exclusive end: next header start or text length")
    header_end_offset: int = Field(..., description="Where the section content begins")
    header: str = ""


class PersonalInfo(BaseModel):
    name: Optional[str] = None


class ContactInfo(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class EducationEntry(BaseModel):
    """Education entry in candidate profile."""
    qualification: str = ""  # canonical label: Bachelor's, B.Tech, MBA, ...
    field_of_study: str = ""
    institution: str = ""
    graduation_year: Optional[str] = None
    grade_or_gpa: Optional[str] = None


class WorkEntry(BaseModel):
    company: str = ""
    position: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: str = ""
    experience_level_hint: Optional[ExperienceLevel] = None


class ProjectEntry(BaseModel):
    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)


class ExtractedProfile(BaseModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    skills: List[str] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    work_experience: List[WorkEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    confidence: int = Field(..., ge=0, le=100)
    is_valid: bool
    warnings: List[str] = Field(default_factory=list)


class DocumentMetadata(BaseModel):
    filename: Optional[str] = None
    media_type: str
    file_size: int
    page_count: Optional[int] = None
    word_count: int = 0
    character_count: int = 0
    decoder_warnings: List[str] = Field(default_factory=list)


class ParseSuccess(BaseModel):
    ok: Literal[True] = True
    profile: ExtractedProfile
    validation: ValidationResult
    text: str = Field(..., description="Structured text in reconstructed reading order")
    sections: List[Section] = Field(default_factory=list)
    tables: List[List[List[str]]] = Field(default_factory=list)
    metadata: DocumentMetadata


class ParseFailure(BaseModel):
    ok: Literal[False] = False
    kind: ParseErrorKind
    message: str


ParseResult = Union[ParseSuccess, ParseFailure]
