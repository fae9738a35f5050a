import logging
import os
from functools import lru_cache

from fastapi import APIRouter, UploadFile, File, HTTPException

from app.core.config import EngineConfig, load_engine_config
from app.core.engine import ResumeExtractionEngine
from app.core.errors import ParseErrorKind
from app.core.schemas import ParseFailure, ParseSuccess, RawDocument

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

CONFIG_ENV = "RESUME_ENGINE_CONFIG"

STATUS_BY_KIND = {
    ParseErrorKind.UNSUPPORTED_FORMAT: 415,
    ParseErrorKind.CORRUPT_DOCUMENT: 422,
    ParseErrorKind.FILE_NOT_FOUND: 404,
}


@lru_cache(maxsize=1)
def get_engine() -> ResumeExtractionEngine:
    """Shared engine, configured from the JSON file named by RESUME_ENGINE_CONFIG if set."""
    path = os.environ.get(CONFIG_ENV)
    config = load_engine_config(path) if path else EngineConfig()
    if path:
        logger.info(f"Loaded engine config from {path}")
    return ResumeExtractionEngine(config)


@router.post(
    "/parse",
    response_model=ParseSuccess,
    summary="Parse Resume",
    description="Extract a structured candidate profile from a PDF or Word resume. Returns the profile, a 0-100 confidence score with warnings, the reconstructed text, detected sections and tables.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "ok": True,
                        "profile": {
                            "personal_info": {"name": "Jane Doe"},
                            "contact": {
                                "email": "jane.doe@example.com",
                                "phone": "9876543210",
                                "location": "Pune, Maharashtra",
                                "linkedin": None,
                                "github": None
                            },
                            "skills": ["Python", "React", "AWS"],
                            "education": [],
                            "work_experience": [
                                {
                                    "company": "TechCorp Inc.",
                                    "position": "Senior Developer",
                                    "start_date": "2020",
                                    "end_date": None,
                                    "is_current": True,
                                    "description": "",
                                    "experience_level_hint": "senior"
                                }
                            ],
                            "projects": [],
                            "certifications": []
                        },
                        "validation": {"confidence": 100, "is_valid": True, "warnings": []},
                        "text": "Jane Doe\njane.doe@example.com\n9876543210\n...",
                        "sections": [],
                        "tables": [],
                        "metadata": {
                            "filename": "resume.pdf",
                            "media_type": "application/pdf",
                            "file_size": 48213,
                            "page_count": 1,
                            "word_count": 412,
                            "character_count": 2870,
                            "decoder_warnings": []
                        }
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "Document is corrupt, encrypted or has no extractable text"}
    }
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOC or DOCX format)")
):
    """
    Parse a resume file and extract candidate information.

    **Supported formats:**
    - PDF (.pdf) - text layer only, scanned images are rejected
    - DOCX (.docx)
    - DOC (.doc) - accepted, but only Office Open XML content can be read

    **Returns:**
    - **profile**: name, contact details, skills, education, work experience, projects, certifications
    - **validation**: confidence score (0-100), validity flag and warnings
    - **text / sections / tables**: the reconstructed document structure
    - **metadata**: file size, page count, word and character counts
    """
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    raw = RawDocument(
        content=content,
        media_type=(file.content_type or "").lower(),
        filename=file.filename,
    )
    result = get_engine().parse(raw)

    if isinstance(result, ParseFailure):
        raise HTTPException(status_code=STATUS_BY_KIND.get(result.kind, 422), detail=result.message)
    return result
