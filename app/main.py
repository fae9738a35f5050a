import logging
import os

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from app.api.routes.parse import router as parse_router

logging.basicConfig(
    level=os.environ.get("RESUME_ENGINE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Resume Extraction Engine",
    description="Deterministic resume parsing service that turns PDF/DOC/DOCX resumes into a structured candidate profile with a confidence score",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-extraction-engine", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Extraction API",
        version="0.1.0",
        description="Resume-to-profile extraction for candidate application pre-fill",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
