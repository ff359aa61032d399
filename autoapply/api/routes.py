"""
FastAPI Routes for AutoApply

REST endpoints for CV parsing, job search and bulk applications.

Run with: uvicorn autoapply.api.routes:app --reload
"""

from typing import Optional
from datetime import datetime
import asyncio
import logging

from fastapi import FastAPI, HTTPException, UploadFile, File, Depends
from fastapi.middleware.cors import CORSMiddleware

from autoapply import __version__
from autoapply.core.config import Settings, get_settings
from autoapply.core.errors import (
    ConfigurationError, DocumentDecodeError, DispatchRejected, ListingSourceError
)
from autoapply.core.schemas import ApplyRequest, DispatchReport
from autoapply.agents.cv_parser.cv_parser import CVParser
from autoapply.agents.discovery.discovery_agent import JSearchClient
from autoapply.services.composer import attachment_from_profile
from autoapply.services.dispatcher import ApplicationDispatcher
from autoapply.services.mailer import EmailSender, build_email_sender

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ============================================================================
# FastAPI App Setup
# ============================================================================

app = FastAPI(
    title="AutoApply UAE API",
    description="CV parsing, UAE job search and automated applications",
    version=__version__
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Dependencies
# ============================================================================

def get_cv_parser(settings: Settings = Depends(get_settings)) -> CVParser:
    return CVParser(parser_settings=settings.parser)


def get_job_source(settings: Settings = Depends(get_settings)) -> JSearchClient:
    """JSearch client; fails the request when no API key is configured."""
    try:
        return JSearchClient(settings.job_search)
    except ConfigurationError as e:
        logger.error(f"Job search unavailable: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def get_email_sender(settings: Settings = Depends(get_settings)) -> Optional[EmailSender]:
    """Configured email sender, or None when credentials are missing."""
    try:
        return build_email_sender(settings.mail)
    except ConfigurationError as e:
        logger.warning(f"Email sender unavailable: {e}")
        return None


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__
    }


# ============================================================================
# CV Endpoints
# ============================================================================

@app.post("/api/parse-cv")
async def parse_cv(file: Optional[UploadFile] = File(None),
                   parser: CVParser = Depends(get_cv_parser),
                   settings: Settings = Depends(get_settings)):
    """
    Upload a CV and extract profile fields.

    The returned profile carries the file itself (base64) so it can be
    sent back unchanged to /api/apply.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    logger.info(f"Parsing CV: {file.filename}")
    content = await file.read()

    try:
        profile, text = await asyncio.to_thread(
            parser.parse_document, content, file.filename or ""
        )
    except DocumentDecodeError as e:
        logger.error(f"CV parse error: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "success": True,
        "data": profile.dict(by_alias=True),
        "rawTextPreview": text[:settings.parser.raw_preview_chars]
    }


# ============================================================================
# Job Search Endpoints
# ============================================================================

@app.get("/api/jobs")
def search_jobs(query: str = "", page: int = 1, employment_type: str = "",
                date_posted: str = "all",
                source: JSearchClient = Depends(get_job_source)):
    """Search UAE job listings (one page per call)."""
    try:
        jobs = source.search(
            query or None,
            page=page,
            employment_type=employment_type or None,
            date_posted=date_posted or "all"
        )
    except ListingSourceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return {
        "data": [job.dict() for job in jobs],
        "total": len(jobs),
        "page": page
    }


# ============================================================================
# Application Endpoints
# ============================================================================

@app.post("/api/apply", response_model=DispatchReport)
async def apply_to_jobs(request: ApplyRequest,
                        sender: Optional[EmailSender] = Depends(get_email_sender),
                        settings: Settings = Depends(get_settings)):
    """
    Email an application for each job in the request.

    The UI posts one job at a time for progress feedback; a longer list
    is processed in order within one request. Failed sends show up as
    failed results, not as an error response.
    """
    if not request.jobs:
        raise HTTPException(status_code=400, detail="No jobs provided")

    if request.cv_profile is None:
        raise HTTPException(status_code=400, detail="CV profile not provided")

    if sender is None:
        raise HTTPException(status_code=500, detail="Email service not configured")

    try:
        attachment = attachment_from_profile(request.cv_profile)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    dispatcher = ApplicationDispatcher(sender, from_address=settings.mail.from_address)

    try:
        return await dispatcher.dispatch(request.jobs, request.cv_profile, attachment)
    except DispatchRejected as e:
        raise HTTPException(status_code=400, detail=str(e))


# ============================================================================
# Startup Event
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Initialize on startup."""
    logger.info("AutoApply API starting up...")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
