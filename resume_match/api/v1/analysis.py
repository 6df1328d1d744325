import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from pydantic import BaseModel, Field

from resume_match.ai.config import load_ai_config
from resume_match.core.config import settings
from resume_match.core.rate_limit import rate_limit
from resume_match.errors import ParseError, UnsupportedFormat
from resume_match.parsing.models import ExtractedText
from resume_match.parsing.parse import extract_text
from resume_match.schemas.analysis import AnalysisResult
from resume_match.schemas.feedback import CategoryAnalysisResponse
from resume_match.services.analysis_service import analyze, analyze_categories

logger = logging.getLogger(__name__)

router = APIRouter()

_UPLOAD_CHUNK_BYTES = 1024 * 64


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)
    domain: str | None = None
    job_title: str | None = None
    company: str | None = None


@router.post("/resume/analyze", response_model=AnalysisResult)
@rate_limit()
async def analyze_resume(request: Request, payload: AnalyzeRequest):
    _ = request
    return await analyze(
        payload.resume_text,
        payload.job_description,
        payload.domain,
        payload.job_title,
        payload.company,
        config=load_ai_config(),
    )


@router.post("/resume/analyze/categories", response_model=CategoryAnalysisResponse)
@rate_limit()
async def analyze_resume_categories(request: Request, payload: AnalyzeRequest):
    _ = request
    return await analyze_categories(
        payload.resume_text,
        payload.job_description,
        payload.domain,
        payload.job_title,
        payload.company,
        config=load_ai_config(),
    )


@router.post("/resume/extract-text", response_model=ExtractedText)
@rate_limit(settings.upload_rate_limit)
async def extract_resume_text(request: Request, file: UploadFile = File(...)):
    _ = request
    filename = file.filename or "uploaded-file"

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)

    try:
        return extract_text(b"".join(chunks), file.content_type or "", filename)
    except UnsupportedFormat as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ParseError as exc:
        logger.info("extract_text_failed name=%s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
