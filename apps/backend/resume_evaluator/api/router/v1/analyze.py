import logging

from typing import Optional
from fastapi import APIRouter, File, Form, Header, UploadFile

from ....core import settings
from ....schemas.pydantic.resume_analysis import AnalysisRequest, AnalyzeResponse, ErrorResponse
from ....services import AnalysisValidationError, ResumeAnalysisService
from ....services.text import decode_resume_payload

analyze_router = APIRouter()
logger = logging.getLogger(__name__)


@analyze_router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    summary="Evaluate a PDF resume against a job description",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_resume(
    jobDescription: str = Form(""),
    resume: Optional[str] = Form(None),
    resume_file: Optional[UploadFile] = File(None),
    extractionFallback: bool = Form(False),
    api_key: str = Header("", alias="api-key"),
):
    """
    Accepts the resume either as an uploaded file or as a base64 string
    (a browser data URL works too). The Claude API key travels in the
    ``api-key`` header and is only forwarded upstream.
    """
    if resume_file is not None:
        # One byte past the limit is enough for validate to reject the upload.
        data = await resume_file.read(settings.RESUME_MAX_BYTES + 1)
        media_type = resume_file.content_type or settings.RESUME_MEDIA_TYPE
    elif resume:
        data, media_type = decode_resume_payload(resume, settings.RESUME_MEDIA_TYPE)
    else:
        raise AnalysisValidationError("Missing required fields", field="resume")

    logger.info(f"Processing resume upload: {len(data)} bytes, media_type={media_type}")
    request = AnalysisRequest(
        job_description=jobDescription,
        resume=data,
        resume_media_type=media_type,
        credential=api_key,
        extraction_fallback=extractionFallback,
    )
    outcome = await ResumeAnalysisService().analyze(request)
    return AnalyzeResponse(
        analysis=outcome.analysis,
        extraction_status=outcome.extraction_status,
        result=outcome.result,
    )
