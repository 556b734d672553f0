import logging

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..agent import AgentManager, Attachment
from ..core import LLMConfig, Settings, settings as default_settings
from ..prompt.resume_analysis import build_prompt
from ..schemas.pydantic.resume_analysis import AnalysisOutcome, AnalysisRequest
from . import response_parser
from .exceptions import AnalysisValidationError, classify_upstream_error
from .text import clean_text

logger = logging.getLogger(__name__)


class AnalysisStage(str, Enum):
    VALIDATED = "validated"
    REQUEST_SENT = "request_sent"
    RESPONSE_RECEIVED = "response_received"
    PARSE_COMPLETE = "parse_complete"


ProgressCallback = Callable[[AnalysisStage], None]


class ResumeAnalysisService:
    """
    Evaluates one resume against one job description.

    Validates the request, sends the prompt and the resume to the configured
    LLM in a single call and parses the tagged answer. Upstream failures are
    re-raised as AnalysisError subclasses carrying the HTTP status to use.
    """

    def __init__(self, app_settings: Settings = default_settings):
        self.settings = app_settings

    def validate(self, request: AnalysisRequest) -> str:
        """
        Check the request and return the normalized job description.
        """
        credential = request.credential.strip()
        if not credential:
            raise AnalysisValidationError("Missing required fields", field="api-key")
        prefix = self.settings.LLM_API_KEY_PREFIX
        if not credential.startswith(prefix):
            raise AnalysisValidationError(
                f"Invalid API key format. Claude API keys should start with '{prefix}'",
                field="api-key",
            )

        job_description = clean_text(request.job_description or "")
        if not job_description:
            raise AnalysisValidationError("Missing required fields", field="jobDescription")
        if len(job_description) < self.settings.MIN_JOB_DESCRIPTION_LENGTH:
            raise AnalysisValidationError(
                "Job description is too short. Please provide a more detailed job description.",
                field="jobDescription",
            )

        if request.resume_media_type != self.settings.RESUME_MEDIA_TYPE:
            raise AnalysisValidationError("Please upload a valid PDF file", field="resume")
        size = len(request.resume)
        if size == 0:
            raise AnalysisValidationError("Missing required fields", field="resume")
        if size < self.settings.RESUME_MIN_BYTES:
            raise AnalysisValidationError("File seems too small to be a valid resume", field="resume")
        if size > self.settings.RESUME_MAX_BYTES:
            limit_mb = self.settings.RESUME_MAX_BYTES // (1024 * 1024)
            raise AnalysisValidationError(f"File size must be less than {limit_mb}MB", field="resume")
        return job_description

    async def analyze(
        self,
        request: AnalysisRequest,
        config: Optional[LLMConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisOutcome:
        def report(stage: AnalysisStage) -> None:
            if on_progress is not None:
                on_progress(stage)

        job_description = self.validate(request)
        report(AnalysisStage.VALIDATED)
        if config is None:
            config = LLMConfig.from_settings(self.settings, api_key=request.credential)

        prompt = build_prompt(
            job_description,
            today=datetime.now(timezone.utc).isoformat(),
            fallback=request.extraction_fallback,
        )
        attachment = Attachment(data=request.resume, media_type=request.resume_media_type)
        logger.info(
            f"Sending analysis request: model={config.model}, "
            f"resume_bytes={len(request.resume)}, job_description_chars={len(job_description)}"
        )

        agent = AgentManager(config)
        report(AnalysisStage.REQUEST_SENT)
        try:
            raw_text = await agent.run(prompt, [attachment])
        except Exception as e:
            classified = classify_upstream_error(e)
            logger.error(f"Analysis failed as {type(classified).__name__}: {e}")
            raise classified from e
        report(AnalysisStage.RESPONSE_RECEIVED)

        result = response_parser.parse(raw_text)
        report(AnalysisStage.PARSE_COMPLETE)
        logger.info(
            f"Analysis completed: total_score={result.total_score}, "
            f"categories={len(result.category_scores)}"
        )
        return AnalysisOutcome(
            analysis=raw_text,
            extraction_status="fallback" if request.extraction_fallback else "success",
            result=result,
        )
