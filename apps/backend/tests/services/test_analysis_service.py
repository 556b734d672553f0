"""
Tests for ResumeAnalysisService.

These tests verify:
1. Request validation happens before any upstream call
2. A successful call returns raw text, status flag and parsed result
3. Upstream failures surface as classified AnalysisError subclasses
4. Progress is reported from real milestones only
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from resume_evaluator.agent.exceptions import ProviderError
from resume_evaluator.core import LLMConfig, Settings
from resume_evaluator.services import (
    AnalysisStage,
    AnalysisValidationError,
    AuthenticationError,
    GenericUpstreamError,
    RateLimitError,
    ResumeAnalysisService,
)


@pytest.fixture
def mock_agent():
    """AgentManager replacement whose run() is an AsyncMock."""
    agent = MagicMock()
    agent.run = AsyncMock()
    with patch("resume_evaluator.services.analysis_service.AgentManager", return_value=agent) as factory:
        agent.factory = factory
        yield agent


class TestValidation:
    """Validation failures never reach the provider."""

    @pytest.fixture
    def service(self) -> ResumeAnalysisService:
        return ResumeAnalysisService(Settings())

    def test_job_description_49_characters_fails(self, service, make_request):
        request = make_request(job_description="x" * 49)

        with pytest.raises(AnalysisValidationError) as excinfo:
            service.validate(request)
        assert excinfo.value.field == "jobDescription"
        assert excinfo.value.status_code == 400

    def test_job_description_50_characters_passes(self, service, make_request):
        assert service.validate(make_request(job_description="x" * 50)) == "x" * 50

    def test_length_is_measured_after_normalization(self, service, make_request):
        padded = "  " + "word " * 9 + "\n\n\n   " + "\x00" * 20
        with pytest.raises(AnalysisValidationError):
            service.validate(make_request(job_description=padded))

    def test_returns_normalized_job_description(self, service, make_request):
        normalized = service.validate(make_request())

        assert normalized.startswith("Senior Backend Engineer We are looking")
        assert "\n" not in normalized

    @pytest.mark.parametrize("credential", ["", "   ", "sk-openai-123", "ant-sk-123"])
    def test_bad_credentials(self, service, make_request, credential):
        with pytest.raises(AnalysisValidationError) as excinfo:
            service.validate(make_request(credential=credential))
        assert excinfo.value.field == "api-key"

    def test_wrong_media_type(self, service, make_request):
        request = make_request(resume_media_type="image/png")

        with pytest.raises(AnalysisValidationError, match="valid PDF"):
            service.validate(request)

    def test_resume_too_small(self, service, make_request):
        with pytest.raises(AnalysisValidationError, match="too small"):
            service.validate(make_request(resume=b"%PDF-1.4"))

    def test_resume_too_large(self, make_request):
        service = ResumeAnalysisService(Settings(RESUME_MAX_BYTES=4096))

        with pytest.raises(AnalysisValidationError, match="less than"):
            service.validate(make_request(resume=b"0" * 5000))

    @pytest.mark.asyncio
    async def test_invalid_request_does_not_call_provider(self, mock_agent, make_request):
        with pytest.raises(AnalysisValidationError):
            await ResumeAnalysisService(Settings()).analyze(make_request(job_description="too short"))

        mock_agent.factory.assert_not_called()
        mock_agent.run.assert_not_called()


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_success(self, mock_agent, make_request, evaluation_text):
        mock_agent.run.return_value = evaluation_text

        outcome = await ResumeAnalysisService(Settings()).analyze(make_request())

        assert outcome.analysis == evaluation_text
        assert outcome.extraction_status == "success"
        assert outcome.result.total_score == 74
        assert outcome.result.category_scores["Skills Match"] == 72

    @pytest.mark.asyncio
    async def test_single_call_with_prompt_and_attachment(self, mock_agent, make_request, pdf_bytes):
        mock_agent.run.return_value = ""

        await ResumeAnalysisService(Settings()).analyze(make_request())

        mock_agent.run.assert_awaited_once()
        prompt, attachments = mock_agent.run.await_args.args
        assert "Senior Backend Engineer We are looking" in prompt
        assert len(attachments) == 1
        assert attachments[0].data == pdf_bytes
        assert attachments[0].media_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_config_defaults_come_from_settings(self, mock_agent, make_request, api_key):
        mock_agent.run.return_value = ""

        await ResumeAnalysisService(Settings()).analyze(make_request())

        config = mock_agent.factory.call_args.args[0]
        assert config.api_key == api_key
        assert config.max_tokens == 4000
        assert config.temperature == 0.3
        assert config.timeout_seconds == 60

    @pytest.mark.asyncio
    async def test_explicit_config_is_used(self, mock_agent, make_request, api_key):
        mock_agent.run.return_value = ""
        config = LLMConfig(api_key=api_key, model="claude-test", temperature=0.0)

        await ResumeAnalysisService(Settings()).analyze(make_request(), config)

        assert mock_agent.factory.call_args.args[0] is config

    @pytest.mark.asyncio
    async def test_fallback_flag(self, mock_agent, make_request):
        mock_agent.run.return_value = "General advice only."

        outcome = await ResumeAnalysisService(Settings()).analyze(
            make_request(extraction_fallback=True)
        )

        assert outcome.extraction_status == "fallback"
        assert "could not be fully processed" in mock_agent.run.await_args.args[0]
        assert not outcome.result.has_structured_content

    @pytest.mark.asyncio
    async def test_unparsable_response_is_not_an_error(self, mock_agent, make_request):
        mock_agent.run.return_value = "I am unable to read the attachment."

        outcome = await ResumeAnalysisService(Settings()).analyze(make_request())

        assert outcome.result.total_score == 0
        assert outcome.result.category_scores == {}

    @pytest.mark.asyncio
    async def test_empty_completion_is_a_zero_result(self, mock_agent, make_request):
        mock_agent.run.return_value = ""

        outcome = await ResumeAnalysisService(Settings()).analyze(make_request())

        assert outcome.analysis == ""
        assert outcome.extraction_status == "success"
        assert outcome.result.total_score == 0
        assert outcome.result.band == "Needs Improvement"
        assert not outcome.result.has_structured_content

    @pytest.mark.asyncio
    async def test_progress_milestones(self, mock_agent, make_request, evaluation_text):
        mock_agent.run.return_value = evaluation_text
        stages = []

        await ResumeAnalysisService(Settings()).analyze(
            make_request(), on_progress=stages.append
        )

        assert stages == [
            AnalysisStage.VALIDATED,
            AnalysisStage.REQUEST_SENT,
            AnalysisStage.RESPONSE_RECEIVED,
            AnalysisStage.PARSE_COMPLETE,
        ]


class TestUpstreamFailures:

    @pytest.mark.asyncio
    async def test_rate_limit(self, mock_agent, make_request):
        mock_agent.run.side_effect = ProviderError("Error code: 429 - rate_limit_error", status_code=429)

        with pytest.raises(RateLimitError) as excinfo:
            await ResumeAnalysisService(Settings()).analyze(make_request())
        assert excinfo.value.status_code == 429

    @pytest.mark.asyncio
    async def test_authentication(self, mock_agent, make_request):
        mock_agent.run.side_effect = ProviderError("invalid x-api-key", status_code=401)

        with pytest.raises(AuthenticationError):
            await ResumeAnalysisService(Settings()).analyze(make_request())

    @pytest.mark.asyncio
    async def test_generic_failure_keeps_message(self, mock_agent, make_request):
        mock_agent.run.side_effect = ProviderError("Upstream request timed out after 60 seconds")
        stages = []

        with pytest.raises(GenericUpstreamError) as excinfo:
            await ResumeAnalysisService(Settings()).analyze(
                make_request(), on_progress=stages.append
            )
        assert "timed out" in excinfo.value.message
        assert excinfo.value.status_code == 500
        assert AnalysisStage.RESPONSE_RECEIVED not in stages
