from .analysis_service import AnalysisStage, ResumeAnalysisService
from .response_parser import parse
from .exceptions import (
    AnalysisError,
    AnalysisValidationError,
    AuthenticationError,
    RateLimitError,
    RequestTooLargeError,
    InvalidRequestError,
    UnsupportedCharactersError,
    GenericUpstreamError,
    classify_upstream_error,
)

__all__ = [
    "AnalysisStage",
    "ResumeAnalysisService",
    "parse",
    "AnalysisError",
    "AnalysisValidationError",
    "AuthenticationError",
    "RateLimitError",
    "RequestTooLargeError",
    "InvalidRequestError",
    "UnsupportedCharactersError",
    "GenericUpstreamError",
    "classify_upstream_error",
]
