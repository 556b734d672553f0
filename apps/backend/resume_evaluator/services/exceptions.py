import re

from typing import Optional


class AnalysisError(Exception):
    """
    Base class for every failure surfaced to the caller of an analysis.

    ``status_code`` is the HTTP status the API layer responds with.
    """

    status_code: int = 500
    default_message: str = "Failed to analyze resume. Please try again or contact support if the issue persists."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AnalysisValidationError(AnalysisError):
    """
    Exception raised when a request field is missing or malformed.
    """

    status_code = 400
    default_message = "Missing required fields"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthenticationError(AnalysisError):
    """
    Exception raised when the upstream provider rejects the API key.
    """

    status_code = 401
    default_message = "Invalid API key. Please check your Claude API key and try again."


class RateLimitError(AnalysisError):
    """
    Exception raised when the upstream provider throttles the request.
    """

    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a few minutes."


class RequestTooLargeError(AnalysisError):
    """
    Exception raised when the resume or job description exceeds the model's limits.
    """

    status_code = 400
    default_message = "The resume or job description is too long. Please try with shorter content."


class InvalidRequestError(AnalysisError):
    """
    Exception raised when the upstream provider reports a bad request.
    """

    status_code = 400
    default_message = "Invalid request. Please check your inputs and try again."


class UnsupportedCharactersError(AnalysisError):
    """
    Exception raised when text cannot be encoded for the upstream request.
    """

    status_code = 400
    default_message = "Text contains unsupported characters. Please check your job description for special characters."


class GenericUpstreamError(AnalysisError):
    """
    Exception raised for any other upstream failure; keeps the raw message.
    """

    status_code = 500

    def __init__(self, original_error: Optional[str] = None):
        message = f"Analysis failed: {original_error}" if original_error else None
        super().__init__(message)
        self.original_error = original_error


_TOO_LARGE_NEEDLES = ("context_length", "too long", "too large")

_CLASSIFICATION = (
    (AuthenticationError, 401, ("authentication", "unauthorized", "invalid x-api-key")),
    (RateLimitError, 429, ("rate limit", "rate_limit")),
    (RequestTooLargeError, 413, _TOO_LARGE_NEEDLES),
    (InvalidRequestError, 400, ("bad request", "invalid_request")),
    (UnsupportedCharactersError, None, ("headers", "iso-8859-1", "latin-1", "codec")),
)


def _mentions(message: str, needles) -> bool:
    return any(needle in message for needle in needles)


def _mentions_status(message: str, code: int) -> bool:
    return re.search(rf"\b{code}\b", message) is not None


def classify_upstream_error(error: Exception) -> AnalysisError:
    """
    Map an upstream failure to the caller-facing taxonomy.

    A known status code decides first, except that a 400 reporting an
    oversized prompt is still too large. Otherwise the message is searched
    case-insensitively in priority order. Bare status numbers in the message
    only count when the failure carries no status code, and only as whole
    words, so request ids and token counts never match.
    """
    if isinstance(error, AnalysisError):
        return error
    status_code = getattr(error, "status_code", None)
    message = str(error).lower()

    if status_code is not None:
        for error_class, code, _ in _CLASSIFICATION:
            if status_code == code:
                if error_class is InvalidRequestError and _mentions(message, _TOO_LARGE_NEEDLES):
                    return RequestTooLargeError()
                return error_class()

    for error_class, code, needles in _CLASSIFICATION:
        if _mentions(message, needles):
            return error_class()
        if status_code is None and code is not None and _mentions_status(message, code):
            return error_class()
    return GenericUpstreamError(original_error=str(error))
