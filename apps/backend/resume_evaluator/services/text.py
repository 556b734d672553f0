import base64
import binascii
import re

from typing import Tuple

from .exceptions import AnalysisValidationError

WHITESPACE_CONTROLS = re.compile(r"[\t\n\r\x0b\x0c]")
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
BLANK_LINES = re.compile(r"\n\s*\n")
WHITESPACE_RUNS = re.compile(r"\s+")
DATA_URL = re.compile(r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?(;[\w=-]+)*;base64,", re.IGNORECASE)


def clean_text(text: str) -> str:
    """
    Strip control characters and collapse whitespace to single spaces.

    Line breaks and tabs turn into spaces rather than vanishing, so words on
    adjacent lines stay separate.
    """
    text = BLANK_LINES.sub("\n", text)
    text = WHITESPACE_CONTROLS.sub(" ", text)
    text = CONTROL_CHARACTERS.sub("", text)
    text = WHITESPACE_RUNS.sub(" ", text)
    return text.strip()


def decode_resume_payload(payload: str, default_media_type: str) -> Tuple[bytes, str]:
    """
    Decode a base64 resume, optionally wrapped in a browser data URL.

    Returns the raw bytes and the media type (from the data URL if present).
    """
    payload = payload.strip()
    media_type = default_media_type
    match = DATA_URL.match(payload)
    if match:
        media_type = match.group("media_type") or default_media_type
        payload = payload[match.end():]
    payload = WHITESPACE_RUNS.sub("", payload)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AnalysisValidationError(
            "Resume must be a base64-encoded PDF file.", field="resume"
        ) from e
    return data, media_type.lower()
