"""
Tagged-section parser for the model's evaluation text.

The model is asked to answer inside ``<scores>``, ``<total_score>``,
``<strengths_and_weaknesses>``, ``<improvement_tips>`` and
``<ats_considerations>`` tags, but nothing guarantees it does. Every pass
below works on one section span, tolerates anything it does not recognise
and falls back to an empty value, so ``parse`` never raises.
"""

import logging
import re

from typing import Dict, List, Optional

from ..schemas.pydantic.resume_analysis import AnalysisResult

logger = logging.getLogger(__name__)

SCORE_LINE = re.compile(r"(.+?):\s*(\d+)\s*/\s*(\d+)")
DIGITS = re.compile(r"\d+")
STRENGTHS_SPAN = re.compile(r"Strengths:(.*?)(?=Weaknesses:|\Z)", re.DOTALL | re.IGNORECASE)
WEAKNESSES_SPAN = re.compile(r"Weaknesses:(.*)\Z", re.DOTALL | re.IGNORECASE)
BULLET = re.compile(r"^-\s*")
NUMBERED = re.compile(r"^\d+\.\s*")


def clamp_percentage(value: int) -> int:
    return max(0, min(100, value))


def percentage(numerator: int, denominator: int) -> int:
    """Half-up rounded percentage, computed without floats."""
    return (200 * numerator + denominator) // (2 * denominator)


def extract_section(text: str, tag: str) -> Optional[str]:
    """
    Return the inner text of the first ``<tag>...</tag>`` span, or None.
    """
    match = re.search(rf"<{tag}>(.*?)</{tag}>", text, re.DOTALL)
    return match.group(1) if match else None


def _content_lines(span: str) -> List[str]:
    return [line for line in span.splitlines() if line.strip()]


def parse_category_scores(section: Optional[str]) -> Dict[str, int]:
    """
    ``Label: points/max`` lines become ``{label: percentage}``.

    Later lines overwrite earlier ones with the same label; dict insertion
    order keeps the position of the first appearance.
    """
    scores: Dict[str, int] = {}
    if section is None:
        return scores
    for line in _content_lines(section):
        match = SCORE_LINE.search(line)
        if not match:
            continue
        try:
            numerator, denominator = int(match.group(2)), int(match.group(3))
        except ValueError:
            continue
        if denominator == 0:
            logger.debug(f"Skipping score line with zero denominator: {line!r}")
            continue
        label = match.group(1).strip()
        scores[label] = clamp_percentage(percentage(numerator, denominator))
    return scores


def parse_total_score(section: Optional[str]) -> int:
    if section is None:
        return 0
    lines = _content_lines(section)
    if not lines:
        return 0
    match = DIGITS.search(lines[0])
    if not match:
        return 0
    try:
        return clamp_percentage(int(match.group(0)))
    except ValueError:
        # digit run longer than int() accepts, clamped like any value above 100
        return 100


def _bullets(span: str) -> List[str]:
    return [
        BULLET.sub("", line.strip()).strip()
        for line in span.splitlines()
        if line.strip().startswith("-")
    ]


def parse_strengths_and_weaknesses(section: Optional[str]) -> tuple[List[str], List[str]]:
    if section is None:
        return [], []
    strengths_match = STRENGTHS_SPAN.search(section)
    weaknesses_match = WEAKNESSES_SPAN.search(section)
    strengths = _bullets(strengths_match.group(1)) if strengths_match else []
    weaknesses = _bullets(weaknesses_match.group(1)) if weaknesses_match else []
    return strengths, weaknesses


def parse_improvement_tips(section: Optional[str]) -> List[str]:
    if section is None:
        return []
    return [NUMBERED.sub("", line.strip()).strip() for line in _content_lines(section)]


def parse_ats_considerations(section: Optional[str]) -> str:
    return section if section is not None else ""


def parse(raw_text: str) -> AnalysisResult:
    """
    Map the model's free-form answer to an AnalysisResult.

    Missing or malformed sections yield their empty/zero defaults.
    """
    text = raw_text or ""
    strengths, weaknesses = parse_strengths_and_weaknesses(
        extract_section(text, "strengths_and_weaknesses")
    )
    result = AnalysisResult(
        category_scores=parse_category_scores(extract_section(text, "scores")),
        total_score=parse_total_score(extract_section(text, "total_score")),
        strengths=strengths,
        weaknesses=weaknesses,
        improvement_tips=parse_improvement_tips(extract_section(text, "improvement_tips")),
        ats_considerations=parse_ats_considerations(extract_section(text, "ats_considerations")),
    )
    if not result.has_structured_content:
        logger.warning("No scores found in model output; only raw text is displayable")
    return result
