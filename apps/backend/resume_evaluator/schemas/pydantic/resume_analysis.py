from typing import Dict, List, Literal
from pydantic import BaseModel, ConfigDict, Field, computed_field


def score_band(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    return "Needs Improvement"


class AnalysisRequest(BaseModel):
    job_description: str
    resume: bytes = Field(repr=False)
    resume_media_type: str = "application/pdf"
    credential: str = Field(repr=False)
    extraction_fallback: bool = False


class AnalysisResult(BaseModel):
    category_scores: Dict[str, int] = Field(default_factory=dict)
    total_score: int = Field(default=0, ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvement_tips: List[str] = Field(default_factory=list)
    ats_considerations: str = ""

    @computed_field
    @property
    def band(self) -> str:
        return score_band(self.total_score)

    @property
    def has_structured_content(self) -> bool:
        """False when the raw text is all there is to show."""
        return bool(self.category_scores) or self.total_score > 0


class AnalysisOutcome(BaseModel):
    analysis: str
    extraction_status: Literal["success", "fallback"]
    result: AnalysisResult


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    analysis: str
    extraction_status: Literal["success", "fallback"] = Field(alias="extractionStatus")
    result: AnalysisResult


class ErrorResponse(BaseModel):
    error: str
