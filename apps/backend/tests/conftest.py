import pytest

VALID_API_KEY = "sk-ant-test-key-0123456789"

SAMPLE_JOB_DESCRIPTION = """
Senior Backend Engineer

We are looking for a backend engineer with 5+ years of Python experience,
strong knowledge of FastAPI or Django, PostgreSQL, and AWS. Experience with
CI/CD pipelines and mentoring junior developers is a plus.
"""

SAMPLE_EVALUATION = """Here is my evaluation of the candidate.

<evaluation>
<scores>
Relevant Experience: 20/25
Education and Qualifications: 15/20
Skills Match: 18/25
Achievements and Accomplishments: 9/15
Overall Presentation and Clarity: 12/15
</scores>

<total_score>
74
The candidate is a solid fit overall.
</total_score>

<strengths_and_weaknesses>
Strengths:
- Six years of Python backend development
- Led migration of a monolith to FastAPI services

Weaknesses:
- Limited AWS exposure
- No mentoring experience mentioned
</strengths_and_weaknesses>

<improvement_tips>
1. Quantify the impact of the FastAPI migration
2. Add AWS certifications or projects

3. Mention any mentoring or code review responsibilities
</improvement_tips>

<ats_considerations>
- Use standard section headings
- Include "PostgreSQL" and "CI/CD" verbatim
</ats_considerations>
</evaluation>
"""


@pytest.fixture
def pdf_bytes() -> bytes:
    """A payload that passes the size checks; content is never inspected."""
    return b"%PDF-1.4\n" + b"0" * 2048 + b"\n%%EOF"


@pytest.fixture
def job_description() -> str:
    return SAMPLE_JOB_DESCRIPTION


@pytest.fixture
def evaluation_text() -> str:
    return SAMPLE_EVALUATION


@pytest.fixture
def api_key() -> str:
    return VALID_API_KEY


@pytest.fixture
def make_request(pdf_bytes, job_description):
    """Factory for AnalysisRequest with valid defaults; keyword overrides win."""
    from resume_evaluator.schemas.pydantic.resume_analysis import AnalysisRequest

    def _make(**overrides) -> AnalysisRequest:
        fields = {
            "job_description": job_description,
            "resume": pdf_bytes,
            "credential": VALID_API_KEY,
        }
        fields.update(overrides)
        return AnalysisRequest(**fields)

    return _make
