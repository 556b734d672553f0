SCORING_CATEGORIES = (
    ("Relevant Experience", 25),
    ("Education and Qualifications", 20),
    ("Skills Match", 25),
    ("Achievements and Accomplishments", 15),
    ("Overall Presentation and Clarity", 15),
)

FALLBACK_NOTICE = """
IMPORTANT NOTE: The resume content could not be fully processed. Base your analysis on the job description and give general resume improvement advice, focusing on best practices and common recommendations for this type of role.
"""

PROMPT = """
You are a resume screener and hiring assistant. Your task is to evaluate a candidate's resume against a specific job description and assess the candidate's suitability for the position.
{0}
First, carefully read the resume sent as an attached PDF document.

Then review the job description for which this candidate is applying:

<job_description>
{1}
</job_description>

When evaluating experience, consider the difference between today's date ({2}) and the earliest reported date of employment. For example, if a candidate started working in January 2020 and today is 20 June 2025, they have 5 years of experience.

Your evaluation should be based on an aggregate score of 100 points. Score the candidate in the following categories:

{3}

For each category, provide a brief justification for the score you assign. Then give the total score out of 100.

Next, analyze the candidate's strengths and weaknesses as they relate to the job description. Be specific and reference particular aspects of the resume and the job requirements.

If the candidate falls short in any areas, provide concrete, actionable tips on how they could improve their resume to better fit the job description.

Finally, consider ATS (Applicant Tracking System) friendliness: comment on how well the resume might perform in an ATS scan and suggest improvements if necessary.

Your final output must be structured exactly as follows:

<evaluation>
<scores>
{4}
</scores>

<total_score>
[total score out of 100, a single integer on the first line]
</total_score>

<strengths_and_weaknesses>
Strengths:
- [one strength per line]

Weaknesses:
- [one weakness per line]
</strengths_and_weaknesses>

<improvement_tips>
1. [one actionable tip per line]
</improvement_tips>

<ats_considerations>
[comment on ATS-friendliness and provide suggestions]
</ats_considerations>
</evaluation>

Remember, your evaluation should be objective, thorough, and constructive.
"""


def build_prompt(job_description: str, today: str, fallback: bool = False) -> str:
    categories = "\n".join(
        f"{i}. {name} (0-{points} points)"
        for i, (name, points) in enumerate(SCORING_CATEGORIES, start=1)
    )
    score_lines = "\n".join(
        f"{name}: [points]/{points}" for name, points in SCORING_CATEGORIES
    )
    return PROMPT.format(
        FALLBACK_NOTICE if fallback else "",
        job_description,
        today,
        categories,
        score_lines,
    )
