"""
Prompt construction for interview question generation.
"""
from typing import Any

from interview_api.services.questions.categories import (
    QUESTION_CATEGORIES,
    describe_career_stage,
)

GENERIC_FIELD = "their chosen field"

# Profile context is capped so the prompt stays small
PROFILE_LIMITS = {"skills": 5, "degrees": 2, "interests": 3, "certifications": 2}
PROFILE_LABELS = {
    "skills": "Skills",
    "degrees": "Education",
    "interests": "Interests",
    "certifications": "Certifications",
}

CATEGORY_FOCUS = {
    "personal": "motivation, strengths and challenges",
    "career": "plans, ambitions and career choices",
    "company": "why this company and role are a good fit",
    "technical": "relevant skills and domain knowledge",
    "behavioral": "past experiences, answered in STAR format",
    "problem-solving": "their approach to challenges",
    "teamwork": "collaboration and communication",
}

FORMAT_INSTRUCTIONS = """Return ONLY a JSON array of exactly {count} objects in this format:

[
  {{
    "question": "The interview question?",
    "answer": "A 2-3 sentence sample answer explaining how to approach the question.",
    "tips": ["Specific tip 1", "Specific tip 2", "Specific tip 3"]
  }}
]

Rules:
- Each tips array contains exactly 3 short, actionable tips
- Use double quotes for every key and string
- No markdown, code fences or text before or after the array"""


def _profile_list(talent: Any, field: str) -> list[str]:
    values = getattr(talent, field, None) or []
    return [str(v) for v in values if v][: PROFILE_LIMITS[field]]


def profile_context(talent: Any) -> str:
    parts = []
    for field, label in PROFILE_LABELS.items():
        values = _profile_list(talent, field)
        if values:
            parts.append(f"{label}: {', '.join(values)}")
    return ". ".join(parts)


def build_prompt(
    talent: Any,
    career_path_title: str | None,
    category: str | None,
    count: int,
) -> str:
    """Prompt asking for ``count`` question/answer/tips objects tailored to the talent."""
    name = getattr(talent, "fullname", None) or "the candidate"
    stage = describe_career_stage(getattr(talent, "career_stage", None))
    field = career_path_title or GENERIC_FIELD

    if category in QUESTION_CATEGORIES:
        intro = (
            f"Generate exactly {count} {QUESTION_CATEGORIES[category]} interview questions "
            f"for {name} ({stage}) in {field}. Focus on {CATEGORY_FOCUS[category]}."
        )
    else:
        intro = (
            f"Generate exactly {count} mock interview questions with sample answers "
            f"for {name} ({stage}) in {field}. Mix general behavioral questions "
            f"with questions specific to {field}, pitched at their career stage."
        )

    sections = [intro]
    context = profile_context(talent)
    if context:
        sections.append(f"Profile: {context}")
    sections.append(FORMAT_INSTRUCTIONS.format(count=count))
    return "\n\n".join(sections)
