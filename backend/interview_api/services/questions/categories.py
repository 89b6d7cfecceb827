"""
Question categories and career stages understood by the generator.
"""

QUESTION_CATEGORIES: dict[str, str] = {
    "personal": "Personal Background & Motivations",
    "career": "Career Goals & Aspirations",
    "company": "Company & Role Fit",
    "technical": "Technical / Role-Specific Questions",
    "behavioral": "Behavioral Questions (STAR format)",
    "problem-solving": "Problem-Solving & Critical Thinking",
    "teamwork": "Teamwork & Communication",
}

CAREER_STAGE_DESCRIPTIONS: dict[str, str] = {
    "Pathfinder": "entry-level professional starting their career",
    "Trailblazer": "mid-level professional advancing their career",
    "Horizon Changer": "experienced professional transitioning careers",
}


def category_label(category: str | None) -> str | None:
    if category is None:
        return None
    return QUESTION_CATEGORIES.get(category)


def describe_career_stage(stage: str | None) -> str:
    return CAREER_STAGE_DESCRIPTIONS.get(stage or "", "professional")
