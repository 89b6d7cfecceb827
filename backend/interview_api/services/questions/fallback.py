"""
Built-in interview questions served when generation fails.
Templates may contain ``{career_path}``, replaced with the talent's career path
title, and ``{name}``, replaced with the talent's full name ("you" when unknown).
"""
from typing import Any

from interview_api.models.schemas import QuestionRecord

DEFAULT_FIELD = "your chosen field"
DEFAULT_NAME = "you"

FILLER = {
    "question": "What interests you most about working in {career_path}?",
    "answer": "Focus on specific aspects of the field that excite you. Show genuine passion and knowledge about the industry.",
    "tips": ["Be specific and passionate", "Show industry knowledge", "Connect to personal interests"],
}

GENERIC_QUESTIONS: list[dict[str, Any]] = [
    {
        "question": "Tell me about yourself.",
        "answer": "Give a short overview of where you are now, the experiences that brought you here, and where you want to go in {career_path}, so the interviewer sees what drives {name}.",
        "tips": ["Keep it under two minutes", "Connect your background to the role", "End with why you are here today"],
    },
    {
        "question": "What are your greatest strengths?",
        "answer": "Pick two or three strengths that matter for the role and back each one with a concrete example.",
        "tips": ["Use concrete examples", "Relate strengths to job requirements", "Avoid generic answers"],
    },
    {
        "question": "What is your biggest weakness and how are you working on it?",
        "answer": "Name a real but manageable weakness and describe the specific steps you are taking to improve.",
        "tips": ["Be authentic but strategic", "Show improvement efforts", "Don't say you have no weaknesses"],
    },
    {
        "question": "Why are you interested in {career_path}?",
        "answer": "Share the experiences that drew you to the field and what keeps you motivated to grow in it.",
        "tips": ["Be genuine", "Mention a specific moment or project", "Show you understand the field"],
    },
    {
        "question": "Where do you see yourself in five years?",
        "answer": "Describe realistic goals that show ambition and fit the growth the role can offer.",
        "tips": ["Show long-term thinking", "Stay realistic", "Tie goals to the role"],
    },
    {
        "question": "Describe a challenge you faced and how you handled it.",
        "answer": "Use the STAR method: explain the Situation, your Task, the Actions you took and the Result.",
        "tips": ["Use the STAR method", "Focus on your own actions", "Share what you learned"],
    },
    {
        "question": "How do you work in a team?",
        "answer": "Explain the role you usually take, how you communicate, and give an example of a team success you contributed to.",
        "tips": ["Give a specific example", "Credit others", "Show how you handle disagreement"],
    },
    {
        "question": "How do you keep your skills up to date?",
        "answer": "Mention courses, projects, communities or reading that keep you current in {career_path}.",
        "tips": ["Name specific resources", "Show curiosity", "Mention something you learned recently"],
    },
    {
        "question": "Why should we hire you?",
        "answer": "Summarize the skills and experience that match the role and the value you would bring from day one.",
        "tips": ["Match your skills to the job", "Be confident, not arrogant", "Keep it concise"],
    },
    {
        "question": "Do you have any questions for us?",
        "answer": "Always ask one or two thoughtful questions about the team, the role or how success is measured.",
        "tips": ["Prepare questions in advance", "Avoid asking about salary first", "Show genuine curiosity"],
    },
]

CATEGORY_QUESTIONS: dict[str, list[dict[str, Any]]] = {
    "personal": [
        {
            "question": "Tell me about yourself and what motivates you in your career.",
            "answer": "Structure your response around your current situation, relevant experiences, and career goals. Close on the work that drives {name} in this field.",
            "tips": ["Keep it concise and professional", "Connect your background to the role", "Show enthusiasm for your field"],
        },
        {
            "question": "What are your greatest strengths and how do they apply to this role?",
            "answer": "Choose 2-3 key strengths that directly relate to the position. Provide specific examples of how you've demonstrated these strengths.",
            "tips": ["Use concrete examples", "Relate strengths to job requirements", "Avoid generic answers"],
        },
        {
            "question": "What is your biggest weakness and how are you working to improve it?",
            "answer": "Choose a real weakness that won't disqualify you. Explain the steps you're taking to address it and show self-awareness.",
            "tips": ["Be authentic but strategic", "Show improvement efforts", "Don't say you have no weaknesses"],
        },
    ],
    "career": [
        {
            "question": "Where do you see yourself in 5 years?",
            "answer": "Align your goals with the company's growth opportunities. Show ambition while being realistic about career progression.",
            "tips": ["Research company career paths", "Show long-term thinking", "Demonstrate ambition and loyalty"],
        },
        {
            "question": "Why did you choose a career in {career_path}?",
            "answer": "Share your genuine interest in the field. Mention specific experiences or moments that led to this decision.",
            "tips": ["Be authentic and passionate", "Connect to personal experiences", "Show genuine interest in the field"],
        },
    ],
    "company": [
        {
            "question": "Why do you want to work for this company?",
            "answer": "Research the company's values, culture, and recent achievements. Connect these to your own values and career goals.",
            "tips": ["Research company thoroughly", "Connect to your values", "Mention specific company achievements"],
        },
        {
            "question": "What do you know about the role you are applying for?",
            "answer": "Summarize the main responsibilities and explain which of them match your experience in {career_path}.",
            "tips": ["Read the job description closely", "Map your skills to it", "Ask about what you don't know"],
        },
    ],
    "technical": [
        {
            "question": "What technical skills are most important for success in {career_path}?",
            "answer": "Discuss both hard and soft technical skills. Mention your proficiency level and how you stay current with technology.",
            "tips": ["Mention specific technologies", "Show continuous learning", "Relate to job requirements"],
        },
        {
            "question": "Walk me through a project you are proud of.",
            "answer": "Explain the goal, your specific contribution, the tools you used and the measurable outcome.",
            "tips": ["Quantify the result", "Be clear about your part", "Mention trade-offs you made"],
        },
    ],
    "behavioral": [
        {
            "question": "Describe a time when you faced a significant challenge. How did you handle it?",
            "answer": "Use the STAR method: Situation, Task, Action, Result. Focus on your problem-solving process and what you learned.",
            "tips": ["Use the STAR method", "Show problem-solving skills", "Emphasize positive outcomes"],
        },
        {
            "question": "Tell me about a time you made a mistake.",
            "answer": "Own the mistake, explain how you fixed it and what you changed so it would not happen again.",
            "tips": ["Take responsibility", "Focus on the fix", "Show what you learned"],
        },
    ],
    "problem-solving": [
        {
            "question": "How do you approach solving complex problems?",
            "answer": "Outline your systematic approach: analyze the problem, research solutions, implement, and evaluate results.",
            "tips": ["Show systematic thinking", "Mention analytical tools", "Emphasize learning from results"],
        },
        {
            "question": "Tell me about a decision you made with incomplete information.",
            "answer": "Describe how you gathered what you could, weighed the risks, decided, and followed up on the result.",
            "tips": ["Explain your reasoning", "Show comfort with ambiguity", "Mention how you validated the outcome"],
        },
    ],
    "teamwork": [
        {
            "question": "How do you handle conflicts with team members?",
            "answer": "Emphasize open communication, active listening, and finding common ground. Show maturity in conflict resolution.",
            "tips": ["Show emotional intelligence", "Emphasize communication", "Focus on positive outcomes"],
        },
        {
            "question": "Describe a successful project you completed as part of a team.",
            "answer": "Explain the team's goal, your role, how you coordinated with others and what the team achieved.",
            "tips": ["Highlight collaboration", "Be clear about your role", "Share the outcome"],
        },
    ],
}


def _talent_name(talent: Any) -> str:
    if isinstance(talent, dict):
        name = talent.get("fullname")
    else:
        name = getattr(talent, "fullname", None)
    return str(name or "").strip() or DEFAULT_NAME


def _render(template: str, career_path: str, name: str) -> str:
    return template.replace("{career_path}", career_path).replace("{name}", name)


def provide(
    category: str | None = None,
    talent: Any = None,
    career_path_title: str | None = None,
    count: int = 10,
) -> list[QuestionRecord]:
    """
    Return ``count`` schema-valid questions for ``category`` (generic set when
    the category is missing or unknown), or an empty list when ``count`` is
    zero or negative. Never raises, including for a missing talent or one with
    missing fields.
    """
    try:
        count = int(count or 0)
    except (TypeError, ValueError):
        count = 0
    if count <= 0:
        return []
    career_path = str(career_path_title or "").strip() or DEFAULT_FIELD
    name = _talent_name(talent)

    pool = list(CATEGORY_QUESTIONS.get(category, [])) if isinstance(category, str) else []
    if pool:
        pool.append(FILLER)
    seen = {q["question"] for q in pool}
    pool.extend(q for q in GENERIC_QUESTIONS if q["question"] not in seen)

    records = []
    for i in range(count):
        template = pool[i % len(pool)]
        records.append(
            QuestionRecord(
                id=i + 1,
                question=_render(template["question"], career_path, name),
                answer=_render(template["answer"], career_path, name),
                tips=list(template["tips"]),
            )
        )
    return records
