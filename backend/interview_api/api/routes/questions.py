"""
Interview questions: generate a tailored set for a talent, list categories.
"""
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from interview_api.api.dependencies import get_question_service
from interview_api.errors import InputError
from interview_api.models.schemas import (
    CategoriesResponse,
    CategoryInfo,
    GenerateQuestionsRequest,
    QuestionsResponse,
)
from interview_api.services.questions.categories import QUESTION_CATEGORIES
from interview_api.services.questions.service import QuestionService
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


async def _parse_body(request: Request) -> GenerateQuestionsRequest:
    try:
        body = await request.json()
    except ValueError as e:
        raise InputError("Invalid JSON input") from e
    if not isinstance(body, dict):
        raise InputError("Invalid JSON input")
    if not body.get("talentId"):
        raise InputError("Missing talentId parameter")
    try:
        return GenerateQuestionsRequest.model_validate(body)
    except ValidationError as e:
        raise InputError("Invalid request body") from e


@router.post("/generate", response_model=QuestionsResponse)
async def generate_questions(
    request: Request,
    service: QuestionService = Depends(get_question_service),
):
    """Generate interview questions for a talent. Falls back to built-in questions if the model fails."""
    payload = await _parse_body(request)
    logger.info("=== Interview questions requested ===")
    return await service.generate_questions(
        payload.talent_id,
        payload.category,
        started_at=getattr(request.state, "started_at", None),
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories():
    return CategoriesResponse(
        categories=[CategoryInfo(key=k, label=v) for k, v in QUESTION_CATEGORIES.items()]
    )
