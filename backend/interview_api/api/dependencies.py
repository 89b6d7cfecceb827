"""
FastAPI dependencies. Clients are built once in the lifespan and read from
``app.state``; tests replace them through ``app.dependency_overrides``.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from interview_api.config import Settings, get_settings
from interview_api.database.connection import session_scope
from interview_api.database.repository import SqlTalentRepository, TalentRepository
from interview_api.services.questions.orchestrator import GenerationOrchestrator
from interview_api.services.questions.service import QuestionService


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async for session in session_scope(request.app.state.session_factory):
        yield session


def get_repository(db: AsyncSession = Depends(get_db)) -> TalentRepository:
    return SqlTalentRepository(db)


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    return request.app.state.orchestrator


def get_question_service(
    repository: TalentRepository = Depends(get_repository),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> QuestionService:
    return QuestionService(repository, orchestrator, settings)
