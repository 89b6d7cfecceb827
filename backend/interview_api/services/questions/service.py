"""
Interview question pipeline: lookups, time budget, generation with retries,
and the fallback policy applied when generation is exhausted.

Policy: with ``fallback_on_failure`` on (the default) an exhausted generation
is answered with built-in questions and ``usedFallback=true``; with it off the
GenerationError propagates and the API maps it to 408, 503 or 500.
"""
import time
from datetime import datetime, timezone
from typing import Callable

from interview_api.config import Settings
from interview_api.database.repository import TalentRepository
from interview_api.errors import GenerationError, InputError, NotFoundError, TimeoutBudgetError
from interview_api.models.schemas import (
    CareerPathSummary,
    QuestionRecord,
    QuestionsMetadata,
    QuestionsResponse,
    TalentSummary,
)
from interview_api.models.talent import CareerPath, Talent
from interview_api.services.questions import fallback
from interview_api.services.questions.categories import QUESTION_CATEGORIES, category_label
from interview_api.services.questions.extractor import extract
from interview_api.services.questions.orchestrator import GenerationOrchestrator
from interview_api.services.questions.prompts import build_prompt
from interview_api.services.questions.validator import ValidationPolicy, validate
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)

# Kept free at the end of the budget to write the response
RESPONSE_RESERVE_SECONDS = 1.0


class QuestionService:
    def __init__(
        self,
        repository: TalentRepository,
        orchestrator: GenerationOrchestrator,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.repository = repository
        self.orchestrator = orchestrator
        self.settings = settings
        self.clock = clock
        self.policy = ValidationPolicy.from_settings(settings)

    def _elapsed_ms(self, started: float) -> int:
        return int((self.clock() - started) * 1000)

    @staticmethod
    def check_input(talent_id: str | None, category: str | None) -> None:
        if not talent_id or not str(talent_id).strip():
            raise InputError("Missing talentId parameter")
        if category is not None and category not in QUESTION_CATEGORIES:
            raise InputError(
                "Invalid or missing category parameter",
                valid_categories=list(QUESTION_CATEGORIES),
            )

    async def _career_path(self, talent: Talent) -> CareerPath | None:
        if not talent.selected_path:
            return None
        try:
            return await self.repository.get_career_path(talent.selected_path)
        except Exception as e:  # any lookup failure degrades to a generic field
            logger.warning(f"Could not fetch career path {talent.selected_path}: {e}")
            return None

    async def generate_questions(
        self,
        talent_id: str,
        category: str | None = None,
        started_at: float | None = None,
    ) -> QuestionsResponse:
        """
        Build the full response for one request. Raises InputError, NotFoundError,
        TimeoutBudgetError, or GenerationError when fallback is disabled.
        """
        started = started_at if started_at is not None else self.clock()
        self.check_input(talent_id, category)
        count = self.settings.question_count

        talent = await self.repository.get_talent(talent_id)
        if talent is None:
            raise NotFoundError("Talent not found")
        logger.info(f"Fetched talent {talent.id} ({self._elapsed_ms(started)}ms)")

        if self.clock() - started > self.settings.pre_generation_budget_seconds:
            raise TimeoutBudgetError()

        career_path = await self._career_path(talent)
        path_title = career_path.title if career_path else None

        def fallback_source(n: int) -> list[QuestionRecord]:
            return fallback.provide(category, talent, path_title, n)

        def parse(text: str) -> list[QuestionRecord]:
            return validate(extract(text), count, fallback_source, self.policy)

        prompt = build_prompt(talent, path_title, category, count)
        deadline = started + self.settings.function_timeout_seconds - RESPONSE_RESERVE_SECONDS
        logger.info(
            f"Starting generation of {count} {category_label(category) or 'general'} questions "
            f"({self._elapsed_ms(started)}ms)"
        )

        used_fallback = False
        try:
            outcome = await self.orchestrator.run(prompt, parse, deadline=deadline)
            questions = outcome.value
            attempts = len(outcome.attempts)
        except GenerationError as e:
            if not self.settings.fallback_on_failure:
                raise
            logger.error(f"{e}; serving fallback questions")
            questions = fallback.provide(category, talent, path_title, count)
            used_fallback = True
            attempts = e.attempts

        execution_ms = self._elapsed_ms(started)
        logger.info(
            f"Returning {len(questions)} questions in {execution_ms}ms (fallback: {used_fallback})"
        )
        return QuestionsResponse(
            questions=questions,
            metadata=QuestionsMetadata(
                total_questions=len(questions),
                category=category_label(category),
                talent=TalentSummary(
                    id=str(talent.id),
                    fullname=talent.fullname,
                    career_stage=talent.career_stage,
                ),
                career_path=(
                    CareerPathSummary(id=str(career_path.id), title=career_path.title)
                    if career_path
                    else None
                ),
                generated_at=datetime.now(timezone.utc),
                execution_time=execution_ms,
                used_fallback=used_fallback,
                attempts=attempts,
            ),
        )
