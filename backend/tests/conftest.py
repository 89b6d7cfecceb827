"""Shared fakes for the interview question pipeline."""
import asyncio
import json
from types import SimpleNamespace

import pytest

from interview_api.config import Settings
from interview_api.services.questions.orchestrator import BackoffSchedule, GenerationOrchestrator

HANG = object()


class ScriptedModel:
    """TextModel returning (or raising) scripted responses in order; the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.responses[min(len(self.prompts), len(self.responses)) - 1]
        if item is HANG:
            await asyncio.sleep(10)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeRepository:
    def __init__(self, talents=(), career_paths=(), career_path_error: Exception | None = None):
        self.talents = {t.talent_id: t for t in talents}
        self.career_paths = {p.id: p for p in career_paths}
        self.career_path_error = career_path_error

    async def get_talent(self, talent_id):
        return self.talents.get(talent_id)

    async def get_career_path(self, path_id):
        if self.career_path_error:
            raise self.career_path_error
        return self.career_paths.get(path_id)


def make_questions(n: int) -> list[dict]:
    return [
        {
            "question": f"Question {i}?",
            "answer": f"Answer {i}.",
            "tips": [f"Tip {i}a", f"Tip {i}b", f"Tip {i}c"],
        }
        for i in range(1, n + 1)
    ]


def questions_json(n: int) -> str:
    return json.dumps(make_questions(n))


def make_settings(**overrides) -> Settings:
    values = {
        "openai_api_key": "test-key",
        "generation_attempt_timeout_seconds": 0.05,
        "generation_backoff_base_seconds": 0,
        "generation_backoff_max_jitter_seconds": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_orchestrator(model, **kwargs) -> GenerationOrchestrator:
    kwargs.setdefault("max_attempts", 3)
    kwargs.setdefault("attempt_timeout", 0.05)
    kwargs.setdefault("backoff", BackoffSchedule(base=0, max_jitter=0))
    kwargs.setdefault("sleep", RecordingSleep())
    return GenerationOrchestrator(model, **kwargs)


@pytest.fixture
def talent():
    return SimpleNamespace(
        id="doc-1",
        talent_id="talent-1",
        fullname="Ada Lovelace",
        career_stage="Pathfinder",
        selected_path="path-1",
        skills=["Python", "SQL"],
        degrees=["BSc Mathematics"],
        interests=["Machine learning"],
        certifications=[],
    )


@pytest.fixture
def career_path():
    return SimpleNamespace(id="path-1", title="Data Science", description=None)


@pytest.fixture
def repository(talent, career_path):
    return FakeRepository(talents=[talent], career_paths=[career_path])
