"""
Request, response and question record schemas. JSON keys are camelCase.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionRecord(BaseModel):
    """Validated interview question. Extra fields pass through only when enabled."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., ge=1)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    tips: list[str] = Field(default_factory=list, max_length=3)


class GenerateQuestionsRequest(CamelModel):
    talent_id: str = Field(..., min_length=1, max_length=255)
    category: str | None = None


class TalentSummary(CamelModel):
    id: str
    fullname: str | None = None
    career_stage: str | None = None


class CareerPathSummary(CamelModel):
    id: str
    title: str


class QuestionsMetadata(CamelModel):
    total_questions: int
    category: str | None = None
    talent: TalentSummary
    career_path: CareerPathSummary | None = None
    generated_at: datetime
    execution_time: int = Field(..., description="Elapsed milliseconds")
    used_fallback: bool
    attempts: int = 0


class QuestionsResponse(CamelModel):
    success: bool = True
    status_code: int = 200
    questions: list[QuestionRecord]
    metadata: QuestionsMetadata


class CategoryInfo(CamelModel):
    key: str
    label: str


class CategoriesResponse(CamelModel):
    categories: list[CategoryInfo]
