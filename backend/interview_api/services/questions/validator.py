"""
Turn a parsed array of arbitrary items into exactly ``target_count``
QuestionRecords, padding with fallback questions when the model returned too few.
"""
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from interview_api.config import Settings
from interview_api.errors import QuestionValidationError
from interview_api.models.schemas import QuestionRecord
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)

MAX_TIPS = 3
ELLIPSIS = "..."
KNOWN_FIELDS = frozenset({"id", "question", "answer", "tips"})

# (count) -> fallback records; ids are reassigned by the validator
FallbackSource = Callable[[int], Sequence[QuestionRecord]]


@dataclass(frozen=True)
class ValidationPolicy:
    require_tips: bool = True
    exact_tip_count: int | None = 3
    tip_max_words: int | None = None
    keep_extra_fields: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationPolicy":
        return cls(
            require_tips=settings.require_tips,
            exact_tip_count=settings.exact_tip_count,
            tip_max_words=settings.tip_max_words,
            keep_extra_fields=settings.keep_extra_fields,
        )


def _required_text(item: dict, field: str, index: int) -> str:
    value = item.get(field)
    if not isinstance(value, str) or not value.strip():
        raise QuestionValidationError(index, field)
    return value.strip()


def truncate_words(text: str, max_words: int) -> str:
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + ELLIPSIS


def _tips(item: dict, index: int, policy: ValidationPolicy) -> list[str]:
    raw = item.get("tips")
    if raw is None and not policy.require_tips:
        return []
    if not isinstance(raw, list):
        raise QuestionValidationError(index, "tips", "must be an array")

    tips = [str(t).strip() for t in raw if t is not None and str(t).strip()]
    if policy.exact_tip_count is not None and len(tips) < policy.exact_tip_count:
        raise QuestionValidationError(
            index, "tips", f"needs {policy.exact_tip_count} entries, got {len(tips)}"
        )
    tips = tips[:MAX_TIPS]
    if policy.tip_max_words:
        tips = [truncate_words(t, policy.tip_max_words) for t in tips]
    return tips


def validate_item(item: Any, index: int, policy: ValidationPolicy) -> dict[str, Any]:
    """Check one parsed item and return its normalized fields (without id)."""
    if not isinstance(item, dict):
        raise QuestionValidationError(index, "question", "item is not an object")
    fields: dict[str, Any] = {
        "question": _required_text(item, "question", index),
        "answer": _required_text(item, "answer", index),
        "tips": _tips(item, index, policy),
    }
    if policy.keep_extra_fields:
        for key, value in item.items():
            if key not in KNOWN_FIELDS:
                fields[key] = value
    return fields


def validate(
    items: Sequence[Any],
    target_count: int,
    fallback: FallbackSource,
    policy: ValidationPolicy | None = None,
) -> list[QuestionRecord]:
    """
    Validate ``items`` in order and return exactly ``target_count`` records
    with ids 1..target_count. Items past ``target_count`` are ignored; a short
    list is padded from ``fallback``. Raises QuestionValidationError on the first
    unusable item.
    """
    policy = policy or ValidationPolicy()
    kept = [validate_item(item, index, policy) for index, item in enumerate(items[:target_count])]
    if len(items) > target_count:
        logger.info(f"Discarding {len(items) - target_count} questions beyond target of {target_count}")

    records = [QuestionRecord(id=i + 1, **fields) for i, fields in enumerate(kept)]
    deficit = target_count - len(records)
    if deficit > 0:
        logger.info(f"Padding {deficit} questions from fallback set")
        padding = list(fallback(deficit))
        if not padding:
            raise QuestionValidationError(len(records), "question", "no fallback questions available")
        for i in range(deficit):
            source = padding[i % len(padding)]
            records.append(
                QuestionRecord(
                    id=len(records) + 1,
                    question=source.question,
                    answer=source.answer,
                    tips=list(source.tips),
                )
            )
    return records
