"""
Domain exceptions. Each carries the HTTP status the API reports for it.
"""
from typing import Any

RATE_LIMIT_PATTERNS = (
    "429",
    "rate limit",
    "rate_limit",
    "quota",
    "resource exhausted",
    "resource_exhausted",
    "too many requests",
)


def is_rate_limit_message(message: str | None) -> bool:
    """True if an upstream error message looks like rate limiting or quota exhaustion."""
    m = (message or "").lower()
    return any(p in m for p in RATE_LIMIT_PATTERNS)


class InterviewServiceError(Exception):
    """Base for errors rendered as the service's error envelope."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)

    @property
    def message(self) -> str:
        return str(self)

    def payload(self) -> dict[str, Any]:
        return {}


class InputError(InterviewServiceError):
    """Malformed body, missing talent id or unknown category."""

    status_code = 400
    public_message = "Invalid request"

    def __init__(self, message: str, valid_categories: list[str] | None = None):
        super().__init__(message)
        self.valid_categories = valid_categories

    def payload(self) -> dict[str, Any]:
        if self.valid_categories is None:
            return {}
        return {"validCategories": self.valid_categories}


class NotFoundError(InterviewServiceError):
    status_code = 404
    public_message = "Talent not found"


class TimeoutBudgetError(InterviewServiceError):
    """Not enough of the request budget left to attempt generation."""

    status_code = 408
    public_message = "Function timeout - database queries took too long"


class AttemptError(InterviewServiceError):
    """A single generation attempt produced nothing usable."""

    kind = "model_error"


class EmptyResponseError(AttemptError):
    kind = "empty"
    public_message = "Empty response text from AI model"


class ExtractionError(AttemptError):
    """No JSON array could be recovered from model output."""

    kind = "parse_failure"

    def __init__(self, message: str, raw_length: int = 0, head: str = "", tail: str = ""):
        super().__init__(message)
        self.raw_length = raw_length
        self.head = head
        self.tail = tail


class QuestionValidationError(AttemptError):
    """A parsed item is missing a usable question, answer or tips field."""

    kind = "parse_failure"

    def __init__(self, index: int, field: str, reason: str = "missing or empty"):
        super().__init__(f"Invalid question at index {index}: {field} {reason}")
        self.index = index
        self.field = field


class GenerationError(InterviewServiceError):
    """Every generation attempt failed."""

    STATUS_BY_KIND = {"timeout": 408, "rate_limit": 503}

    def __init__(self, message: str, kind: str = "model_error", attempts: int = 0):
        super().__init__(message)
        self.kind = kind
        self.attempts = attempts

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return self.STATUS_BY_KIND.get(self.kind, 500)
