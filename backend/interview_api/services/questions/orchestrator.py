"""
Model calls with a per-attempt timeout and exponential backoff between attempts.
"""
import asyncio
import random
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, TypeVar

from interview_api.config import Settings
from interview_api.errors import AttemptError, EmptyResponseError, GenerationError, is_rate_limit_message
from interview_api.services.llm.base import TextModel
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]

SUCCESS = "success"
TIMEOUT = "timeout"
RATE_LIMIT = "rate_limit"
MODEL_ERROR = "model_error"


@dataclass
class GenerationAttempt:
    number: int
    elapsed_ms: int
    raw_length: int
    outcome: str
    error: str | None = None


@dataclass
class GenerationOutcome(Generic[T]):
    value: T
    attempts: list[GenerationAttempt] = field(default_factory=list)


@dataclass(frozen=True)
class BackoffSchedule:
    """delay(n) = min(base * 2**(n-1), cap) + uniform(0, max_jitter)"""

    base: float = 1.0
    max_jitter: float = 1.0
    cap: float = 8.0

    def base_delay(self, attempt: int) -> float:
        return min(self.base * 2 ** (attempt - 1), self.cap)

    def delay(self, attempt: int) -> float:
        jitter = random.uniform(0, self.max_jitter) if self.max_jitter > 0 else 0.0
        return self.base_delay(attempt) + jitter


def classify_failure(exc: BaseException) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return TIMEOUT
    if isinstance(exc, AttemptError):
        return exc.kind
    if is_rate_limit_message(str(exc)):
        return RATE_LIMIT
    return MODEL_ERROR


class GenerationOrchestrator:
    """
    Runs ``model.complete`` up to ``max_attempts`` times. ``run`` also feeds each
    response through a handler (extraction and validation), so a response that
    cannot be parsed is retried like a failed call.
    """

    def __init__(
        self,
        model: TextModel,
        max_attempts: int = 3,
        attempt_timeout: float = 15.0,
        backoff: BackoffSchedule | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.model = model
        self.max_attempts = max(1, max_attempts)
        self.attempt_timeout = attempt_timeout
        self.backoff = backoff or BackoffSchedule()
        self.sleep = sleep
        self.clock = clock

    @classmethod
    def from_settings(cls, model: TextModel, settings: Settings, **kwargs) -> "GenerationOrchestrator":
        return cls(
            model,
            max_attempts=settings.generation_max_attempts,
            attempt_timeout=settings.generation_attempt_timeout_seconds,
            backoff=BackoffSchedule(
                base=settings.generation_backoff_base_seconds,
                max_jitter=settings.generation_backoff_max_jitter_seconds,
                cap=settings.generation_backoff_cap_seconds,
            ),
            **kwargs,
        )

    async def generate(self, prompt: str, deadline: float | None = None) -> str:
        """Return the first non-empty model response. Raises GenerationError."""
        outcome = await self.run(prompt, lambda text: text, deadline=deadline)
        return outcome.value

    async def _complete(self, prompt: str, timeout: float) -> str:
        text = await asyncio.wait_for(self.model.complete(prompt), timeout=timeout)
        if not text or not text.strip():
            raise EmptyResponseError()
        return text

    async def run(
        self,
        prompt: str,
        handle: Callable[[str], T],
        deadline: float | None = None,
    ) -> GenerationOutcome[T]:
        """
        Call the model and ``handle`` its text until one attempt succeeds.
        ``deadline`` is a ``clock()`` value; no attempt starts after it and
        attempt timeouts are shortened to fit. Raises GenerationError when every
        attempt fails.
        """
        attempts: list[GenerationAttempt] = []
        for number in range(1, self.max_attempts + 1):
            timeout = self.attempt_timeout
            if deadline is not None:
                remaining = deadline - self.clock()
                if remaining <= 0:
                    logger.warning("Request deadline reached before attempt %d", number)
                    break
                timeout = min(timeout, remaining)

            started = self.clock()
            raw = ""
            failure: Exception | None = None
            try:
                raw = await self._complete(prompt, timeout)
            except Exception as e:  # SDK, network, timeout and empty-response errors alike
                failure = e
            else:
                try:
                    value = handle(raw)
                except AttemptError as e:
                    failure = e

            elapsed_ms = int((self.clock() - started) * 1000)
            if failure is None:
                attempts.append(GenerationAttempt(number, elapsed_ms, len(raw), SUCCESS))
                logger.info(f"Generation succeeded on attempt {number} ({len(raw)} chars, {elapsed_ms}ms)")
                return GenerationOutcome(value=value, attempts=attempts)

            attempt = GenerationAttempt(
                number=number,
                elapsed_ms=elapsed_ms,
                raw_length=len(raw),
                outcome=classify_failure(failure),
                error=str(failure)[:200] or type(failure).__name__,
            )
            attempts.append(attempt)
            logger.warning(
                "Generation attempt failed",
                extra={
                    "attempt": number,
                    "outcome": attempt.outcome,
                    "elapsed_ms": attempt.elapsed_ms,
                    "raw_length": attempt.raw_length,
                    "error": attempt.error,
                },
            )

            if number < self.max_attempts:
                delay = self.backoff.delay(number)
                if deadline is not None and self.clock() + delay >= deadline:
                    logger.warning("Not enough time left to retry after attempt %d", number)
                    break
                logger.info(f"Retrying in {delay:.2f}s")
                await self.sleep(delay)

        last = attempts[-1] if attempts else None
        kind = last.outcome if last else TIMEOUT
        detail = last.error if last else "no time left for an attempt"
        raise GenerationError(
            f"AI generation failed after {len(attempts)} attempt(s): {detail}",
            kind=kind,
            attempts=len(attempts),
        )
