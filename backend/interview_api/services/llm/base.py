"""
OpenAI chat client returning free-form completion text.
Retries and timeouts are owned by the generation orchestrator, not here.
"""
from typing import Protocol

from openai import AsyncOpenAI

from interview_api.config import Settings
from interview_api.errors import InterviewServiceError
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an experienced interview coach. "
    "You answer only with a JSON array, never with prose or markdown."
)


class LLMServiceError(InterviewServiceError):
    """Raised when the model client cannot be configured."""

    pass


class TextModel(Protocol):
    async def complete(self, prompt: str) -> str: ...


def get_openai_client(settings: Settings) -> AsyncOpenAI:
    if not settings.openai_api_key:
        raise LLMServiceError("OPENAI_API_KEY is not configured")
    # SDK retries are disabled; the orchestrator does its own backoff
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        max_retries=0,
    )


class OpenAIChatModel:
    """TextModel over the chat completions API."""

    def __init__(self, client: AsyncOpenAI, settings: Settings):
        self.client = client
        self.model = settings.openai_model
        self.max_tokens = settings.openai_max_tokens
        self.temperature = settings.openai_temperature
        self.top_p = settings.openai_top_p
        self.stop = list(settings.openai_stop)

    async def complete(self, prompt: str) -> str:
        kwargs = {}
        if self.stop:
            kwargs["stop"] = self.stop
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            n=1,
            **kwargs,
        )
        if not response.choices:
            return ""
        choice = response.choices[0]
        if choice.finish_reason == "length":
            logger.warning("Model output truncated at max_tokens", extra={"max_tokens": self.max_tokens})
        return choice.message.content or ""
