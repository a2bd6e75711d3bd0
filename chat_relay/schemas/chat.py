from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048


class ChatRequest(BaseModel):
    # Values are passed through untouched; defaults only fill absent keys
    messages: list[Any]
    model: Any = DEFAULT_MODEL
    temperature: Any = DEFAULT_TEMPERATURE
    max_tokens: Any = DEFAULT_MAX_TOKENS

    def to_upstream(self) -> dict[str, Any]:
        """Body of the outbound chat-completions call. Streaming is never requested."""
        return {
            "model": self.model,
            "messages": self.messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": False,
        }


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str


@dataclass(frozen=True)
class RelayFailure:
    """A terminal outcome of one relay step, already mapped to a status code."""

    status_code: int
    error: ErrorResponse

    @property
    def body(self) -> dict[str, str]:
        return self.error.model_dump(exclude_none=True)
