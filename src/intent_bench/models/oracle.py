"""Wire models for the two oracle endpoints.

Providers send JSON null for absent text (e.g. a reply cut off by the token
cap). Nullable wire fields decode to their zero value instead of failing.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    role: str
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatRequest(BaseModel):
    """Chat completion request body."""

    model: str
    messages: list[ChatMessage]
    temperature: float = 0.0
    max_tokens: int = Field(default=8, ge=1)


class ChatChoice(BaseModel):
    finish_reason: str | None = None
    native_finish_reason: str | None = None
    message: ChatMessage


class ChatUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    """Chat completion response body (only the fields the harness reads)."""

    id: str = ""
    choices: list[ChatChoice] = Field(default_factory=list)
    usage: ChatUsage | None = None
    model: str = ""

    @field_validator("id", "model", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices(cls, value: Any) -> Any:
        return [] if value is None else value


class ChatReply(BaseModel):
    """Trimmed first-choice content plus response metadata."""

    text: str
    model: str = ""
    finish_reason: str | None = None


class FindServiceRequest(BaseModel):
    intent: str


class FindServiceData(BaseModel):
    service_id: int = 0
    service_name: str = ""

    @field_validator("service_id", mode="before")
    @classmethod
    def _null_id(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("service_name", mode="before")
    @classmethod
    def _null_name(cls, value: Any) -> Any:
        return "" if value is None else value


class FindServiceResponse(BaseModel):
    """Classification service response envelope."""

    success: bool = False
    data: FindServiceData | None = None
    error: str = ""

    @field_validator("success", mode="before")
    @classmethod
    def _null_success(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("error", mode="before")
    @classmethod
    def _null_error(cls, value: Any) -> Any:
        return "" if value is None else value


class ClassificationResult(BaseModel):
    """Successful answer from the classification service."""

    service_id: int
    service_name: str
    elapsed_ms: float = 0.0
