"""Chat completion client (OpenRouter-compatible endpoint)."""

import json
from typing import Any

import httpx
from pydantic import ValidationError

from intent_bench.exceptions import DecodeError, EmptyChoicesError, StatusError, TransportError
from intent_bench.models.oracle import ChatMessage, ChatReply, ChatRequest, ChatResponse, MessageRole

DEFAULT_CHAT_URL = "https://openrouter.ai/api/v1/chat/completions"


class ChatCompletionClient:
    """
    Blocking client for a chat completion endpoint.

    Sends a system + user message pair with temperature 0 and a tiny
    output cap, and returns the first choice's trimmed content. Every
    failure is raised as a typed ``OracleError``; nothing is retried.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        url: str = DEFAULT_CHAT_URL,
        timeout: float = 45.0,
        max_tokens: int = 8,
        temperature: float = 0.0,
        referer: str = "https://example.com",
        title: str = "Intent Matching Benchmark",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the chat client.

        Args:
            api_key: Bearer credential.
            model: Model identifier sent with each request.
            url: Chat completion endpoint.
            timeout: Client-side timeout per call, in seconds.
            max_tokens: Output token cap.
            temperature: Sampling temperature.
            referer: HTTP-Referer header value.
            title: X-Title header value.
            transport: Optional httpx transport (used by tests).
        """
        self.api_key = api_key
        self.model = model
        self.url = url
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.referer = referer
        self.title = title
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                    "HTTP-Referer": self.referer,
                    "X-Title": self.title,
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ChatCompletionClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def build_request(self, system_text: str, user_text: str, model: str | None = None) -> ChatRequest:
        return ChatRequest(
            model=model or self.model,
            messages=[
                ChatMessage(role=MessageRole.SYSTEM.value, content=system_text),
                ChatMessage(role=MessageRole.USER.value, content=user_text),
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    def complete(self, system_text: str, user_text: str, model: str | None = None) -> ChatReply:
        """
        Run one chat completion.

        Raises:
            TransportError: Connection failure or timeout.
            StatusError: Non-2xx response.
            DecodeError: Body is not JSON of the expected shape.
            EmptyChoicesError: Response has no choices.
        """
        payload = self.build_request(system_text, user_text, model).model_dump(mode="json")

        try:
            response = self.client.post(self.url, json=payload)
        except httpx.RequestError as e:
            raise TransportError(f"do request: {e}") from e

        body = response.text
        if not response.is_success:
            raise StatusError(response.status_code, body)

        try:
            parsed = ChatResponse.model_validate(json.loads(body))
        except (ValueError, ValidationError) as e:
            raise DecodeError(str(e), body=body) from e

        if not parsed.choices:
            raise EmptyChoicesError()

        first = parsed.choices[0]
        return ChatReply(
            text=first.message.content.strip(),
            model=parsed.model,
            finish_reason=first.finish_reason,
        )
