"""Unit tests for the oracle HTTP clients."""

import json

import httpx
import pytest

from intent_bench.clients import ChatCompletionClient, FindServiceClient
from intent_bench.exceptions import (
    DecodeError,
    EmptyChoicesError,
    ErrorKind,
    ServiceFailureError,
    StatusError,
    TransportError,
)


def chat_body(content: str, model: str = "openai/gpt-4o-mini") -> dict:
    return {
        "id": "gen-1",
        "model": model,
        "choices": [
            {"finish_reason": "stop", "message": {"role": "assistant", "content": content}}
        ],
        "usage": {"prompt_tokens": 300, "completion_tokens": 1, "total_tokens": 301},
    }


class TestChatCompletionClient:
    """Tests for ChatCompletionClient."""

    def make_client(self, handler) -> ChatCompletionClient:
        return ChatCompletionClient(
            api_key="sk-or-test",
            model="openai/gpt-4o-mini",
            url="https://oracle.test/v1/chat/completions",
            transport=httpx.MockTransport(handler),
        )

    def test_request_shape_and_headers(self) -> None:
        """Request carries bearer auth, metadata headers and a tiny token cap."""
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=chat_body(" 4 \n"))

        with self.make_client(handler) as client:
            reply = client.complete("system text", "user text")

        assert reply.text == "4"
        assert reply.model == "openai/gpt-4o-mini"
        assert reply.finish_reason == "stop"
        assert captured["headers"]["authorization"] == "Bearer sk-or-test"
        assert captured["headers"]["x-title"] == "Intent Matching Benchmark"
        assert captured["headers"]["http-referer"] == "https://example.com"
        body = captured["body"]
        assert body["model"] == "openai/gpt-4o-mini"
        assert body["temperature"] == 0.0
        assert body["max_tokens"] == 8
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["messages"][1]["content"] == "user text"

    def test_non_2xx_raises_status_error(self) -> None:
        """Non-success status carries the code and raw body."""
        client = self.make_client(lambda request: httpx.Response(429, text="rate limited"))
        with pytest.raises(StatusError) as exc_info:
            client.complete("s", "u")
        assert exc_info.value.status_code == 429
        assert exc_info.value.body == "rate limited"
        assert exc_info.value.kind is ErrorKind.STATUS

    def test_invalid_json_raises_decode_error(self) -> None:
        """A non-JSON body is a decode failure."""
        client = self.make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(DecodeError):
            client.complete("s", "u")

    def test_wrong_shape_raises_decode_error(self) -> None:
        """JSON that does not match the response shape is a decode failure."""
        client = self.make_client(
            lambda request: httpx.Response(200, json={"choices": [{"message": "oops"}]})
        )
        with pytest.raises(DecodeError):
            client.complete("s", "u")

    def test_null_content_is_empty_text(self) -> None:
        """A reply cut off with null content decodes to empty text, not a decode error."""
        client = self.make_client(
            lambda request: httpx.Response(
                200,
                json={
                    "id": "gen-1",
                    "model": None,
                    "choices": [
                        {"finish_reason": "length", "message": {"role": "assistant", "content": None}}
                    ],
                },
            )
        )
        reply = client.complete("s", "u")
        assert reply.text == ""
        assert reply.model == ""
        assert reply.finish_reason == "length"

    def test_empty_choices(self) -> None:
        """Zero choices raise EmptyChoicesError."""
        client = self.make_client(
            lambda request: httpx.Response(200, json={"id": "x", "choices": [], "model": "m"})
        )
        with pytest.raises(EmptyChoicesError):
            client.complete("s", "u")

    def test_connection_failure(self) -> None:
        """Transport failures are wrapped as TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            self.make_client(handler).complete("s", "u")
        assert not exc_info.value.fatal

    def test_timeout_is_transport_error(self) -> None:
        """A client-side timeout surfaces as TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            self.make_client(handler).complete("s", "u")

    def test_default_timeout(self) -> None:
        """The default per-call timeout is 45 seconds."""
        client = ChatCompletionClient(api_key="k", model="m")
        assert client.timeout == 45.0
        assert client.client.timeout.read == 45.0
        client.close()


class TestFindServiceClient:
    """Tests for FindServiceClient."""

    def make_client(self, handler) -> FindServiceClient:
        return FindServiceClient(
            url="http://localhost:16081/api/find-service",
            timeout_ms=1500,
            transport=httpx.MockTransport(handler),
        )

    def test_success(self) -> None:
        """A success envelope yields the service id and name."""
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {"service_id": 4, "service_name": "Status de Entrega do Cartão"},
                    "error": "",
                },
            )

        with self.make_client(handler) as client:
            result = client.find_service("onde está meu cartão?")

        assert captured["body"] == {"intent": "onde está meu cartão?"}
        assert result.service_id == 4
        assert result.service_name == "Status de Entrega do Cartão"

    def test_success_with_null_error(self) -> None:
        """A success envelope with 'error': null is still a success."""
        client = self.make_client(
            lambda request: httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {"service_id": 4, "service_name": "Status de Entrega do Cartão"},
                    "error": None,
                },
            )
        )
        result = client.find_service("onde está meu cartão?")
        assert result.service_id == 4
        assert result.service_name == "Status de Entrega do Cartão"

    def test_failure_with_null_error(self) -> None:
        """success=false with a null error yields an empty error text."""
        client = self.make_client(
            lambda request: httpx.Response(200, json={"success": False, "data": None, "error": None})
        )
        with pytest.raises(ServiceFailureError) as exc_info:
            client.find_service("???")
        assert exc_info.value.message == ""

    def test_unsuccessful_response(self) -> None:
        """success=false raises ServiceFailureError with the service's error text."""
        client = self.make_client(
            lambda request: httpx.Response(200, json={"success": False, "error": " unmatched "})
        )
        with pytest.raises(ServiceFailureError) as exc_info:
            client.find_service("???")
        assert exc_info.value.message == "unmatched"

    def test_status_code_is_not_inspected(self) -> None:
        """A 500 with a valid success envelope still counts as success."""
        client = self.make_client(
            lambda request: httpx.Response(
                500, json={"success": True, "data": {"service_id": 2, "service_name": "x"}}
            )
        )
        assert client.find_service("boleto").service_id == 2

    def test_decode_failure(self) -> None:
        """A non-JSON body raises DecodeError with a decode prefix."""
        client = self.make_client(lambda request: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(DecodeError) as exc_info:
            client.find_service("x")
        assert exc_info.value.message.startswith("decode error:")

    def test_transport_failure(self) -> None:
        """Connection failures raise TransportError with an http prefix."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            self.make_client(handler).find_service("x")
        assert exc_info.value.message.startswith("http error:")
        assert "elapsed_ms" in exc_info.value.context

    def test_timeout_in_seconds(self) -> None:
        """Millisecond timeout is converted for httpx."""
        client = FindServiceClient(timeout_ms=1500)
        assert client.client.timeout.read == 1.5
        client.close()
