"""Client for the local classification service (POST /api/find-service)."""

import json
import time
from typing import Any

import httpx
from pydantic import ValidationError

from intent_bench.exceptions import DecodeError, ServiceFailureError, TransportError
from intent_bench.models.oracle import ClassificationResult, FindServiceRequest, FindServiceResponse

DEFAULT_FIND_SERVICE_URL = "http://localhost:16081/api/find-service"


class FindServiceClient:
    """
    Blocking client for the classification service.

    The HTTP status is not inspected: the decoded ``success`` flag decides
    whether the call succeeded.
    """

    def __init__(
        self,
        url: str = DEFAULT_FIND_SERVICE_URL,
        timeout_ms: int = 15000,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout_ms = timeout_ms
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_ms / 1000.0,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FindServiceClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def find_service(self, intent: str) -> ClassificationResult:
        """
        Classify one intent.

        Raises:
            TransportError: Connection failure or timeout.
            DecodeError: Body is not a JSON envelope, or reports success without data.
            ServiceFailureError: The service answered ``success=false``.
        """
        payload = FindServiceRequest(intent=intent).model_dump()

        start = time.perf_counter()
        try:
            response = self.client.post(self.url, json=payload)
        except httpx.RequestError as e:
            raise TransportError(
                f"http error: {e}",
                elapsed_ms=(time.perf_counter() - start) * 1000,
            ) from e
        elapsed_ms = (time.perf_counter() - start) * 1000

        try:
            envelope = FindServiceResponse.model_validate(json.loads(response.text))
        except (ValueError, ValidationError) as e:
            raise DecodeError(str(e), body=response.text) from e

        if not envelope.success:
            raise ServiceFailureError(envelope.error.strip(), elapsed_ms=elapsed_ms)
        if envelope.data is None:
            raise DecodeError("success response without data", body=response.text)

        return ClassificationResult(
            service_id=envelope.data.service_id,
            service_name=envelope.data.service_name,
            elapsed_ms=elapsed_ms,
        )
