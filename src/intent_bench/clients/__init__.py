"""HTTP clients for the oracles under test."""

from intent_bench.clients.chat import ChatCompletionClient
from intent_bench.clients.find_service import FindServiceClient

__all__ = ["ChatCompletionClient", "FindServiceClient"]
