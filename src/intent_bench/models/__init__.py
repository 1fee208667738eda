"""Data models for the evaluation harness."""

from intent_bench.models.catalog import DEFAULT_SERVICES, Catalog, Service
from intent_bench.models.oracle import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatResponse,
    ClassificationResult,
    FindServiceRequest,
    FindServiceResponse,
    MessageRole,
)
from intent_bench.models.sample import CallOutcome, CaseResult, Sample

__all__ = [
    "CallOutcome",
    "CaseResult",
    "Catalog",
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "ChatResponse",
    "ClassificationResult",
    "DEFAULT_SERVICES",
    "FindServiceRequest",
    "FindServiceResponse",
    "MessageRole",
    "Sample",
    "Service",
]
