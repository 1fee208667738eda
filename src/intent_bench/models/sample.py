"""Evaluation samples and per-call outcomes."""

from pydantic import BaseModel, Field

from intent_bench.exceptions import IntentBenchError


class Sample(BaseModel):
    """One labeled evaluation unit: expected service plus the customer's text."""

    service_id: int = Field(description="Expected catalog service id")
    service_name: str = Field(description="Canonical catalog name for service_id")
    intent_text: str = Field(default="", description="Free-text customer intent")
    line: int | None = Field(default=None, description="Source line in the input file")

    model_config = {"frozen": True}


class CallOutcome(BaseModel):
    """Result of a single oracle call for one sample."""

    raw_text: str = ""
    parsed_id: int | None = None
    elapsed_ms: float = Field(default=0.0, ge=0.0)
    error: IntentBenchError | None = None
    model: str | None = None
    finish_reason: str | None = None

    model_config = {"arbitrary_types_allowed": True}

    @property
    def got_id(self) -> int:
        """Parsed id, or 0 when the call or the parse failed."""
        return self.parsed_id if self.parsed_id is not None else 0

    def is_correct(self, expected_id: int) -> bool:
        return self.parsed_id is not None and self.parsed_id == expected_id


class CaseResult(BaseModel):
    """All call outcomes recorded for one sample."""

    index: int = Field(ge=1, description="1-based position in the batch")
    sample: Sample
    outcomes: list[CallOutcome] = Field(default_factory=list)

    @property
    def expected_id(self) -> int:
        return self.sample.service_id

    @property
    def agrees(self) -> bool:
        """True when every call parsed successfully to the same id."""
        ids = [o.parsed_id for o in self.outcomes]
        if not ids or any(i is None for i in ids):
            return False
        return len(set(ids)) == 1
