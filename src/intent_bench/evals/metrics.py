"""Batch statistics for the chat completion harness."""

from dataclasses import dataclass, field
from typing import Any

from intent_bench.models.catalog import Catalog
from intent_bench.models.sample import CaseResult


def percent(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100.0


@dataclass
class ServiceBreakdown:
    """Per-service counts for one batch."""

    service_id: int
    service_name: str
    seen: int
    correct_per_call: list[int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "seen": self.seen,
            "correct_per_call": list(self.correct_per_call),
        }


@dataclass
class BatchStats:
    """
    Accumulated accuracy and latency for one batch.

    One slot per call made for each sample. Failed calls count as
    incorrect and stay in every denominator.
    """

    calls_per_sample: int = 2
    total: int = 0
    agreeing: int = 0
    correct_per_call: list[int] = field(default_factory=list)
    errors_per_call: list[int] = field(default_factory=list)
    latency_sum_ms_per_call: list[float] = field(default_factory=list)
    per_service_seen: dict[int, int] = field(default_factory=dict)
    per_service_correct_per_call: list[dict[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.calls_per_sample < 1:
            raise ValueError("calls_per_sample must be >= 1")
        slots = self.calls_per_sample
        self.correct_per_call = self.correct_per_call or [0] * slots
        self.errors_per_call = self.errors_per_call or [0] * slots
        self.latency_sum_ms_per_call = self.latency_sum_ms_per_call or [0.0] * slots
        self.per_service_correct_per_call = self.per_service_correct_per_call or [
            {} for _ in range(slots)
        ]

    def record(self, case: CaseResult) -> None:
        """Fold one sample's outcomes into the batch totals."""
        if len(case.outcomes) != self.calls_per_sample:
            raise ValueError(
                f"expected {self.calls_per_sample} outcomes, got {len(case.outcomes)}"
            )

        expected = case.expected_id
        self.total += 1
        self.per_service_seen[expected] = self.per_service_seen.get(expected, 0) + 1

        for slot, outcome in enumerate(case.outcomes):
            self.latency_sum_ms_per_call[slot] += outcome.elapsed_ms
            if outcome.error is not None:
                self.errors_per_call[slot] += 1
            if outcome.is_correct(expected):
                self.correct_per_call[slot] += 1
                by_service = self.per_service_correct_per_call[slot]
                by_service[expected] = by_service.get(expected, 0) + 1

        if case.agrees:
            self.agreeing += 1

    def accuracy(self, slot: int) -> float:
        """Percentage of samples answered correctly by call ``slot`` (0-based)."""
        return percent(self.correct_per_call[slot], self.total)

    def avg_latency_ms(self, slot: int) -> float:
        if self.total == 0:
            return 0.0
        return self.latency_sum_ms_per_call[slot] / self.total

    @property
    def agreement(self) -> float:
        """Percentage of samples where every call parsed to the same id."""
        return percent(self.agreeing, self.total)

    def per_service(self, catalog: Catalog) -> list[ServiceBreakdown]:
        """Breakdown for services seen in this batch, in catalog order."""
        rows: list[ServiceBreakdown] = []
        for service in catalog:
            seen = self.per_service_seen.get(service.id, 0)
            if seen == 0:
                continue
            rows.append(
                ServiceBreakdown(
                    service_id=service.id,
                    service_name=service.name,
                    seen=seen,
                    correct_per_call=[
                        by_service.get(service.id, 0)
                        for by_service in self.per_service_correct_per_call
                    ],
                )
            )
        return rows

    def to_dict(self, catalog: Catalog) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        slots = range(self.calls_per_sample)
        return {
            "total": self.total,
            "calls_per_sample": self.calls_per_sample,
            "accuracy": [round(self.accuracy(s), 2) for s in slots],
            "avg_latency_ms": [round(self.avg_latency_ms(s), 2) for s in slots],
            "correct": list(self.correct_per_call),
            "errors": list(self.errors_per_call),
            "agreement": round(self.agreement, 2),
            "per_service": [row.to_dict() for row in self.per_service(catalog)],
        }
