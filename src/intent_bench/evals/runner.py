"""Evaluation runners for the two oracle variants."""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from intent_bench.evals.metrics import BatchStats
from intent_bench.evals.report import ConsoleReporter, ResultCsvWriter
from intent_bench.exceptions import OracleError, ParseError
from intent_bench.models.catalog import Catalog
from intent_bench.models.oracle import ChatReply, ClassificationResult
from intent_bench.models.sample import CallOutcome, CaseResult, Sample
from intent_bench.observability import get_logger
from intent_bench.parser import parse_service_id
from intent_bench.prompts import build_system_prompt, build_user_prompt

logger = get_logger(__name__)


class ChatOracle(Protocol):
    model: str

    def complete(self, system_text: str, user_text: str, model: str | None = None) -> ChatReply: ...


class ClassificationOracle(Protocol):
    def find_service(self, intent: str) -> ClassificationResult: ...


class EvalRunner:
    """
    Sequential evaluation runner for a chat completion oracle.

    Each sample is sent ``calls_per_sample`` times with identical prompts
    to probe whether a nominally deterministic oracle answers
    consistently. Failed calls are never retried; they score as
    incorrect for their slot.
    """

    def __init__(
        self,
        client: ChatOracle,
        catalog: Catalog,
        calls_per_sample: int = 2,
        reporter: ConsoleReporter | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Initialize the evaluation runner.

        Args:
            client: Chat oracle to evaluate.
            catalog: Catalog used for the system prompt and id bounds.
            calls_per_sample: Independent calls per sample.
            reporter: Console reporter (defaults to stdout).
            clock: Monotonic clock in seconds.
        """
        if calls_per_sample < 1:
            raise ValueError("calls_per_sample must be >= 1")
        self.client = client
        self.catalog = catalog
        self.calls_per_sample = calls_per_sample
        self.reporter = reporter or ConsoleReporter(catalog)
        self.clock = clock
        self.system_prompt = build_system_prompt(catalog)

    def call_once(self, user_prompt: str) -> CallOutcome:
        """Make one oracle call and parse its answer."""
        start = self.clock()
        try:
            reply = self.client.complete(self.system_prompt, user_prompt)
        except OracleError as e:
            elapsed_ms = (self.clock() - start) * 1000
            return CallOutcome(elapsed_ms=elapsed_ms, error=e)
        elapsed_ms = (self.clock() - start) * 1000

        outcome = CallOutcome(
            raw_text=reply.text,
            elapsed_ms=elapsed_ms,
            model=reply.model or None,
            finish_reason=reply.finish_reason,
        )
        try:
            outcome.parsed_id = parse_service_id(
                reply.text,
                min_id=self.catalog.min_id,
                max_id=self.catalog.max_id,
            )
        except ParseError as e:
            outcome.error = e
        return outcome

    def run_single(self, index: int, sample: Sample) -> CaseResult:
        """Evaluate one sample with every call slot."""
        user_prompt = build_user_prompt(sample.intent_text)
        outcomes = [self.call_once(user_prompt) for _ in range(self.calls_per_sample)]
        for slot, outcome in enumerate(outcomes, start=1):
            if outcome.error is not None:
                logger.debug(
                    "case %d call %d failed (%s): %s",
                    index,
                    slot,
                    outcome.error.kind.value,
                    outcome.error.message,
                )
        return CaseResult(index=index, sample=sample, outcomes=outcomes)

    def run(self, label: str, samples: Sequence[Sample]) -> BatchStats:
        """
        Run one batch and print its report.

        Args:
            label: Batch label shown in the report header.
            samples: Samples to evaluate, in order.

        Returns:
            BatchStats for the batch.
        """
        stats = BatchStats(calls_per_sample=self.calls_per_sample)
        self.reporter.start(label, len(samples), self.client.model, self.calls_per_sample)

        for index, sample in enumerate(samples, start=1):
            case = self.run_single(index, sample)
            stats.record(case)
            self.reporter.row(case)

        self.reporter.summary(stats)
        logger.info(
            "Batch %s finished: %d cases, accuracy %s",
            label,
            stats.total,
            ", ".join(f"{stats.accuracy(s):.1f}%" for s in range(self.calls_per_sample)),
        )
        return stats


@dataclass
class FindServiceSummary:
    """Row counts for a classification service run."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0


class FindServiceRunner:
    """
    Smoke test for the classification service.

    Sends each intent once and writes exactly one output row per input
    row, success or not. No accuracy is computed here; the output file is
    the dataset for that.
    """

    def __init__(self, client: ClassificationOracle, writer: ResultCsvWriter) -> None:
        self.client = client
        self.writer = writer

    def run(self, intents: Sequence[str]) -> FindServiceSummary:
        summary = FindServiceSummary()
        for intent in intents:
            summary.total += 1
            try:
                result = self.client.find_service(intent)
            except OracleError as e:
                summary.failed += 1
                self.writer.write_failure(intent, e.message)
                elapsed_ms = e.context.get("elapsed_ms")
                logger.warning(
                    "%s (%s): %s | intent: %s",
                    e.kind.value,
                    f"{elapsed_ms:.0f}ms" if elapsed_ms is not None else "n/a",
                    e.message,
                    intent,
                )
                continue

            summary.succeeded += 1
            self.writer.write_success(result.service_id, result.service_name, intent)
        return summary
