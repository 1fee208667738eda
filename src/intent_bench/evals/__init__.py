"""Evaluation harness for service classification oracles."""

from intent_bench.evals.metrics import BatchStats, ServiceBreakdown
from intent_bench.evals.report import ConsoleReporter, ResultCsvWriter
from intent_bench.evals.runner import EvalRunner, FindServiceRunner, FindServiceSummary

__all__ = [
    "BatchStats",
    "ConsoleReporter",
    "EvalRunner",
    "FindServiceRunner",
    "FindServiceSummary",
    "ResultCsvWriter",
    "ServiceBreakdown",
]
