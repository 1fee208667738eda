"""Console report and result CSV rendering."""

import csv
import sys
from pathlib import Path
from typing import Any, TextIO

from intent_bench.evals.metrics import BatchStats
from intent_bench.exceptions import IntentBenchError, OutputError, ParseError, truncate_diagnostic
from intent_bench.models.catalog import Catalog
from intent_bench.models.sample import CaseResult

RULE = "-" * 94

RESULT_HEADER = ("service_id", "service_name", "intent", "success", "error")


def describe_error(error: IntentBenchError) -> str:
    """One-line diagnostic for a failed call."""
    if isinstance(error, ParseError):
        return f"parse: {error.message}"
    return error.message


class ConsoleReporter:
    """Fixed-width tabular report for the chat completion harness."""

    def __init__(self, catalog: Catalog, out: TextIO | None = None) -> None:
        self.catalog = catalog
        self.out = out or sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def start(self, label: str, cases: int, model: str, calls_per_sample: int) -> None:
        self._print()
        self._print(f"===== Run: {label} =====")
        self._print(f"Cases: {cases} | Model: {model} | Calls per case: {calls_per_sample}")
        self._print(RULE)
        columns = [f"{'Idx':<5}", f"{'Exp':<5}"]
        columns += [f"{f'Got#{n}':<6}" for n in range(1, calls_per_sample + 1)]
        columns += [f"{f'Lat#{n}(ms)':<12}" for n in range(1, calls_per_sample + 1)]
        columns.append("Intent")
        self._print(" | ".join(columns))
        self._print(RULE)

    def row(self, case: CaseResult) -> None:
        columns = [f"{case.index:<5d}", f"{case.expected_id:<5d}"]
        columns += [f"{o.got_id:<6d}" for o in case.outcomes]
        columns += [f"{o.elapsed_ms:<12.2f}" for o in case.outcomes]
        columns.append(case.sample.intent_text)
        self._print(" | ".join(columns))

        for n, outcome in enumerate(case.outcomes, start=1):
            if outcome.error is not None:
                self._print(f"    error#{n}: {truncate_diagnostic(describe_error(outcome.error))}")

    def summary(self, stats: BatchStats) -> None:
        slots = range(stats.calls_per_sample)
        self._print(RULE)
        self._print("  | ".join(f"Accuracy #{s + 1}: {stats.accuracy(s):.1f}%" for s in slots))
        self._print(
            " | ".join(f"Avg latency #{s + 1}: {stats.avg_latency_ms(s):.2f} ms" for s in slots)
        )
        if stats.calls_per_sample > 1:
            self._print(f"Agreement (all calls same id): {stats.agreement:.1f}%")

        ok_labels = " / ".join(f"ok#{s + 1}" for s in slots)
        self._print()
        self._print(f"Per-service summary (ID: seen / {ok_labels} / name):")
        for breakdown in stats.per_service(self.catalog):
            counts = " / ".join(f"{c:3d}" for c in [breakdown.seen, *breakdown.correct_per_call])
            self._print(f"  {breakdown.service_id:2d}: {counts}  - {breakdown.service_name}")


class ResultCsvWriter:
    """
    Writes one ``;``-delimited row per classified intent.

    Usage:
        with ResultCsvWriter("found_services.csv") as writer:
            writer.write_success(4, "Status de Entrega do Cartão", "onde está meu cartão?")
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._file: TextIO | None = None
        self._writer: Any = None

    def open(self) -> "ResultCsvWriter":
        try:
            self._file = open(self.path, "w", newline="", encoding="utf-8")
            self._writer = csv.writer(self._file, delimiter=";", lineterminator="\n")
            self._writer.writerow(RESULT_HEADER)
        except OSError as e:
            raise OutputError(f"cannot write output CSV {self.path}: {e}") from e
        return self

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            raise OutputError(f"cannot finish output CSV {self.path}: {e}") from e
        finally:
            self._file = None
            self._writer = None

    def __enter__(self) -> "ResultCsvWriter":
        return self.open()

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _write(self, row: tuple[str, ...]) -> None:
        if self._writer is None:
            raise OutputError("output CSV is not open")
        try:
            self._writer.writerow(row)
        except OSError as e:
            raise OutputError(f"cannot write output CSV {self.path}: {e}") from e

    def write_success(self, service_id: int, service_name: str, intent: str) -> None:
        self._write((str(service_id), service_name, intent, "true", ""))

    def write_failure(self, intent: str, error: str) -> None:
        self._write(("", "", intent, "false", error))
