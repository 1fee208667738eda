"""Command line entry points for the two harnesses."""

import argparse
import json
import sys
from pathlib import Path

from intent_bench.clients import ChatCompletionClient, FindServiceClient
from intent_bench.config import Settings, get_settings
from intent_bench.evals import ConsoleReporter, EvalRunner, FindServiceRunner, ResultCsvWriter
from intent_bench.exceptions import ConfigurationError, IntentBenchError, OutputError
from intent_bench.loader import load_intents, load_samples
from intent_bench.models.catalog import Catalog
from intent_bench.observability import LogContext, configure_logging, get_logger

logger = get_logger(__name__)


def build_benchmark_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Measure how reliably a chat model maps intents onto the service catalog",
    )
    parser.add_argument("--pre", default=settings.pre_path, help="Path to the pre-loaded intents CSV")
    parser.add_argument("--pos", default=settings.pos_path, help="Path to the post-loaded intents CSV")
    parser.add_argument("--model", default=settings.openrouter_model, help="Model identifier")
    parser.add_argument(
        "--calls",
        type=int,
        default=settings.calls_per_sample,
        help="Independent calls per sample",
    )
    parser.add_argument("--output", default=None, help="Path to save the stats as JSON")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=settings.log_json,
        help="Emit JSON structured logs",
    )
    return parser


def run_benchmark(args: argparse.Namespace, settings: Settings) -> dict[str, dict]:
    """
    Load both input files, then evaluate each as its own batch.

    Both files are validated before any oracle call is made.

    Raises:
        IntentBenchError: On any fatal configuration, load or output error.
    """
    if args.calls < 1:
        raise ConfigurationError("--calls must be >= 1")
    api_key = settings.require_api_key()
    catalog = Catalog.default()

    batches = [
        (f"PRE ({args.pre})", load_samples(args.pre, catalog)),
        (f"POS ({args.pos})", load_samples(args.pos, catalog)),
    ]

    results: dict[str, dict] = {}
    with ChatCompletionClient(
        api_key=api_key,
        model=args.model,
        url=settings.openrouter_url,
        timeout=settings.chat_timeout_seconds,
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        referer=settings.openrouter_referer,
        title=settings.openrouter_title,
    ) as client:
        runner = EvalRunner(
            client=client,
            catalog=catalog,
            calls_per_sample=args.calls,
            reporter=ConsoleReporter(catalog),
        )
        for label, samples in batches:
            with LogContext(batch=label, model=args.model):
                stats = runner.run(label, samples)
            results[label] = stats.to_dict(catalog)

    if args.output:
        output_path = Path(args.output)
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(results, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OutputError(f"cannot write results to {output_path}: {e}") from e
        print(f"\nResults saved to: {output_path}")

    return results


def run_benchmark_main(argv: list[str] | None = None) -> int:
    """Entry point for ``intent-bench``."""
    settings = get_settings()
    args = build_benchmark_parser(settings).parse_args(argv)
    configure_logging(level=args.log_level, json_format=args.log_json)

    try:
        run_benchmark(args, settings)
    except IntentBenchError as e:
        logger.error("%s", e)
        return 1
    return 0


def build_find_services_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send each intent to the classification service and save the answers",
    )
    parser.add_argument(
        "--in",
        dest="input",
        default=settings.find_service_in,
        help="Input CSV (';' separated) containing the intents",
    )
    parser.add_argument(
        "--out",
        dest="output",
        default=settings.find_service_out,
        help="Output CSV where the returned services are saved",
    )
    parser.add_argument("--url", default=settings.find_service_url, help="URL of /api/find-service")
    parser.add_argument(
        "--timeout",
        type=int,
        default=settings.find_service_timeout_ms,
        help="HTTP timeout in milliseconds",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    return parser


def find_services(args: argparse.Namespace) -> int:
    """Run the classification service harness; returns the number of rows written."""
    intents = load_intents(args.input)
    with FindServiceClient(url=args.url, timeout_ms=args.timeout) as client:
        with ResultCsvWriter(args.output) as writer:
            summary = FindServiceRunner(client, writer).run(intents)
    logger.info(
        "Classified %d intents: %d succeeded, %d failed",
        summary.total,
        summary.succeeded,
        summary.failed,
    )
    print(f"Process complete. Output saved to: {args.output}")
    return summary.total


def find_services_main(argv: list[str] | None = None) -> int:
    """Entry point for ``find-services``."""
    settings = get_settings()
    args = build_find_services_parser(settings).parse_args(argv)
    configure_logging(level=args.log_level, json_format=settings.log_json)

    try:
        find_services(args)
    except IntentBenchError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run_benchmark_main())
