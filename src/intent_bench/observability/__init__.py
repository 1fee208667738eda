"""Logging setup for the harness."""

from intent_bench.observability.logging import LogContext, configure_logging, get_logger

__all__ = ["LogContext", "configure_logging", "get_logger"]
