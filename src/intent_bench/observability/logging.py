"""Structured logging for harness runs."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredLogFormatter(logging.Formatter):
    """
    JSON log formatter.

    Outputs logs in JSON format with:
    - Standard log fields (timestamp, level, message, logger)
    - Source location
    - Extra context attached via LogContext
    - Exception information
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        if getattr(record, "extra", None):
            log_entry["extra"] = record.extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    module_levels: dict[str, str] | None = None,
    stream: Any = None,
) -> None:
    """
    Configure logging for a harness run.

    Diagnostics go to stderr by default so they never interleave with the
    tabular report on stdout when the two are redirected separately.

    Args:
        level: Default log level.
        json_format: If True, use JSON format. Otherwise, a plain message format.
        module_levels: Per-module log levels (e.g., {"httpx": "DEBUG"}).
        stream: Output stream for the handler (defaults to stderr).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(logging.DEBUG)

    if json_format:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root_logger.addHandler(handler)

    # Reduce noise from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper()))

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s, json=%s, module_levels=%s",
        level,
        json_format,
        module_levels or {},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


class LogContext:
    """
    Context manager for adding extra fields to logs.

    Usage:
        with LogContext(batch="PRE", path="intents.csv"):
            logger.info("Running batch")  # Includes extra fields
    """

    def __init__(self, **kwargs: Any) -> None:
        self.extra = kwargs
        self._old_factory = None

    def __enter__(self) -> "LogContext":
        self._old_factory = logging.getLogRecordFactory()

        extra = self.extra
        old_factory = self._old_factory

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.extra = extra
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args) -> None:
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)
