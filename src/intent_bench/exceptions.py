"""Domain exceptions for the evaluation harness.

Every error carries an ``ErrorKind`` so callers can branch on the failure
category without parsing messages. Configuration, load and output errors
abort a run; everything else is scoped to a single row or call.
"""

from enum import Enum
from typing import Any

MAX_DIAGNOSTIC_CHARS = 180


class ErrorKind(str, Enum):
    """Failure categories raised by the harness."""

    CONFIG = "config"
    LOAD = "load"
    OUTPUT = "output"
    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"
    EMPTY_CHOICES = "empty_choices"
    SERVICE_FAILURE = "service_failure"
    NO_DIGITS = "no_digits"
    INVALID_INTEGER = "invalid_integer"
    OUT_OF_RANGE = "out_of_range"


FATAL_KINDS = frozenset({ErrorKind.CONFIG, ErrorKind.LOAD, ErrorKind.OUTPUT})


class IntentBenchError(Exception):
    """Base exception for harness errors."""

    kind: ErrorKind = ErrorKind.CONFIG

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or message
        self.context = context

    @property
    def fatal(self) -> bool:
        """Whether this error should abort the whole run."""
        return self.kind in FATAL_KINDS


class ConfigurationError(IntentBenchError):
    """Raised when required configuration (e.g. the API key) is missing."""

    kind = ErrorKind.CONFIG


class LoadError(IntentBenchError):
    """Raised when an input file cannot be read or fails validation."""

    kind = ErrorKind.LOAD

    def __init__(self, message: str, *, path: str, line: int | None = None) -> None:
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"{location}: {message}", detail=message, path=path, line=line)
        self.path = path
        self.line = line


class OutputError(IntentBenchError):
    """Raised when the result file cannot be written."""

    kind = ErrorKind.OUTPUT


class OracleError(IntentBenchError):
    """Base for failures talking to an oracle endpoint."""

    kind = ErrorKind.TRANSPORT


class TransportError(OracleError):
    """Connection failure or client-side timeout."""

    kind = ErrorKind.TRANSPORT


class StatusError(OracleError):
    """Non-2xx response from the oracle."""

    kind = ErrorKind.STATUS

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"status {status_code}: {body}", status_code=status_code, body=body)
        self.status_code = status_code
        self.body = body


class DecodeError(OracleError):
    """Response body is not JSON of the expected shape."""

    kind = ErrorKind.DECODE

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(f"decode error: {message}", detail=message, body=body)
        self.body = body


class EmptyChoicesError(OracleError):
    """Chat completion response contained no choices."""

    kind = ErrorKind.EMPTY_CHOICES

    def __init__(self, message: str = "no choices") -> None:
        super().__init__(message)


class ServiceFailureError(OracleError):
    """Classification service answered with ``success=false``."""

    kind = ErrorKind.SERVICE_FAILURE


class ParseError(IntentBenchError):
    """Base for failures extracting a service id from raw oracle text."""

    kind = ErrorKind.NO_DIGITS

    def __init__(self, message: str, *, raw_text: str, **context: Any) -> None:
        super().__init__(message, raw_text=raw_text, **context)
        self.raw_text = raw_text


class NoDigitsError(ParseError):
    kind = ErrorKind.NO_DIGITS


class InvalidIntegerError(ParseError):
    kind = ErrorKind.INVALID_INTEGER


class OutOfRangeError(ParseError):
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, value: int, *, raw_text: str) -> None:
        super().__init__(f"id outside the catalog: {value}", raw_text=raw_text, value=value)
        self.value = value


def truncate_diagnostic(text: str, limit: int = MAX_DIAGNOSTIC_CHARS) -> str:
    """Shorten a diagnostic line for console output."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
