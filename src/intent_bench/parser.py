"""Extract a catalog service id from free-text oracle output."""

import re

from intent_bench.exceptions import InvalidIntegerError, NoDigitsError, OutOfRangeError

# First run of 1-3 ASCII digits not glued to a longer number.
_ID_PATTERN = re.compile(r"(?<!\d)(\d{1,3})(?!\d)", re.ASCII)

MIN_SERVICE_ID = 1
MAX_SERVICE_ID = 16


def parse_service_id(
    raw_text: str,
    *,
    min_id: int = MIN_SERVICE_ID,
    max_id: int = MAX_SERVICE_ID,
) -> int:
    """
    Parse the service id out of raw oracle text.

    Surrounding prose is tolerated ("The answer is 4." -> 4); the first
    digit run of one to three digits wins. Values outside
    ``min_id..max_id`` are rejected, never clamped.

    Raises:
        NoDigitsError: No 1-3 digit run in the text.
        InvalidIntegerError: The digit run does not convert to an integer.
        OutOfRangeError: The integer is outside the catalog range.
    """
    text = raw_text.strip()
    match = _ID_PATTERN.search(text)
    if match is None or not match.group(1):
        raise NoDigitsError(f"response does not contain an integer id: {raw_text!r}", raw_text=raw_text)

    digits = match.group(1)
    try:
        value = int(digits)
    except ValueError as e:
        raise InvalidIntegerError(f"invalid id {digits!r}: {e}", raw_text=raw_text) from e

    if value < min_id or value > max_id:
        raise OutOfRangeError(value, raw_text=raw_text)
    return value
