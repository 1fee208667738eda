"""Unit tests for response parsing and prompt construction."""

import pytest

from intent_bench.exceptions import (
    ErrorKind,
    InvalidIntegerError,
    NoDigitsError,
    OutOfRangeError,
    ParseError,
    truncate_diagnostic,
)
from intent_bench.parser import parse_service_id
from intent_bench.prompts import build_system_prompt, build_user_prompt


class TestParseServiceId:
    """Tests for parse_service_id."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("4", 4),
            (" 16 \n", 16),
            ("1", 1),
            ("The answer is 4.", 4),
            ("ID: 12", 12),
            ("'7'", 7),
            ("03", 3),
        ],
    )
    def test_valid_ids(self, raw: str, expected: int) -> None:
        """Any 1-3 digit run in range is accepted, surrounding prose ignored."""
        assert parse_service_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "Desculpe, não sei", "four"])
    def test_no_digits(self, raw: str) -> None:
        """Text without a digit run fails with NoDigitsError."""
        with pytest.raises(NoDigitsError) as exc_info:
            parse_service_id(raw)
        assert exc_info.value.kind is ErrorKind.NO_DIGITS
        assert exc_info.value.raw_text == raw

    @pytest.mark.parametrize("raw", ["\u0664", "\uff14", "ID \u0661\u0662"])
    def test_non_ascii_digits_rejected(self, raw: str) -> None:
        """Only ASCII digits count as an id."""
        with pytest.raises(NoDigitsError):
            parse_service_id(raw)

    def test_long_number_is_not_an_id(self) -> None:
        """A four-digit number is not a 1-3 digit run."""
        with pytest.raises(NoDigitsError):
            parse_service_id("1234")

    @pytest.mark.parametrize("raw,value", [("0", 0), ("17", 17), ("999", 999)])
    def test_out_of_range(self, raw: str, value: int) -> None:
        """Values outside 1..16 are rejected, not clamped."""
        with pytest.raises(OutOfRangeError) as exc_info:
            parse_service_id(raw)
        assert exc_info.value.value == value
        assert not exc_info.value.fatal

    def test_custom_bounds(self) -> None:
        """Bounds can follow a different catalog."""
        assert parse_service_id("20", max_id=20) == 20
        with pytest.raises(OutOfRangeError):
            parse_service_id("1", min_id=2, max_id=5)

    def test_error_kinds_share_parse_base(self) -> None:
        """All parse failures are ParseError subclasses."""
        assert issubclass(NoDigitsError, ParseError)
        assert issubclass(InvalidIntegerError, ParseError)
        assert issubclass(OutOfRangeError, ParseError)


class TestPrompts:
    """Tests for the prompt builders."""

    def test_system_prompt_lists_catalog_in_order(self, catalog) -> None:
        """Every service appears as 'id: name' in declaration order."""
        prompt = build_system_prompt(catalog)
        positions = [prompt.index(f"{s.id}: {s.name}") for s in catalog]
        assert positions == sorted(positions)
        assert "Temperature = 0" in prompt
        assert "NEVER invent" in prompt

    def test_system_prompt_is_deterministic(self, catalog) -> None:
        """Two builds produce identical text."""
        assert build_system_prompt(catalog) == build_system_prompt(catalog)

    def test_system_prompt_example_is_first_service(self, catalog) -> None:
        """The output example uses the first catalog id."""
        prompt = build_system_prompt(catalog)
        assert "(e.g.: '1')" in prompt

    def test_user_prompt_quotes_intent(self) -> None:
        """The intent is quoted and the id constraint repeated."""
        prompt = build_user_prompt('onde está meu "cartão"?')
        assert prompt.startswith('User input: "onde está meu \\"cartão\\"?"')
        assert prompt.endswith("Return only the ID (an integer).")


class TestTruncateDiagnostic:
    """Tests for diagnostic truncation."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_diagnostic("status 500: boom") == "status 500: boom"

    def test_long_text_truncated(self) -> None:
        """Long diagnostics keep 180 characters plus an ellipsis."""
        text = "x" * 500
        assert truncate_diagnostic(text) == "x" * 180 + "..."
