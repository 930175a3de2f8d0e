"""Tests for custom-flow parsing."""

from __future__ import annotations

import pytest

from pomoctl.domain.errors import ParseError
from pomoctl.domain.flow import DEFAULT_FLOW, format_flow, parse_flow
from pomoctl.domain.session import Duration


class TestParseFlow:
    def test_default_flow(self) -> None:
        assert parse_flow(DEFAULT_FLOW) == (
            Duration.work(25),
            Duration.rest(5),
            Duration.work(25),
            Duration.rest(5),
            Duration.work(25),
            Duration.rest(30),
        )

    def test_single_token(self) -> None:
        assert parse_flow("50w") == (Duration.work(50),)

    def test_surrounding_and_repeated_whitespace(self) -> None:
        assert parse_flow("  25w \t 5b\n") == (Duration.work(25), Duration.rest(5))

    def test_multi_digit_counts(self) -> None:
        assert parse_flow("120w 15b") == (Duration.work(120), Duration.rest(15))

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "25x",
            "25",
            "w25",
            "25W",
            "25w5b",
            "25w, 5b",
            "-5w",
            "2.5w",
            "1" * 5000 + "w",
            "25w " + "9" * 7 + "b",
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_flow(text)
        assert exc_info.value.text == text
        assert exc_info.value.code == "INVALID_FLOW"

    @pytest.mark.parametrize("text", ["0w", "25w 0b", "00w"])
    def test_rejects_zero_length(self, text: str) -> None:
        with pytest.raises(ParseError, match="must be positive"):
            parse_flow(text)

    def test_rejects_oversized_length(self) -> None:
        with pytest.raises(ParseError, match="too large"):
            parse_flow("1" * 5000 + "w")

    def test_leading_zeros_do_not_count_toward_length(self) -> None:
        assert parse_flow("0" * 5000 + "25w") == (Duration.work(25),)
        assert parse_flow("999999w") == (Duration.work(999999),)

    def test_empty_reason(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_flow("")
        assert "empty" in exc_info.value.reason
        assert "25w 5b 25w 5b 25w 30b" in exc_info.value.reason


class TestFormatFlow:
    def test_canonical_text(self) -> None:
        assert format_flow(parse_flow("  25w   5b ")) == "25w 5b"

    def test_default_flow_is_canonical(self) -> None:
        assert format_flow(parse_flow(DEFAULT_FLOW)) == DEFAULT_FLOW
