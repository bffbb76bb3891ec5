"""
tests/test_coercion.py

Pytest unit tests for the shared value coercion rules.
"""

from __future__ import annotations

import math

import pytest

from ingestion.coercion import is_blank, is_falsy, parse_number, to_display_string, to_number


class TestParseNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", 0),
            ("+5", 5),
            ("5.", 5.0),
            ("-2.5e-1", -0.25),
            ("0b101", 5),
            ("0o17", 15),
            ("  12  ", 12),
        ],
    )
    def test_numeric_literals(self, text: str, expected: float) -> None:
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "-0x10", "1e", "inf"])
    def test_non_numeric_returns_none(self, text: str) -> None:
        assert parse_number(text) is None

    @pytest.mark.parametrize("text", ["\u0661\u0662\u0663", "\uff11\uff12", "1.\u0665", "2e\u0663"])
    def test_non_ascii_digits_are_not_numeric(self, text: str) -> None:
        assert parse_number(text) is None


class TestToNumber:
    """Parse-or-default-to-zero rule used wherever a number is required."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (10, 10),
            (2.5, 2.5),
            ("7", 7),
            ("abc", 0),
            ("", 0),
            (None, 0),
            (True, 1),
            (False, 0),
        ],
    )
    def test_coercion(self, value: object, expected: float) -> None:
        assert to_number(value) == expected  # type: ignore[arg-type]

    def test_nan_defaults_to_zero(self) -> None:
        assert to_number(math.nan) == 0


class TestToDisplayString:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("East", "East"),
            (42, "42"),
            (4.0, "4"),
            (4.25, "4.25"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            ("", ""),
            (math.inf, "Infinity"),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert to_display_string(value) == expected  # type: ignore[arg-type]


class TestBlankAndFalsy:
    def test_blank_values(self) -> None:
        assert is_blank(None)
        assert is_blank("")
        assert not is_blank(0)
        assert not is_blank(False)

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False, math.nan])
    def test_falsy_values(self, value: object) -> None:
        assert is_falsy(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["0", "x", 1, -1.5, True])
    def test_truthy_values(self, value: object) -> None:
        assert not is_falsy(value)  # type: ignore[arg-type]
