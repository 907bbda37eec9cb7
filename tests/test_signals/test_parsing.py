"""Tests for lenient numeric parsing of raw exchange fields."""

import pytest

from scanner.exceptions import MalformedRecord
from scanner.signals.parsing import parse_float, parse_number


class TestParseNumber:
    """Strict parsing raises MalformedRecord on anything unusable."""

    def test_decimal_string(self) -> None:
        assert parse_number("50000.5") == 50000.5

    def test_negative_and_exponent(self) -> None:
        assert parse_number("-0.0002") == -0.0002
        assert parse_number("1e-5") == 1e-5

    def test_surrounding_whitespace(self) -> None:
        assert parse_number("  42 ") == 42.0

    def test_numeric_types_pass_through(self) -> None:
        assert parse_number(7) == 7.0
        assert parse_number(1.5) == 1.5

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "12abc", "nan", "inf", "-Infinity"])
    def test_unusable_values_raise(self, value) -> None:
        with pytest.raises(MalformedRecord):
            parse_number(value)

    def test_bool_rejected(self) -> None:
        with pytest.raises(MalformedRecord):
            parse_number(True)  # type: ignore[arg-type]

    def test_malformed_record_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_number("x")


class TestParseFloat:
    """Lenient parsing degrades to the default instead of raising."""

    def test_valid_value(self) -> None:
        assert parse_float("3.25") == 3.25

    def test_missing_defaults_to_zero(self) -> None:
        assert parse_float(None) == 0.0

    def test_empty_defaults_to_zero(self) -> None:
        assert parse_float("") == 0.0

    def test_garbage_defaults_to_zero(self) -> None:
        assert parse_float("not-a-number") == 0.0

    def test_custom_default(self) -> None:
        assert parse_float(None, default=123.0) == 123.0
        assert parse_float("bad", default=-1.0) == -1.0

    def test_zero_string_is_not_default(self) -> None:
        assert parse_float("0", default=5.0) == 0.0
