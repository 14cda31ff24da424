"""
Unit tests for the sanitize pipeline.

Run: pytest tests/unit/test_sanitize_service.py -v
"""

import pytest

from models.mapping import SanitizeOperation as Op
from services.sanitize_service import is_falsy, parse_number, sanitize


class TestLiteralOverride:
    """Override short-circuits everything."""

    def test_override_wins(self):
        assert sanitize("abc", [Op.TO_UPPER_CASE], "FIXED") == "FIXED"

    def test_override_replaces_falsy_value(self):
        assert sanitize(0, [], "5") == "5"

    def test_override_is_not_sanitized(self):
        assert sanitize("abc", [Op.TRIM], "  padded  ") == "  padded  "

    def test_blank_override_is_ignored(self):
        assert sanitize(" abc ", [Op.TRIM], "   ") == "abc"


class TestFalsyShortCircuit:
    """Falsy values bypass all operations."""

    def test_zero_total_skips_string_to_number(self):
        assert sanitize(0, [Op.STRING_TO_NUMBER], "") == 0

    def test_zero_skips_number_to_string(self):
        result = sanitize(0, [Op.NUMBER_TO_STRING])

        assert result == 0
        assert isinstance(result, int)

    def test_empty_string_unchanged(self):
        assert sanitize("", [Op.STRING_TO_NUMBER]) == ""

    def test_none_unchanged(self):
        assert sanitize(None, [Op.TRIM]) is None

    def test_false_unchanged(self):
        assert sanitize(False, [Op.NUMBER_TO_STRING]) is False

    def test_empty_list_is_not_falsy(self):
        assert not is_falsy([])
        assert not is_falsy({})

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, float("nan"), ""])
    def test_is_falsy(self, value):
        assert is_falsy(value)

    @pytest.mark.parametrize("value", [" ", "0", 1, -1, 0.1, True, [0]])
    def test_is_truthy(self, value):
        assert not is_falsy(value)


class TestOperations:
    """Operations in order with type preconditions."""

    def test_trim_then_upper(self):
        assert sanitize("  Abc  ", [Op.TRIM, Op.TO_UPPER_CASE], "") == "ABC"

    def test_lower(self):
        assert sanitize("A@B.COM", [Op.TO_LOWER_CASE]) == "a@b.com"

    def test_string_operations_skip_numbers(self):
        assert sanitize(19.5, [Op.TRIM, Op.TO_UPPER_CASE]) == 19.5

    def test_string_to_number(self):
        assert sanitize(" 19.50 ", [Op.STRING_TO_NUMBER]) == 19.5

    def test_string_to_number_integral(self):
        result = sanitize("7", [Op.STRING_TO_NUMBER])

        assert result == 7
        assert isinstance(result, int)

    def test_string_to_number_unparseable_gives_zero(self):
        assert sanitize("abc", [Op.STRING_TO_NUMBER]) == 0

    def test_string_to_number_skips_numbers(self):
        assert sanitize(3.25, [Op.STRING_TO_NUMBER]) == 3.25

    def test_number_to_string(self):
        assert sanitize(19.5, [Op.NUMBER_TO_STRING]) == "19.5"

    def test_number_to_string_integral_float(self):
        assert sanitize(5.0, [Op.NUMBER_TO_STRING]) == "5"

    def test_number_to_string_skips_strings(self):
        assert sanitize("5", [Op.NUMBER_TO_STRING]) == "5"

    def test_number_to_string_skips_booleans(self):
        assert sanitize(True, [Op.NUMBER_TO_STRING]) is True

    def test_order_matters(self):
        """Each operation sees the previous result."""
        assert sanitize(" 12 ", [Op.TRIM, Op.STRING_TO_NUMBER, Op.NUMBER_TO_STRING]) == "12"

    def test_no_operations_returns_value(self):
        value = {"city": "X"}

        assert sanitize(value, []) is value

    def test_accepts_operation_names(self):
        assert sanitize(" x ", ["trim", "toUpperCase"]) == "X"


class TestParseNumber:
    """Tests for parse_number()"""

    @pytest.mark.parametrize("text,expected", [
        ("1", 1),
        ("1.5", 1.5),
        ("-2", -2),
        ("  3  ", 3),
        ("", 0),
        ("1,000", 0),
        ("nan", 0),
        ("inf", 0),
    ])
    def test_parse(self, text, expected):
        assert parse_number(text) == expected
