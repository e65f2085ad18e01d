"""
Unit tests for the money parser.

Covers separator disambiguation, grouping detection and the NaN
sentinel for unparseable input.
"""

import math

import pytest

from charters.proposal.money import is_valid_amount, parse_money


class TestParseMoneyDecimalSeparator:
    """Tests for inferring the decimal separator."""

    def test_dot_decimal(self):
        """A lone dot followed by two digits is a decimal point."""
        assert parse_money("1200.50") == 1200.50

    def test_comma_decimal(self):
        """A lone comma is always a decimal separator."""
        assert parse_money("1200,50") == 1200.50

    def test_comma_last_is_decimal(self):
        """With both separators, a trailing comma is the decimal point."""
        assert parse_money("1.200,50") == 1200.50

    def test_dot_last_is_decimal(self):
        """With both separators, a trailing dot is the decimal point."""
        assert parse_money("1,200.50") == 1200.50

    def test_conventions_agree(self):
        """Both conventions yield the same amount."""
        assert parse_money("1200.50") == parse_money("1.200,50") == 1200.50
        assert parse_money("1,234,567.89") == parse_money("1.234.567,89") == 1234567.89


class TestParseMoneyGrouping:
    """Tests for dot-as-thousands detection."""

    def test_single_group(self):
        """'2.000' is two thousand, not two."""
        assert parse_money("2.000") == 2000

    def test_multiple_groups(self):
        """Every dot is grouping when all groups have three digits."""
        assert parse_money("1.250.000") == 1250000

    def test_negative_grouping(self):
        """A leading minus does not defeat grouping detection."""
        assert parse_money("-2.000") == -2000

    def test_two_decimals_not_grouping(self):
        """'2.00' fails the three-digit group pattern and stays 2.0."""
        assert parse_money("2.00") == 2.0

    def test_four_leading_digits_not_grouping(self):
        """More than three leading digits means the dot is decimal."""
        assert parse_money("1234.567") == 1234.567


class TestParseMoneyCleaning:
    """Tests for stripping symbols and whitespace."""

    def test_currency_symbols_stripped(self):
        """Currency symbols and codes are ignored."""
        assert parse_money("€ 1.500,00") == 1500
        assert parse_money("USD 1,500.00") == 1500

    def test_whitespace_stripped(self):
        """Whitespace between digits is removed."""
        assert parse_money(" 12 500 ") == 12500

    def test_plain_integer(self):
        """No separators parses the digits directly."""
        assert parse_money("1500") == 1500


class TestParseMoneyInvalid:
    """Tests for the NaN sentinel."""

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "-", "1.2.3", "1,2,3", None])
    def test_unparseable_returns_nan(self, raw):
        """Empty or garbage input yields NaN."""
        assert math.isnan(parse_money(raw))


class TestIsValidAmount:
    """Tests for the price usability check."""

    def test_positive_is_valid(self):
        assert is_valid_amount(parse_money("0,01")) is True

    def test_zero_is_invalid(self):
        """Zero is not a usable price."""
        assert is_valid_amount(parse_money("0")) is False

    def test_negative_is_invalid(self):
        assert is_valid_amount(parse_money("-100")) is False

    def test_nan_is_invalid(self):
        assert is_valid_amount(parse_money("abc")) is False
