"""Tests for amount parsing utilities."""

import pytest

from contabil.utils.amount_parser import coerce_amount, coerce_monthly_values, parse_amount


def test_parse_brazilian_amounts():
    """Test parsing Brazilian formatted amounts."""
    assert parse_amount("1.234,56") == 1234.56
    assert parse_amount("1234,56") == 1234.56
    assert parse_amount("R$ 1.234,56") == 1234.56
    assert parse_amount("-1.234,56") == -1234.56
    assert parse_amount("1.234.567,89") == 1234567.89


def test_parse_thousands_without_decimals():
    """A single dot followed by three digits is a thousands separator."""
    assert parse_amount("1.500") == 1500
    assert parse_amount("1.234.567") == 1234567


def test_parse_plain_decimal():
    assert parse_amount("1234.56") == 1234.56
    assert parse_amount("0.5") == 0.5


def test_parse_parentheses_negative():
    """Test parsing negative amounts in parentheses."""
    assert parse_amount("(1.234,56)") == -1234.56


@pytest.mark.parametrize("value", ["", "   ", None, "abc", "inf"])
def test_parse_amount_invalid(value):
    with pytest.raises(ValueError):
        parse_amount(value)


@pytest.mark.parametrize("value", [None, "", "-", "#N/A", "#REF!", "abc", float("nan"), True])
def test_coerce_amount_malformed_is_zero(value):
    """Malformed cells count as zero."""
    assert coerce_amount(value) == 0.0


def test_coerce_amount_numbers():
    assert coerce_amount(12) == 12.0
    assert coerce_amount(-3.5) == -3.5
    assert coerce_amount(" 1.000,00 ") == 1000.0


def test_coerce_monthly_values_pads_and_truncates():
    """Vectors always hold twelve months."""
    assert coerce_monthly_values([1, 2]) == (1.0, 2.0) + (0.0,) * 10
    assert coerce_monthly_values(list(range(14))) == tuple(float(i) for i in range(12))
    assert coerce_monthly_values(None) == (0.0,) * 12
