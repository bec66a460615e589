"""Tests for amount parsing."""

import pytest
from decimal import Decimal

from simplebank.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("100", Decimal("100")),
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        (" 0.5 ", Decimal("0.5")),
        ("-50", Decimal("-50")),
        ("0", Decimal("0")),
    ],
)
def test_parse_amount(text, expected):
    """Test accepted amount formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12.3.4", "NaN", "Infinity", "1.005"])
def test_parse_amount_invalid(text):
    """Test rejected amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(text)
