"""Tests for amount parsing and money coercion."""

from decimal import Decimal

import pytest

from agencybooks.utils.amount_parser import parse_amount, round_money, to_money


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("₹1,234.56", Decimal("1234.56")),
        ("-50", Decimal("-50")),
        ("(123.45)", Decimal("-123.45")),
        ("  $7 ", Decimal("7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "  ", "abc", "1.2.3", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_round_money_is_half_up():
    assert round_money(Decimal("0.125")) == Decimal("0.13")
    assert round_money(Decimal("2.5")) == Decimal("2.50")


def test_to_money_coerces_inputs():
    assert to_money(None) == Decimal("0.00")
    assert to_money("  ") == Decimal("0.00")
    assert to_money(None, default=Decimal("5")) == Decimal("5.00")
    assert to_money(200) == Decimal("200.00")
    assert to_money(0.1) == Decimal("0.10")
    assert to_money(Decimal("1.005")) == Decimal("1.01")
    assert to_money("1,000") == Decimal("1000.00")


@pytest.mark.parametrize("value", [True, Decimal("NaN"), object(), "twelve"])
def test_to_money_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_money(value)
