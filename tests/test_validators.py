"""
Tests for the quantity/discount parsing boundary
"""
from decimal import Decimal

import pytest

from shopcart.utils.validators import (
    ParsedInvalid,
    ParsedOk,
    parse_discount,
    parse_quantity,
    to_decimal,
)


@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    (" 2 ", 2),
    ("4.0", 4),
    (7, 7),
    (Decimal("5"), 5),
    (2.0, 2),
    ("1e30", 10**30),
])
def test_parse_quantity_accepts_whole_numbers(raw, expected):
    assert parse_quantity(raw) == ParsedOk(expected)


@pytest.mark.parametrize("raw, expected", [
    ("2.5", Decimal("2.5")),
    (1.25, Decimal("1.25")),
    (Decimal("3.75"), Decimal("3.75")),
])
def test_parse_quantity_accepts_fractions(raw, expected):
    result = parse_quantity(raw)
    assert result == ParsedOk(expected)
    assert isinstance(result.value, Decimal)


@pytest.mark.parametrize("raw", [
    "0", "-1", 0, -3, "", "abc", "0.5", None, True, "NaN", "Infinity", [1],
    "1e31", "1e999999999",
])
def test_parse_quantity_rejects(raw):
    assert isinstance(parse_quantity(raw), ParsedInvalid)


def test_parse_quantity_value_is_int():
    result = parse_quantity("4.0")
    assert type(result.value) is int


def test_to_decimal_bounds_exponent():
    assert to_decimal("9" * 31) == Decimal("9" * 31)
    assert to_decimal("9" * 32) is None
    assert to_decimal("1e-999999999") == Decimal("1e-999999999")


def test_parse_discount_empty_is_no_discount():
    assert parse_discount("") == ParsedOk(None)
    assert parse_discount(None) == ParsedOk(None)


@pytest.mark.parametrize("raw, expected", [
    ("0", Decimal("0")),
    ("10", Decimal("10")),
    ("12.5", Decimal("12.5")),
    ("100", Decimal("100")),
    (" 15 ", Decimal("15")),
])
def test_parse_discount_in_range(raw, expected):
    assert parse_discount(raw) == ParsedOk(expected)


@pytest.mark.parametrize("raw", ["150", "-1", "100.01", "abc", " ", "10abc", "nan", "inf", "1e999999999"])
def test_parse_discount_invalid(raw):
    assert isinstance(parse_discount(raw), ParsedInvalid)
