from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from shopcart.constants import DISCOUNT_MAX, DISCOUNT_MIN, MAX_NUMBER_EXPONENT


@dataclass(frozen=True)
class ParsedOk:
    value: Any


@dataclass(frozen=True)
class ParsedInvalid:
    reason: str


ParseResult = Union[ParsedOk, ParsedInvalid]


def to_decimal(raw: Any) -> Optional[Decimal]:
    """Coerce a number or numeric string to a finite Decimal, or None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        d = raw
    elif isinstance(raw, int):
        d = Decimal(raw)
    elif isinstance(raw, float):
        d = Decimal(str(raw))
    elif isinstance(raw, str):
        try:
            d = Decimal(raw.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not d.is_finite() or d.adjusted() > MAX_NUMBER_EXPONENT:
        return None
    return d


def parse_quantity(raw: Any) -> ParseResult:
    """
    Parse a user-supplied quantity.

    Accepts ints, numeric strings ("3", " 2 ", "2.5"), floats and Decimals
    holding a value >= 1. Whole values come back as ``int``, others as
    ``Decimal``. Everything else is invalid.
    """
    d = to_decimal(raw)
    if d is None:
        return ParsedInvalid(f"not a number: {raw!r}")
    if d < 1:
        return ParsedInvalid(f"quantity must be >= 1: {raw!r}")
    if d == d.to_integral_value():
        return ParsedOk(int(d))
    return ParsedOk(d)


def parse_discount(raw: Optional[str]) -> ParseResult:
    """
    Parse the discount percentage text.

    Empty input is valid and yields ``ParsedOk(None)`` (no discount).
    """
    text = "" if raw is None else str(raw)
    if text == "":
        return ParsedOk(None)
    d = to_decimal(text)
    if d is None:
        return ParsedInvalid(f"not a number: {text!r}")
    if d < DISCOUNT_MIN or d > DISCOUNT_MAX:
        return ParsedInvalid(f"out of range: {text!r}")
    return ParsedOk(d)
