"""Decimal helpers shared by the calculator, views and renderer."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
BASIS = Decimal("0.0001")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce None, strings, floats and ints to Decimal; unparseable values become 0."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def money(value: Any) -> Decimal:
    """Round to two decimal places, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def safe_divide(numerator: Any, denominator: Any) -> Decimal:
    """Divide, returning 0 instead of raising when the denominator is 0."""
    denominator = to_decimal(denominator)
    if denominator == 0:
        return ZERO
    return to_decimal(numerator) / denominator


def percent_of(numerator: Any, denominator: Any) -> Decimal:
    """numerator / denominator * 100, or 0 unless the denominator is positive."""
    denominator = to_decimal(denominator)
    if denominator <= 0:
        return ZERO
    return to_decimal(numerator) / denominator * HUNDRED


def ratio_of(numerator: Any, denominator: Any) -> Decimal:
    """numerator / denominator, or 0 unless the denominator is positive."""
    denominator = to_decimal(denominator)
    if denominator <= 0:
        return ZERO
    return to_decimal(numerator) / denominator
