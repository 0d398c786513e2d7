"""
Domain: Monetary amounts.

All money in the sale workflow is a `Decimal` quantized to two places with
ROUND_HALF_UP. Values arriving from form inputs or JSON are converted through
`str()` first so that floats like 0.1 do not leak binary noise into totals.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest amount accepted anywhere in the workflow. Keeps every product of a
# price and quantity well inside the default 28-digit decimal context.
MAX_AMOUNT = Decimal("999999999999.99")


def to_money(value: Decimal) -> Decimal:
    """Quantize a Decimal to cents (ROUND_HALF_UP)."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a user or API supplied number into a Decimal.

    Returns None for blank input (None or whitespace-only strings).

    Raises:
        ValueError: If the value is not a finite number.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip()
        if text == "":
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None

    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def parse_money(value: Any) -> Optional[Decimal]:
    """
    Parse a money input and round it to cents. Blank input returns None.

    Raises:
        ValueError: If the value is not a finite number or exceeds MAX_AMOUNT.
    """

    number = parse_decimal(value)
    if number is None:
        return None
    if abs(number) > MAX_AMOUNT:
        raise ValueError(f"Amount too large: {value!r}")
    return to_money(number)


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer input. Blank input returns None.

    Fractional values such as "2.5" are rejected rather than truncated.

    Raises:
        ValueError: If the value is not an integer.
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_decimal(value)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValueError(f"Not an integer: {value!r}")
    return int(number)


def money_to_json(value: Decimal) -> float:
    """Serialize money for the inventory API, which expects JSON numbers."""

    return float(to_money(value))


__all__ = [
    "CENT",
    "ZERO",
    "MAX_AMOUNT",
    "to_money",
    "parse_decimal",
    "parse_money",
    "parse_int",
    "money_to_json",
]
