"""
18-decimal fixed-point arithmetic for vesting fractions.

A fraction f is held as an integer number of "atomics", f * 10**18.
Every product or ratio rounds toward zero, so a partial payout never
exceeds what the exact rational would give.
"""
from __future__ import annotations

from decimal import Decimal

DECIMAL_PLACES = 18
FRACTIONAL = 10**DECIMAL_PLACES
ONE = FRACTIONAL


def decimal_places(value: Decimal) -> int:
    """Number of digits after the point in the normalized value."""
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        raise ValueError(f"Non-finite decimal: {value}")
    return max(0, -exponent)


def to_atomics(value: Decimal) -> int:
    """
    Convert a decimal fraction to atomics.

    Raises:
        ValueError: If the value is not finite or has more than 18 places
    """
    if not value.is_finite():
        raise ValueError(f"Non-finite decimal: {value}")
    if decimal_places(value) > DECIMAL_PLACES:
        raise ValueError(
            f"{value} has more than {DECIMAL_PLACES} decimal places"
        )
    return int(value.scaleb(DECIMAL_PLACES))


def from_atomics(atomics: int) -> Decimal:
    return Decimal(atomics).scaleb(-DECIMAL_PLACES)


def mul_floor(amount: int, atomics: int) -> int:
    """amount * fraction, rounded down."""
    return amount * atomics // FRACTIONAL


def ratio_atomics(numerator: int, denominator: int) -> int:
    """numerator / denominator as atomics, rounded down."""
    if denominator == 0:
        raise ZeroDivisionError("ratio with zero denominator")
    return numerator * FRACTIONAL // denominator
