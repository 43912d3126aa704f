from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0")

# One cent of slack for aggregate comparisons.
TOLERANCE = Decimal("0.01")

# Adjustments smaller than this are treated as no drift at all.
ADJUSTMENT_EPSILON = Decimal("0.001")

# Keeps every intermediate product well inside the default 28-digit context.
MAX_AMOUNT = Decimal("1e15")

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert a monetary input to Decimal without rounding.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")`` rather than its
    binary expansion.
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot use {value!r} as an amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Cannot parse amount {value!r}") from exc
    else:
        raise ValueError(f"Cannot convert {type(value).__name__} to an amount")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def round_money(value: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round to whole cents; ties go away from zero unless another mode is passed."""
    return value.quantize(CENT, rounding=rounding)


def within_tolerance(actual: Decimal, expected: Decimal, tolerance: Decimal = TOLERANCE) -> bool:
    return abs(actual - expected) <= tolerance
