"""Exact decimal helpers for money amounts and ratios"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal(0)


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal; floats go through their shortest repr so 0.1 stays 0.1"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Number, places: int = 0) -> Decimal:
    """Round like a cashier: .5 always goes away from zero"""
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def whole_percent(ratio: Number) -> int:
    """Ratio as a whole percentage, rounded half up"""
    return int(round_half_up(to_decimal(ratio) * 100))
