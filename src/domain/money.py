"""Currency amount helpers

All balances and prices are fixed-point with two decimal places.
"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Quantize a value to currency precision (2 decimals, half-up)"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
