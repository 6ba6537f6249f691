from decimal import Decimal
from typing import Optional
from libs.result import Error
from src.app import errors


def validate_offer(price_per_1k: Decimal, min_amount: int, max_amount: int) -> Optional[Error]:
    """Check an offer against the seller table constraints; None when valid"""
    if price_per_1k is None or price_per_1k <= 0:
        return Error(code=errors.INVALID_OFFER, message="price_per_1k must be greater than 0")
    if min_amount <= 0:
        return Error(code=errors.INVALID_OFFER, message="min_amount must be greater than 0")
    if max_amount < min_amount:
        return Error(
            code=errors.INVALID_OFFER,
            message="max_amount must be greater than or equal to min_amount",
        )
    return None
