"""Charge amount validation (KES, whole or fractional)."""

import math
from decimal import Decimal, InvalidOperation

from stk_gateway.domain.exceptions import InvalidAmountException

MIN_AMOUNT_KES = 1


def validate_amount(raw: object) -> float:
    """
    Parse and validate a charge amount.

    Accepts ints, floats, Decimals and numeric strings. Booleans,
    NaN/infinity and anything below MIN_AMOUNT_KES are rejected.

    Raises:
        InvalidAmountException: If the amount is unusable
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidAmountException(raw)

    try:
        if isinstance(raw, (int, float, Decimal)):
            value = float(raw)
        elif isinstance(raw, str):
            value = float(Decimal(raw.strip()))
        else:
            raise InvalidAmountException(raw)
    except (InvalidOperation, ValueError, OverflowError):
        raise InvalidAmountException(raw)

    if not math.isfinite(value) or value < MIN_AMOUNT_KES:
        raise InvalidAmountException(raw)

    return value
