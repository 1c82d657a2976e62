"""
Payment Rules for the STK Gateway
"""

from .amount import MIN_AMOUNT_KES, validate_amount
from .phone import normalize_phone
from .settings import (
    PollingConfig,
    PollingSettings,
    get_polling_settings,
)
from .status import classify_status, extract_status

__all__ = [
    # Settings
    "PollingConfig",
    "PollingSettings",
    "get_polling_settings",
    # Phone
    "normalize_phone",
    # Amount
    "MIN_AMOUNT_KES",
    "validate_amount",
    # Status
    "classify_status",
    "extract_status",
]
