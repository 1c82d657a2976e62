"""
Transaction status classification.

The provider reports status as free text ("SUCCESS", "QUEUED",
"Failed", ...). Its full vocabulary is not documented, so every
matching rule lives here and nowhere else.

Rules are case-insensitive substring checks, evaluated in order:
    completed | success          -> COMPLETED
    failed                       -> FAILED
    cancelled                    -> CANCELLED
    pending | queued | processing -> PENDING
    anything else / missing      -> UNKNOWN
"""

from typing import Any, Dict, Optional, Tuple

from stk_gateway.domain.entities import TransactionStatus

_RULES: Tuple[Tuple[Tuple[str, ...], TransactionStatus], ...] = (
    (("completed", "success"), TransactionStatus.COMPLETED),
    (("failed",), TransactionStatus.FAILED),
    (("cancelled",), TransactionStatus.CANCELLED),
    (("pending", "queued", "processing"), TransactionStatus.PENDING),
)


def classify_status(raw: Any) -> TransactionStatus:
    """Map a provider status string to a TransactionStatus."""
    if not isinstance(raw, str):
        return TransactionStatus.UNKNOWN

    text = raw.lower()
    for needles, status in _RULES:
        if any(needle in text for needle in needles):
            return status

    return TransactionStatus.UNKNOWN


def extract_status(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """Pull the raw status text out of a provider payload."""
    if not isinstance(payload, dict):
        return None
    status = payload.get("status")
    return status if isinstance(status, str) else None
