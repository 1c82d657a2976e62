"""Domain Entities - Core business objects."""

from .charge import (
    ChargePayload,
    NormalizedPhone,
    PollOutcome,
    PollState,
    TransactionStatus,
)

__all__ = [
    "ChargePayload",
    "NormalizedPhone",
    "PollOutcome",
    "PollState",
    "TransactionStatus",
]
