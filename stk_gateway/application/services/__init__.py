"""Application services (use cases)."""

from .charge_service import ChargeService
from .payment_poller import PaymentPoller, generate_external_reference

__all__ = [
    "ChargeService",
    "PaymentPoller",
    "generate_external_reference",
]
