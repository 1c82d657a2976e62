"""Charge entities representing one STK push attempt and its outcome."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, NewType, Optional

# Canonical 254[17]XXXXXXXX subscriber number. Only normalize_phone builds one.
NormalizedPhone = NewType("NormalizedPhone", str)


class TransactionStatus(str, Enum):
    """Payment status as classified from the provider's free-text field."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @property
    def is_terminal(self) -> bool:
        return self in (
            TransactionStatus.COMPLETED,
            TransactionStatus.FAILED,
            TransactionStatus.CANCELLED,
        )


class PollState(str, Enum):
    """Lifecycle of a submitted charge while its status is watched."""

    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    ABANDONED = "abandoned"  # caller went away before resolution


@dataclass(frozen=True)
class ChargePayload:
    """
    Body sent to the provider to start an STK push.

    Attributes:
        phone_number: Normalized subscriber number
        amount: Amount in KES
        provider: Provider identifier, e.g. "m-pesa"
        channel_id: Merchant channel receiving the funds
        external_reference: Merchant-side reference for reconciliation
        customer_name: Name shown on the provider dashboard
        callback_url: Optional URL the provider notifies on completion
    """

    phone_number: NormalizedPhone
    amount: float
    provider: str
    channel_id: str
    external_reference: str
    customer_name: str
    callback_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body the provider expects."""
        amount: float | int = self.amount
        if float(amount).is_integer():
            amount = int(amount)

        body: Dict[str, Any] = {
            "phone_number": self.phone_number,
            "amount": amount,
            "provider": self.provider,
            "channel_id": self.channel_id,
            "external_reference": self.external_reference,
            "customer_name": self.customer_name,
        }
        if self.callback_url:
            body["callback_url"] = self.callback_url
        return body


@dataclass
class PollOutcome:
    """
    Result of submitting a charge and watching it resolve.

    A TIMED_OUT outcome is not an error: the charge may still complete
    after the gateway stops watching it.
    """

    reference: str
    state: PollState
    status: TransactionStatus = TransactionStatus.UNKNOWN
    raw_status: Optional[str] = None
    raw_details: Optional[Dict[str, Any]] = None
    polls: int = 0
    elapsed_seconds: float = 0.0

    @property
    def timed_out(self) -> bool:
        return self.state == PollState.TIMED_OUT

    @property
    def verified(self) -> bool:
        """True when the provider reported a terminal status."""
        return self.state in (PollState.COMPLETED, PollState.FAILED)

    @property
    def succeeded(self) -> bool:
        return self.state == PollState.COMPLETED

    def to_dict(self) -> dict:
        return {
            "reference": self.reference,
            "state": self.state.value,
            "status": self.status.value,
            "raw_status": self.raw_status,
            "polls": self.polls,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
        }
