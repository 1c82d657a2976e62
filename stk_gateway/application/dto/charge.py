"""Data transfer objects for charge operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from stk_gateway.domain.entities import PollOutcome, PollState

MESSAGE_COMPLETED = "Payment completed successfully."
MESSAGE_FAILED = "Payment failed or cancelled."
MESSAGE_PENDING = "Payment pending. Please check manually after a few minutes."


@dataclass(frozen=True)
class ChargeRequest:
    """Input data for charging a subscriber. Fields are raw and untrusted."""

    phone_number: Any
    amount: Any
    external_reference: Optional[str] = None
    customer_name: Optional[str] = None

    def missing_fields(self) -> List[str]:
        missing = []

        if self.phone_number is None or self.phone_number == "":
            missing.append("phone_number")

        if self.amount is None or self.amount == "":
            missing.append("amount")

        return missing


@dataclass(frozen=True)
class ChargeResult:
    """Business result of a charge; returned with HTTP 200 in every case."""

    success: bool
    verified: bool
    message: str
    reference: str
    state: str
    status: Optional[str]
    details: Optional[Dict[str, Any]]

    @classmethod
    def from_outcome(cls, outcome: PollOutcome) -> "ChargeResult":
        if outcome.state == PollState.COMPLETED:
            message = MESSAGE_COMPLETED
        elif outcome.state == PollState.FAILED:
            message = MESSAGE_FAILED
        else:
            message = MESSAGE_PENDING

        return cls(
            success=outcome.succeeded,
            verified=outcome.verified,
            message=message,
            reference=outcome.reference,
            state=outcome.state.value,
            status=outcome.raw_status if outcome.verified else None,
            details=outcome.raw_details,
        )


@dataclass(frozen=True)
class HealthResult:
    """Provider reachability report."""

    success: bool
    message: str
    timestamp: str
    account_id: Optional[str] = None
    provider: Optional[str] = None
    balance: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
