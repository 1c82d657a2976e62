"""Transaction status Pydantic schema."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class TransactionStatusResponseSchema(BaseModel):
    """Schema for GET /api/transaction-status/{reference} response."""

    success: bool = Field(True, description="Always true on 200")
    data: Dict[str, Any] = Field(
        ...,
        description="Provider status payload, passed through unchanged",
    )
