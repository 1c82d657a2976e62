"""Charge-related Pydantic schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChargeRequestSchema(BaseModel):
    """
    Schema for POST /api/charge request body.

    Fields are deliberately loose: phone and amount rules are enforced
    by the charge service so that failures come back as 400s with the
    exact accepted formats.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "phone_number": "0712345678",
                    "amount": 100,
                    "external_reference": "INV-1001",
                    "customer_name": "Jane Wanjiku",
                }
            ]
        }
    )
    phone_number: Optional[str] = Field(
        None,
        description="Subscriber phone: 07XXXXXXXX, 01XXXXXXXX, 2547XXXXXXXX or 2541XXXXXXXX",
        examples=["0712345678"],
    )
    # Any: booleans must reach validate_amount unchanged
    amount: Optional[Any] = Field(
        None,
        description="Amount in KES, at least 1 (number or numeric string)",
        examples=[100],
    )
    external_reference: Optional[str] = Field(
        None,
        max_length=255,
        description="Merchant reference; generated when omitted",
        examples=["INV-1001"],
    )
    customer_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Customer name shown to the provider",
        examples=["Jane Wanjiku"],
    )


class ChargeDataSchema(BaseModel):
    """Schema for the data block of a charge response."""

    reference: str = Field(
        ...,
        description="Provider reference for this charge attempt",
        examples=["E8UWT7CLUW"],
    )
    status: Optional[str] = Field(
        None,
        description="Provider status text; present only when the charge resolved",
        examples=["SUCCESS"],
    )
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Last status payload seen from the provider",
    )


class ChargeResponseSchema(BaseModel):
    """Schema for POST /api/charge response body."""

    success: bool = Field(
        ...,
        description="Whether the payment completed",
    )
    verified: bool = Field(
        ...,
        description="Whether the provider reported a final status",
    )
    message: str = Field(
        ...,
        description="Human-readable outcome",
    )
    data: ChargeDataSchema

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "verified": True,
                    "message": "Payment completed successfully.",
                    "data": {
                        "reference": "E8UWT7CLUW",
                        "status": "SUCCESS",
                        "details": {
                            "status": "SUCCESS",
                            "reference": "E8UWT7CLUW",
                            "provider_reference": "SAE3YULR0Y",
                        },
                    },
                },
                {
                    "success": False,
                    "verified": False,
                    "message": "Payment pending. Please check manually after a few minutes.",
                    "data": {
                        "reference": "E8UWT7CLUW",
                        "details": {"status": "QUEUED"},
                    },
                },
            ]
        }
    )
