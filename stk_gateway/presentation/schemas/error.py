"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    success: bool = Field(
        False,
        description="Always false for errors",
    )
    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["amount must be at least 1 KES"],
    )
    code: str = Field(
        ...,
        description="Error code",
        examples=["INVALID_AMOUNT"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": False,
                    "error": "amount must be at least 1 KES",
                    "code": "INVALID_AMOUNT",
                    "request_id": "abc123",
                }
            ]
        }
    }
