"""Health check Pydantic schema."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthResponseSchema(BaseModel):
    """Schema for GET /api/health response."""

    success: bool = Field(..., description="Whether PayHero is reachable")
    message: str
    timestamp: str = Field(..., description="ISO 8601 UTC timestamp")
    version: str
    account_id: Optional[str] = None
    provider: Optional[str] = None
    balance: Optional[Dict[str, Any]] = Field(
        None,
        description="Service wallet as reported by PayHero",
    )
    error: Optional[str] = Field(
        None,
        description="Diagnostic message when the probe failed",
    )
