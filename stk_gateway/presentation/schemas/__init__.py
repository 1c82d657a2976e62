"""Pydantic schemas for API request/response validation."""

from .charge import ChargeRequestSchema, ChargeResponseSchema, ChargeDataSchema
from .error import ErrorResponseSchema
from .health import HealthResponseSchema
from .status import TransactionStatusResponseSchema

__all__ = [
    "ChargeRequestSchema",
    "ChargeResponseSchema",
    "ChargeDataSchema",
    "ErrorResponseSchema",
    "HealthResponseSchema",
    "TransactionStatusResponseSchema",
]
