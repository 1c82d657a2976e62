"""Data Transfer Objects for application layer."""

from .charge import ChargeRequest, ChargeResult, HealthResult

__all__ = [
    "ChargeRequest",
    "ChargeResult",
    "HealthResult",
]
