"""External API client implementations."""

from .payhero_client import HttpPayHeroClient

__all__ = [
    "HttpPayHeroClient",
]
