"""
Domain Interfaces (Ports)
"""

from .clients import PaymentProvider

__all__ = [
    "PaymentProvider",
]
