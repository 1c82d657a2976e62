"""Base domain exception."""

from typing import Any, Dict


class DomainException(Exception):
    """
    Base exception for all gateway errors.

    Carries a human-readable message and a stable machine code that
    API clients can branch on.
    """

    def __init__(self, message: str, code: str = "GATEWAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Error body fields shared by every API error response."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
