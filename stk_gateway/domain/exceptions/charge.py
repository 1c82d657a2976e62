"""Charge request validation exceptions."""

from .base import DomainException

ACCEPTED_PHONE_FORMATS = ("07XXXXXXXX", "01XXXXXXXX", "2547XXXXXXXX", "2541XXXXXXXX")


class ChargeValidationException(DomainException):
    """Raised when a charge request fails validation."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class MissingFieldException(ChargeValidationException):
    """Raised when phone number or amount is absent."""

    def __init__(self, message: str = "Phone number and amount are required"):
        super().__init__(message=message, code="MISSING_FIELD")


class InvalidPhoneNumberException(ChargeValidationException):
    """Raised when a phone number cannot be normalized."""

    def __init__(self, raw: object = None):
        super().__init__(
            message=(
                "invalid phone format: use one of "
                + ", ".join(ACCEPTED_PHONE_FORMATS)
            ),
            code="INVALID_PHONE",
        )
        self.raw = raw


class InvalidAmountException(ChargeValidationException):
    """Raised when the amount is not a finite number of at least 1 KES."""

    def __init__(self, raw: object = None):
        super().__init__(
            message="amount must be at least 1 KES",
            code="INVALID_AMOUNT",
        )
        self.raw = raw


class MissingReferenceException(ChargeValidationException):
    """Raised when a status lookup is made without a reference."""

    def __init__(self):
        super().__init__(
            message="Transaction reference is required",
            code="MISSING_REFERENCE",
        )
