"""Payment provider-related domain exceptions."""

from .base import DomainException


class ProviderException(DomainException):
    """Raised when the payment provider returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="PROVIDER_ERROR",
        )
        self.status_code = status_code


class ProviderTimeoutException(ProviderException):
    """Raised when the payment provider times out."""

    def __init__(self, operation: str = "request"):
        super().__init__(
            message=f"Payment provider {operation} timed out",
            status_code=None,
        )
        self.code = "PROVIDER_TIMEOUT"
        self.operation = operation


class ChargeSubmissionException(ProviderException):
    """Raised when the provider rejects an STK push."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message=message, status_code=status_code)
        self.code = "CHARGE_SUBMISSION_FAILED"


class NoReferenceReturnedException(ChargeSubmissionException):
    """Raised when an STK push response carries no reference to poll."""

    def __init__(self):
        super().__init__(message="No reference returned from PayHero STK push")
        self.code = "NO_REFERENCE_RETURNED"
