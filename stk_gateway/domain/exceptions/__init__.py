"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .charge import (
    ACCEPTED_PHONE_FORMATS,
    ChargeValidationException,
    InvalidAmountException,
    InvalidPhoneNumberException,
    MissingFieldException,
    MissingReferenceException,
)
from .provider import (
    ChargeSubmissionException,
    NoReferenceReturnedException,
    ProviderException,
    ProviderTimeoutException,
)

__all__ = [
    "ACCEPTED_PHONE_FORMATS",
    "DomainException",
    "ChargeValidationException",
    "InvalidAmountException",
    "InvalidPhoneNumberException",
    "MissingFieldException",
    "MissingReferenceException",
    "ChargeSubmissionException",
    "NoReferenceReturnedException",
    "ProviderException",
    "ProviderTimeoutException",
]
