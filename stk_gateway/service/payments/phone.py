"""
Phone Number Normalization for the STK Gateway.

Safaricom subscribers are addressed as 254 followed by a nine-digit
number starting with 7 or 1. Both prefixes are current numbering
ranges and are accepted equally.

Accepted inputs (spaces and a leading + are ignored):
    07XXXXXXXX    -> 2547XXXXXXXX
    01XXXXXXXX    -> 2541XXXXXXXX
    2547XXXXXXXX  -> unchanged
    2541XXXXXXXX  -> unchanged
"""

import re

from stk_gateway.domain.entities import NormalizedPhone
from stk_gateway.domain.exceptions import InvalidPhoneNumberException

COUNTRY_CODE = "254"

_WHITESPACE = re.compile(r"\s+")
_LOCAL_FORMAT = re.compile(r"0[17][0-9]{8}")
_CANONICAL_FORMAT = re.compile(r"254[17][0-9]{8}")


def normalize_phone(raw: object) -> NormalizedPhone:
    """
    Convert a user-entered phone number to canonical 254XXXXXXXXX form.

    Args:
        raw: The phone number as entered by the user

    Returns:
        The 12-digit normalized number

    Raises:
        InvalidPhoneNumberException: If the input is not one of the
            accepted formats. Nothing is guessed or padded.
    """
    if not isinstance(raw, str):
        raise InvalidPhoneNumberException(raw)

    phone = _WHITESPACE.sub("", raw.strip())

    if phone.startswith("+"):
        phone = phone[1:]

    if _LOCAL_FORMAT.fullmatch(phone):
        phone = COUNTRY_CODE + phone[1:]

    if not _CANONICAL_FORMAT.fullmatch(phone):
        raise InvalidPhoneNumberException(raw)

    return NormalizedPhone(phone)

