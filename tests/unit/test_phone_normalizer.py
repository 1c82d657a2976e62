"""
Unit tests for phone number normalization.

Test Categories:
- test_accepts_*: inputs that must normalize
- test_rejects_*: inputs that must be refused
- test_rejection_*: the rejection message
"""

import random

import pytest

from stk_gateway.domain.exceptions import (
    ChargeValidationException,
    InvalidPhoneNumberException,
)
from stk_gateway.service.payments import normalize_phone


class TestAcceptedFormats:
    """Inputs in one of the four documented forms."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("0712345678", "254712345678"),
            ("0112345678", "254112345678"),
            ("254712345678", "254712345678"),
            ("254112345678", "254112345678"),
            ("+254712345678", "254712345678"),
            ("+254112345678", "254112345678"),
            ("  0712345678  ", "254712345678"),
            ("0712 345 678", "254712345678"),
            ("+254 712 345 678", "254712345678"),
            ("\t0798\n765432 ", "254798765432"),
            ("+0712345678", "254712345678"),
        ],
    )
    def test_accepts_documented_forms(self, raw, expected):
        assert normalize_phone(raw) == expected

    def test_accepts_every_local_number(self):
        """Any 0[17] followed by 8 digits maps to 254 + the rest."""
        rng = random.Random(254)
        for _ in range(200):
            prefix = rng.choice("17")
            rest = "".join(rng.choice("0123456789") for _ in range(8))
            result = normalize_phone(f"0{prefix}{rest}")

            assert result == f"254{prefix}{rest}"
            assert len(result) == 12

    def test_accepts_every_international_number(self):
        rng = random.Random(712)
        for _ in range(200):
            number = "254" + rng.choice("17") + "".join(
                rng.choice("0123456789") for _ in range(8)
            )
            assert normalize_phone(number) == number
            assert normalize_phone("+" + number) == number


class TestRejectedFormats:
    """Everything else fails closed."""

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "+",
            "abc",
            "071234567",  # too short
            "07123456789",  # too long
            "0812345678",  # wrong prefix
            "0212345678",
            "712345678",  # missing trunk zero
            "254812345678",
            "25471234567",
            "2547123456789",
            "255712345678",  # Tanzania
            "++254712345678",
            "00254712345678",
            "0712-345-678",
            "(0712)345678",
            "07123456７8",  # full-width digit
            "254７12345678",
        ],
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidPhoneNumberException):
            normalize_phone(raw)

    @pytest.mark.parametrize("raw", [None, 712345678, 254712345678, 7.12, [], {}])
    def test_rejects_non_strings(self, raw):
        with pytest.raises(InvalidPhoneNumberException):
            normalize_phone(raw)

    def test_rejects_random_garbage_without_other_errors(self):
        """Only the documented rejection is ever raised."""
        rng = random.Random(0)
        alphabet = "0123456789+ -()abc\t"
        for _ in range(500):
            raw = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 16)))
            try:
                result = normalize_phone(raw)
            except InvalidPhoneNumberException:
                continue
            assert len(result) == 12
            assert result.startswith("254")


class TestRejectionMessage:

    def test_rejection_names_accepted_formats(self):
        with pytest.raises(InvalidPhoneNumberException) as exc_info:
            normalize_phone("12345")

        message = exc_info.value.message
        assert "invalid phone format" in message
        for form in ("07XXXXXXXX", "01XXXXXXXX", "2547XXXXXXXX", "2541XXXXXXXX"):
            assert form in message

    def test_rejection_is_a_validation_error(self):
        with pytest.raises(ChargeValidationException) as exc_info:
            normalize_phone("nope")

        assert exc_info.value.code == "INVALID_PHONE"
        assert exc_info.value.raw == "nope"
