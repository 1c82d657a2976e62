"""Unit tests for the charge service use cases."""

import pytest

from stk_gateway.application.dto import ChargeRequest
from stk_gateway.application.services import ChargeService
from stk_gateway.domain.exceptions import (
    InvalidAmountException,
    InvalidPhoneNumberException,
    MissingFieldException,
    MissingReferenceException,
    NoReferenceReturnedException,
    ProviderException,
)


@pytest.fixture
def make_service(make_poller, polling_config):
    def _make(provider) -> ChargeService:
        return ChargeService(
            provider=provider,
            config=polling_config,
            poller=make_poller(provider),
        )

    return _make


class TestChargeValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "phone,amount",
        [(None, 100), ("", 100), ("0712345678", None), ("0712345678", ""), (None, None)],
    )
    async def test_missing_fields(self, make_service, fake_provider, phone, amount):
        service = make_service(fake_provider)

        with pytest.raises(MissingFieldException) as exc_info:
            await service.charge(ChargeRequest(phone_number=phone, amount=amount))

        assert exc_info.value.message == "Phone number and amount are required"
        assert fake_provider.charges == []

    @pytest.mark.asyncio
    async def test_invalid_phone(self, make_service, fake_provider):
        service = make_service(fake_provider)

        with pytest.raises(InvalidPhoneNumberException):
            await service.charge(ChargeRequest(phone_number="0812345678", amount=100))

        assert fake_provider.charges == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -5, "abc"])
    async def test_invalid_amount(self, make_service, fake_provider, amount):
        service = make_service(fake_provider)

        with pytest.raises(InvalidAmountException):
            await service.charge(ChargeRequest(phone_number="0712345678", amount=amount))

        assert fake_provider.charges == []


class TestChargeOutcomes:

    @pytest.mark.asyncio
    async def test_completed_charge(self, make_service, fake_provider):
        service = make_service(fake_provider)

        result = await service.charge(
            ChargeRequest(
                phone_number="+254 712 345 678",
                amount="150",
                external_reference="  INV-9  ",
                customer_name="",
            )
        )

        assert result.success is True
        assert result.verified is True
        assert result.message == "Payment completed successfully."
        assert result.reference == "REF-123"
        assert result.status == "SUCCESS"
        assert result.details["provider_reference"] == "SAE3YULR0Y"

        payload = fake_provider.charges[0]
        assert payload.phone_number == "254712345678"
        assert payload.amount == 150.0
        assert payload.external_reference == "INV-9"
        assert payload.customer_name == "Customer"

    @pytest.mark.asyncio
    async def test_failed_charge(self, make_service, fake_provider_cls):
        provider = fake_provider_cls(statuses=[{"status": "FAILED"}])
        service = make_service(provider)

        result = await service.charge(ChargeRequest(phone_number="0112345678", amount=10))

        assert result.success is False
        assert result.verified is True
        assert result.message == "Payment failed or cancelled."
        assert result.status == "FAILED"

    @pytest.mark.asyncio
    async def test_pending_charge(self, make_service, fake_provider_cls):
        provider = fake_provider_cls(statuses=[{"status": "QUEUED"}])
        service = make_service(provider)

        result = await service.charge(ChargeRequest(phone_number="0712345678", amount=10))

        assert result.success is False
        assert result.verified is False
        assert result.message == "Payment pending. Please check manually after a few minutes."
        assert result.status is None
        assert result.details == {"status": "QUEUED"}
        assert result.state == "timed_out"

    @pytest.mark.asyncio
    async def test_submission_failure_propagates(self, make_service, fake_provider_cls):
        provider = fake_provider_cls(charge_response={"success": False})
        service = make_service(provider)

        with pytest.raises(NoReferenceReturnedException):
            await service.charge(ChargeRequest(phone_number="0712345678", amount=10))


class TestTransactionStatus:

    @pytest.mark.asyncio
    async def test_passes_status_through(self, make_service, fake_provider):
        service = make_service(fake_provider)

        data = await service.get_transaction_status(" REF-123 ")

        assert data["status"] == "SUCCESS"
        assert fake_provider.status_queries == ["REF-123"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reference", [None, "", "   "])
    async def test_blank_reference(self, make_service, fake_provider, reference):
        service = make_service(fake_provider)

        with pytest.raises(MissingReferenceException):
            await service.get_transaction_status(reference)

        assert fake_provider.status_queries == []

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, make_service, fake_provider_cls):
        provider = fake_provider_cls(statuses=[ProviderException("Not found", 404)])
        service = make_service(provider)

        with pytest.raises(ProviderException):
            await service.get_transaction_status("REF-404")


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, make_service, fake_provider):
        service = make_service(fake_provider)

        result = await service.check_health()

        assert result.success is True
        assert result.balance["available_balance"] == 2500.0
        assert result.account_id == "1234"
        assert result.provider == "m-pesa"
        assert result.error is None
        assert result.timestamp

    @pytest.mark.asyncio
    async def test_degraded_never_raises(self, make_service, fake_provider_cls):
        provider = fake_provider_cls(balance_error=ProviderException("Unauthorized", 401))
        service = make_service(provider)

        result = await service.check_health()

        assert result.success is False
        assert result.message == "Gateway running but PayHero connection failed"
        assert result.error == "Unauthorized"
        assert result.balance is None
