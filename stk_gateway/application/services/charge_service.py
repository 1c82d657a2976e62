"""Charge service - orchestrates the STK push use cases."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

from stk_gateway.application.dto import ChargeRequest, ChargeResult, HealthResult
from stk_gateway.core.metrics import record_charge, track_charge_confirmation
from stk_gateway.domain.exceptions import (
    MissingFieldException,
    MissingReferenceException,
    ProviderException,
)
from stk_gateway.domain.interfaces import PaymentProvider
from stk_gateway.service.payments import (
    PollingConfig,
    normalize_phone,
    validate_amount,
)

from .payment_poller import PaymentPoller

logger = structlog.get_logger(__name__)

HEALTH_OK_MESSAGE = "STK Push Gateway is running"
HEALTH_DEGRADED_MESSAGE = "Gateway running but PayHero connection failed"


class ChargeService:
    """
    Application service for charge use cases.
    """

    def __init__(
        self,
        provider: PaymentProvider,
        config: PollingConfig,
        poller: PaymentPoller | None = None,
    ):
        self._provider = provider
        self._config = config
        self._poller = poller or PaymentPoller(provider, config)

    async def charge(
        self,
        request: ChargeRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ChargeResult:
        """
        Validate a charge request, submit it and wait for the outcome.

        Args:
            request: Raw charge request
            cancel_event: Set when the caller disconnects

        Returns:
            ChargeResult; unresolved charges come back with verified=False

        Raises:
            ChargeValidationException: If phone or amount is invalid
            ProviderException: If the charge could not be submitted
        """
        if request.missing_fields():
            raise MissingFieldException()

        phone = normalize_phone(request.phone_number)
        amount = validate_amount(request.amount)

        log = logger.bind(phone_number=phone, amount=amount)
        log.info("charge_requested")

        try:
            with track_charge_confirmation():
                outcome = await self._poller.charge_and_confirm(
                    phone,
                    amount,
                    external_reference=_clean(request.external_reference),
                    customer_name=_clean(request.customer_name),
                    cancel_event=cancel_event,
                )
        except ProviderException as e:
            record_charge("submission_failed", amount)
            log.error("charge_failed", code=e.code, error=e.message)
            raise

        record_charge(outcome.state.value, amount)
        log.info("charge_finished", **outcome.to_dict())

        return ChargeResult.from_outcome(outcome)

    async def get_transaction_status(self, reference: Optional[str]) -> Dict[str, Any]:
        """
        Pass a provider status lookup through.

        Raises:
            MissingReferenceException: If reference is blank
            ProviderException: If the provider call fails
        """
        reference = _clean(reference)
        if reference is None:
            raise MissingReferenceException()

        logger.info("transaction_status_requested", reference=reference)
        return await self._provider.query_status(reference)

    async def check_health(self) -> HealthResult:
        """
        Probe provider reachability with a wallet-balance lookup.

        Never raises; failures are reported in the result.
        """
        timestamp = datetime.now(timezone.utc).isoformat()

        try:
            balance = await self._provider.get_wallet_balance()
        except Exception as e:
            logger.warning("health_probe_failed", error=str(e))
            return HealthResult(
                success=False,
                message=HEALTH_DEGRADED_MESSAGE,
                timestamp=timestamp,
                error=getattr(e, "message", None) or str(e),
            )

        return HealthResult(
            success=True,
            message=HEALTH_OK_MESSAGE,
            timestamp=timestamp,
            account_id=self._config.channel_id or None,
            provider=self._config.provider,
            balance=balance,
        )


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a free-text field; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None
