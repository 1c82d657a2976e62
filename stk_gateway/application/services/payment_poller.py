"""Payment poller - submits an STK push and waits for it to resolve."""

import asyncio
import time
import uuid
from typing import Awaitable, Callable, Optional

import structlog

from stk_gateway.core.metrics import record_status_poll
from stk_gateway.domain.entities import (
    ChargePayload,
    NormalizedPhone,
    PollOutcome,
    PollState,
    TransactionStatus,
)
from stk_gateway.domain.exceptions import (
    ChargeSubmissionException,
    NoReferenceReturnedException,
    ProviderException,
)
from stk_gateway.domain.interfaces import PaymentProvider
from stk_gateway.service.payments import (
    PollingConfig,
    classify_status,
    extract_status,
)

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


def generate_external_reference() -> str:
    """Time-based unique merchant reference, e.g. TRX-1718000000000-3f9a1c2b7."""
    return f"TRX-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class PaymentPoller:
    """
    Submits a charge, then queries its status until it resolves.

    State machine per call:
        submit() -> POLLING -> COMPLETED | FAILED | TIMED_OUT
    plus ABANDONED when the cancellation event is set. A failed
    submission raises before any outcome exists.

    Each call keeps its state in locals, so one poller can serve many
    concurrent requests. The clock and sleep are injectable so the
    time budget can be exercised without waiting on the wall clock.
    """

    def __init__(
        self,
        provider: PaymentProvider,
        config: PollingConfig,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
        reference_factory: Callable[[], str] = generate_external_reference,
    ):
        self._provider = provider
        self._config = config
        self._clock = clock
        self._sleep = sleep
        self._reference_factory = reference_factory

    def build_payload(
        self,
        phone: NormalizedPhone,
        amount: float,
        external_reference: Optional[str] = None,
        customer_name: Optional[str] = None,
    ) -> ChargePayload:
        """Assemble the provider payload, filling in defaults."""
        return ChargePayload(
            phone_number=phone,
            amount=amount,
            provider=self._config.provider,
            channel_id=self._config.channel_id,
            external_reference=external_reference or self._reference_factory(),
            customer_name=customer_name or self._config.default_customer_name,
            callback_url=self._config.callback_url,
        )

    async def charge_and_confirm(
        self,
        phone: NormalizedPhone,
        amount: float,
        external_reference: Optional[str] = None,
        customer_name: Optional[str] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> PollOutcome:
        """
        Charge a subscriber and wait for the provider to confirm.

        Args:
            phone: Normalized subscriber number
            amount: Amount in KES, already validated
            external_reference: Merchant reference (generated if omitted)
            customer_name: Customer name (configured default if omitted)
            cancel_event: Set this to stop polling early

        Returns:
            PollOutcome describing how the attempt ended

        Raises:
            ChargeSubmissionException: If the provider rejects the charge
            NoReferenceReturnedException: If no reference comes back
            ProviderTimeoutException: If submission times out
        """
        payload = self.build_payload(phone, amount, external_reference, customer_name)
        reference = await self.submit(payload)
        return await self.confirm(reference, cancel_event)

    async def submit(self, payload: ChargePayload) -> str:
        """Send the STK push and return the provider reference. Never retried."""
        log = logger.bind(external_reference=payload.external_reference)
        log.info(
            "charge_submitting",
            phone_number=payload.phone_number,
            amount=payload.amount,
            provider=payload.provider,
        )

        try:
            response = await self._provider.initiate_charge(payload)
        except ProviderException:
            log.warning("charge_submission_failed")
            raise
        except Exception as e:
            log.error("charge_submission_failed", error=str(e))
            raise ChargeSubmissionException(
                message=str(e) or "Failed to initiate payment",
            ) from e

        reference = response.get("reference") if isinstance(response, dict) else None
        if reference is None or isinstance(reference, bool) or not str(reference).strip():
            log.error("charge_missing_reference", response=response)
            raise NoReferenceReturnedException()

        reference = str(reference).strip()
        log.info("charge_submitted", reference=reference)
        return reference

    async def confirm(
        self,
        reference: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> PollOutcome:
        """
        Poll the provider until a terminal status or the budget runs out.

        A failed status query is logged and skipped; only a terminal
        status, the deadline or cancellation end the loop.
        """
        log = logger.bind(reference=reference)
        timeout = self._config.timeout_seconds
        interval = self._config.interval_seconds

        outcome = PollOutcome(reference=reference, state=PollState.POLLING)
        start = self._clock()

        while self._clock() - start < timeout:
            if await self._wait(interval, cancel_event):
                outcome.state = PollState.ABANDONED
                outcome.elapsed_seconds = self._clock() - start
                log.info("payment_abandoned", polls=outcome.polls)
                return outcome

            outcome.polls += 1
            try:
                payload = await self._provider.query_status(reference)
            except Exception as e:
                record_status_poll(ok=False)
                log.warning(
                    "status_check_failed",
                    attempt=outcome.polls,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            record_status_poll(ok=True)
            outcome.raw_details = payload
            outcome.raw_status = extract_status(payload)
            outcome.status = classify_status(outcome.raw_status)
            log.info(
                "status_checked",
                attempt=outcome.polls,
                status=outcome.status.value,
                raw_status=outcome.raw_status,
            )

            if outcome.status.is_terminal:
                outcome.state = (
                    PollState.COMPLETED
                    if outcome.status == TransactionStatus.COMPLETED
                    else PollState.FAILED
                )
                outcome.elapsed_seconds = self._clock() - start
                log.info(
                    "payment_confirmed" if outcome.succeeded else "payment_failed",
                    status=outcome.raw_status,
                    polls=outcome.polls,
                )
                return outcome

        outcome.state = PollState.TIMED_OUT
        outcome.elapsed_seconds = self._clock() - start
        log.info(
            "payment_timed_out",
            polls=outcome.polls,
            last_status=outcome.raw_status,
        )
        return outcome

    async def _wait(
        self,
        delay: float,
        cancel_event: Optional[asyncio.Event],
    ) -> bool:
        """Sleep for delay; return True if cancel_event fired first."""
        if cancel_event is None:
            await self._sleep(delay)
            return False

        if cancel_event.is_set():
            return True

        sleeper = asyncio.ensure_future(self._sleep(delay))
        watcher = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait(
                {sleeper, watcher},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (sleeper, watcher):
                if not task.done():
                    task.cancel()

        return cancel_event.is_set()
