"""
Shared fixtures.

Provides:
- A fake PaymentProvider that plays back scripted responses
- A fake clock whose sleep advances time instantly
- A default PollingConfig (30s budget, 5s interval)
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

import pytest

from stk_gateway.application.services import PaymentPoller
from stk_gateway.domain.entities import ChargePayload
from stk_gateway.domain.interfaces import PaymentProvider
from stk_gateway.service.payments import PollingConfig


# =============================================================================
# Fakes
# =============================================================================

class FakeClock:
    """Monotonic clock whose sleep moves time forward without waiting."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


_DEFAULT_RESPONSE = object()


class FakePaymentProvider(PaymentProvider):
    """
    Scripted provider.

    Status queries play back `statuses` in order; entries that are
    exceptions are raised. After the script runs out the last entry
    repeats, or the script starts over when cycle=True.
    """

    def __init__(
        self,
        charge_response: Any = _DEFAULT_RESPONSE,
        statuses: Optional[List[Any]] = None,
        cycle: bool = False,
        charge_error: Optional[Exception] = None,
        balance: Optional[Dict[str, Any]] = None,
        balance_error: Optional[Exception] = None,
    ):
        if charge_response is _DEFAULT_RESPONSE:
            charge_response = {
                "success": True,
                "status": "QUEUED",
                "reference": "REF-123",
                "CheckoutRequestID": "ws_CO_191220191020363925",
            }
        self.charge_response = charge_response
        self.statuses = list(statuses) if statuses else [{"status": "QUEUED"}]
        self.cycle = cycle
        self.charge_error = charge_error
        self.balance = balance if balance is not None else {
            "wallet_type": "service_wallet",
            "available_balance": 2500.0,
            "currency": "KES",
        }
        self.balance_error = balance_error
        self.on_status: Optional[Callable[[int], None]] = None

        self.charges: List[ChargePayload] = []
        self.status_queries: List[str] = []
        self.balance_calls = 0

    async def initiate_charge(self, payload: ChargePayload) -> Dict[str, Any]:
        self.charges.append(payload)
        if self.charge_error is not None:
            raise self.charge_error
        return self.charge_response

    async def query_status(self, reference: str) -> Dict[str, Any]:
        self.status_queries.append(reference)
        count = len(self.status_queries)
        if self.on_status is not None:
            self.on_status(count)

        if self.cycle:
            item = self.statuses[(count - 1) % len(self.statuses)]
        else:
            item = self.statuses[min(count, len(self.statuses)) - 1]

        if isinstance(item, BaseException):
            raise item
        return item

    async def get_wallet_balance(self) -> Dict[str, Any]:
        self.balance_calls += 1
        if self.balance_error is not None:
            raise self.balance_error
        return self.balance


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_provider_cls():
    """The FakePaymentProvider class, for tests that script their own."""
    return FakePaymentProvider


@pytest.fixture
def fake_provider() -> FakePaymentProvider:
    """Provider that confirms the payment on the first status query."""
    return FakePaymentProvider(
        statuses=[{
            "status": "SUCCESS",
            "reference": "REF-123",
            "provider_reference": "SAE3YULR0Y",
        }],
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def polling_config() -> PollingConfig:
    return PollingConfig(
        provider="m-pesa",
        channel_id="1234",
        timeout_seconds=30.0,
        interval_seconds=5.0,
        default_customer_name="Customer",
    )


@pytest.fixture
def make_poller(polling_config: PollingConfig, fake_clock: FakeClock):
    """Build a PaymentPoller on the fake clock for a given provider."""

    def _make(provider: PaymentProvider, config: PollingConfig | None = None) -> PaymentPoller:
        return PaymentPoller(
            provider=provider,
            config=config or polling_config,
            clock=fake_clock,
            sleep=fake_clock.sleep,
            reference_factory=lambda: "TRX-FIXED",
        )

    return _make
