"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from stk_gateway.application.services import ChargeService, PaymentPoller
from stk_gateway.core.config import Settings, get_settings
from stk_gateway.domain.interfaces import PaymentProvider
from stk_gateway.infrastructure.clients import HttpPayHeroClient
from stk_gateway.service.payments import PollingConfig, get_polling_settings


# Configuration dependencies
def get_polling_config() -> PollingConfig:
    """Get the explicit polling configuration."""
    return PollingConfig.from_settings(get_settings(), get_polling_settings())


# External client dependencies
@lru_cache
def get_payment_provider() -> HttpPayHeroClient:
    """Get the shared PaymentProvider instance."""
    settings: Settings = get_settings()
    return HttpPayHeroClient(
        base_url=settings.payhero_api_url,
        auth_token=settings.auth_token,
        timeout=settings.payhero_timeout,
    )


# Service dependencies
def get_payment_poller(
    provider: Annotated[PaymentProvider, Depends(get_payment_provider)],
    config: Annotated[PollingConfig, Depends(get_polling_config)],
) -> PaymentPoller:
    """Get a PaymentPoller instance."""
    return PaymentPoller(provider=provider, config=config)


def get_charge_service(
    provider: Annotated[PaymentProvider, Depends(get_payment_provider)],
    config: Annotated[PollingConfig, Depends(get_polling_config)],
    poller: Annotated[PaymentPoller, Depends(get_payment_poller)],
) -> ChargeService:
    """Get a ChargeService instance with all dependencies."""
    return ChargeService(provider=provider, config=config, poller=poller)
