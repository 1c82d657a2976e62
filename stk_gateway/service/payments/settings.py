"""
Polling Settings for the STK Gateway.

This module contains the tunables for the payment confirmation loop.
They can be adjusted via environment variables, e.g. to shorten the
window in staging or to match a provider's callback latency.

Environment variables use the POLLING_ prefix:
    POLLING_TIMEOUT_SECONDS=30
    POLLING_INTERVAL_SECONDS=5
    POLLING_DEFAULT_CUSTOMER_NAME=Customer

Usage:
    from stk_gateway.service.payments.settings import PollingConfig

    config = PollingConfig.from_settings(get_settings(), polling_settings)

    # Or build one directly for testing
    config = PollingConfig(provider="m-pesa", channel_id="1234")
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stk_gateway.core.config import Settings


class PollingSettings(BaseSettings):
    """
    Configurable parameters for the confirmation loop.

    All settings can be overridden via environment variables with POLLING_ prefix.
    All durations are in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="POLLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Total time budget for waiting on a charge to resolve",
    )
    interval_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Delay before each status query",
    )
    default_customer_name: str = Field(
        default="Customer",
        min_length=1,
        description="Customer name sent when the caller supplies none",
    )

    @model_validator(mode="after")
    def validate_interval(self) -> "PollingSettings":
        """The interval must fit inside the budget at least once."""
        if self.interval_seconds > self.timeout_seconds:
            raise ValueError(
                f"interval_seconds ({self.interval_seconds}) must not exceed "
                f"timeout_seconds ({self.timeout_seconds})"
            )
        return self


@lru_cache
def get_polling_settings() -> PollingSettings:
    """Get cached polling settings instance."""
    return PollingSettings()


@dataclass(frozen=True)
class PollingConfig:
    """
    Everything the poller needs, passed in explicitly.

    Built once per process from Settings and PollingSettings so the
    poller never reads environment state itself.
    """

    provider: str
    channel_id: str
    timeout_seconds: float = 30.0
    interval_seconds: float = 5.0
    default_customer_name: str = "Customer"
    callback_url: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        polling: PollingSettings | None = None,
    ) -> "PollingConfig":
        polling = polling or get_polling_settings()
        return cls(
            provider=settings.default_provider,
            channel_id=settings.channel_id,
            timeout_seconds=polling.timeout_seconds,
            interval_seconds=polling.interval_seconds,
            default_customer_name=polling.default_customer_name,
            callback_url=settings.callback_url,
        )
