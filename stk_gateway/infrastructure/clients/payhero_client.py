"""HTTP implementation of PaymentProvider for the PayHero API."""

from typing import Any, Dict

import httpx
import structlog

from stk_gateway.core.config import settings
from stk_gateway.core.metrics import (
    record_provider_failure,
    track_provider_latency,
)
from stk_gateway.domain.entities import ChargePayload
from stk_gateway.domain.exceptions import (
    ChargeSubmissionException,
    ProviderException,
    ProviderTimeoutException,
)
from stk_gateway.domain.interfaces import PaymentProvider

logger = structlog.get_logger(__name__)


class HttpPayHeroClient(PaymentProvider):
    """
    HTTP client for the PayHero payments API.

    Holds no per-charge state; one instance may be shared by every
    request. Calls are made once: the confirmation loop is what
    retries status queries, and charge submission is never retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        auth_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.payhero_api_url).rstrip("/")
        self._auth_token = auth_token if auth_token is not None else settings.auth_token
        self._timeout = timeout or settings.payhero_timeout
        self._transport = transport

    async def initiate_charge(self, payload: ChargePayload) -> Dict[str, Any]:
        """Send an STK push via POST /payments."""
        try:
            return await self._request(
                "charge",
                "POST",
                "/payments",
                json=payload.to_dict(),
            )
        except ProviderTimeoutException:
            raise
        except ProviderException as e:
            raise ChargeSubmissionException(
                message=e.message,
                status_code=e.status_code,
            ) from e

    async def query_status(self, reference: str) -> Dict[str, Any]:
        """Fetch a charge status via GET /transaction-status."""
        return await self._request(
            "status",
            "GET",
            "/transaction-status",
            params={"reference": reference},
        )

    async def get_wallet_balance(self) -> Dict[str, Any]:
        """Fetch the service wallet via GET /wallets."""
        return await self._request(
            "balance",
            "GET",
            "/wallets",
            params={"wallet_type": "service_wallet"},
        )

    def _headers(self) -> Dict[str, str]:
        token = self._auth_token.strip()
        if token and " " not in token:
            token = f"Basic {token}"
        return {
            "Authorization": token,
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"

        try:
            with track_provider_latency(operation):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        headers=self._headers(),
                        **kwargs,
                    )
        except httpx.TimeoutException:
            record_provider_failure(operation, "timeout")
            logger.warning("payhero_timeout", operation=operation)
            raise ProviderTimeoutException(operation)
        except httpx.HTTPError as e:
            record_provider_failure(operation, "error")
            logger.error("payhero_error", operation=operation, error=str(e))
            raise ProviderException(message=f"PayHero request failed: {e}")

        if response.status_code >= 400:
            record_provider_failure(operation, "http_error")
            logger.warning(
                "payhero_http_error",
                operation=operation,
                status_code=response.status_code,
                response=response.text[:200],
            )
            raise ProviderException(
                message=self._error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            record_provider_failure(operation, "malformed")
            raise ProviderException(
                message="PayHero returned a non-JSON response",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            record_provider_failure(operation, "malformed")
            raise ProviderException(
                message="PayHero returned an unexpected response shape",
                status_code=response.status_code,
            )

        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort error text from a PayHero error body."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            for key in ("error_message", "message", "error"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value

        return f"PayHero API error: HTTP {response.status_code}"
