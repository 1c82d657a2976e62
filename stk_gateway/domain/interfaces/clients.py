"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from stk_gateway.domain.entities import ChargePayload


class PaymentProvider(ABC):
    """
    Abstract client for the mobile-money payment provider.

    Implementations must be safe to share between concurrent requests:
    no per-charge state is kept on the client.
    """

    @abstractmethod
    async def initiate_charge(self, payload: ChargePayload) -> Dict[str, Any]:
        """
        Send an STK push to the subscriber.

        Args:
            payload: The charge to submit

        Returns:
            The provider response. A usable response carries a
            "reference" key identifying the attempt.

        Raises:
            ProviderException: If the provider returns an error
            ProviderTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def query_status(self, reference: str) -> Dict[str, Any]:
        """
        Fetch the current status of a charge.

        Args:
            reference: Provider reference returned by initiate_charge

        Returns:
            The provider payload, normally with a free-text "status" key

        Raises:
            ProviderException: If the provider returns an error
            ProviderTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def get_wallet_balance(self) -> Dict[str, Any]:
        """
        Fetch the service wallet balance.

        Used as a reachability probe by the health check.
        """
        ...
