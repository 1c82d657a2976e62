"""Integration tests for transaction status, health and metrics endpoints."""

import pytest
from httpx import AsyncClient

from stk_gateway.domain.exceptions import ProviderException


class TestTransactionStatus:

    @pytest.mark.asyncio
    async def test_passthrough(self, client: AsyncClient, fake_provider):
        response = await client.get("/api/transaction-status/REF-123")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["status"] == "SUCCESS"
        assert data["data"]["provider_reference"] == "SAE3YULR0Y"
        assert fake_provider.status_queries == ["REF-123"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/transaction-status/", "/api/transaction-status/%20"])
    async def test_missing_reference(self, client: AsyncClient, fake_provider, path):
        response = await client.get(path)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Transaction reference is required"
        assert fake_provider.status_queries == []

    @pytest.mark.asyncio
    async def test_provider_error(self, make_client, fake_provider_cls):
        provider = fake_provider_cls(statuses=[ProviderException("Transaction not found", 404)])
        client = await make_client(provider)

        response = await client.get("/api/transaction-status/REF-404")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Transaction not found"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "STK Push Gateway is running"
        assert data["timestamp"]
        assert data["balance"]["available_balance"] == 2500.0
        assert data["account_id"] == "1234"
        assert "error" not in data

    @pytest.mark.asyncio
    async def test_provider_down_still_200(self, make_client, fake_provider_cls):
        provider = fake_provider_cls(balance_error=ProviderException("Unauthorized", 401))
        client = await make_client(provider)

        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Gateway running but PayHero connection failed"
        assert data["error"] == "Unauthorized"
        assert "balance" not in data


class TestMetrics:

    @pytest.mark.asyncio
    async def test_charge_metrics_exposed(self, client: AsyncClient):
        await client.post(
            "/api/charge", json={"phone_number": "0712345678", "amount": 100}
        )

        response = await client.get("/metrics")

        assert response.status_code == 200
        body = response.text
        assert 'stk_charge_total{outcome="completed"}' in body
        assert 'stk_status_poll_total{result="ok"}' in body
        assert "stk_charge_confirmation_seconds" in body
