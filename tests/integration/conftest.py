"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app
- Dependency overrides wiring a scripted provider and a fake clock
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stk_gateway.core.dependencies import (
    get_payment_poller,
    get_payment_provider,
    get_polling_config,
)
from stk_gateway.main import app


@pytest_asyncio.fixture
async def make_client(polling_config, make_poller):
    """
    Build a test client around a given provider.

    The client:
    - Uses the scripted provider for every PayHero call
    - Polls on the fake clock, so the 30s window passes instantly
    """
    clients = []

    async def _make(provider) -> AsyncClient:
        app.dependency_overrides[get_payment_provider] = lambda: provider
        app.dependency_overrides[get_polling_config] = lambda: polling_config
        app.dependency_overrides[get_payment_poller] = lambda: make_poller(provider)

        transport = ASGITransport(app=app)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client, fake_provider) -> AsyncGenerator[AsyncClient, None]:
    """Client whose provider confirms the first status query."""
    yield await make_client(fake_provider)
