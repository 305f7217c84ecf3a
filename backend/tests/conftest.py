"""Shared fixtures for provider and API tests."""

from __future__ import annotations

import dataclasses
from typing import Callable

import httpx
import pytest
import pytest_asyncio

from modelgate.main import app
from modelgate.routers.providers import get_server_env
from modelgate.services.providers import (
    AGENTROUTER_CONFIG,
    BEDROCK_CONFIG,
    CatalogFallback,
    ModelProvider,
    ProviderRegistry,
    register_default_providers,
)

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def agentrouter() -> ModelProvider:
    return ModelProvider(AGENTROUTER_CONFIG)


@pytest.fixture
def agentrouter_empty_fallback() -> ModelProvider:
    """AgentRouter variant that returns no models instead of the static list."""
    config = dataclasses.replace(
        AGENTROUTER_CONFIG, empty_catalog_policy=CatalogFallback.EMPTY
    )
    return ModelProvider(config)


@pytest.fixture
def bedrock() -> ModelProvider:
    return ModelProvider(BEDROCK_CONFIG)


@pytest.fixture
def make_http_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Build an httpx client whose requests are answered by ``handler``."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def server_env() -> dict[str, str]:
    return {}


@pytest_asyncio.fixture
async def client(server_env: dict[str, str]):
    ProviderRegistry.clear()
    register_default_providers()
    app.dependency_overrides[get_server_env] = lambda: server_env

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    ProviderRegistry.clear()
