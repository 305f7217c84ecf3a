"""Provider and model catalog endpoints."""

from __future__ import annotations

import logging
import os
from typing import AsyncIterator, Mapping

import httpx
from fastapi import APIRouter, Depends, HTTPException

from ..models import ModelListRequest, ModelRecord, ProviderSummary
from ..services.providers import ModelProvider, ProviderRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/providers", tags=["providers"])


def get_server_env() -> Mapping[str, str]:
    """Server environment consulted for provider credentials."""
    return os.environ


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client used for live model discovery."""
    async with httpx.AsyncClient() as client:
        yield client


def get_provider(name: str) -> ModelProvider:
    try:
        return ProviderRegistry.get(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=list[ProviderSummary])
async def list_providers() -> list[ProviderSummary]:
    """List registered providers with their static models."""
    return [
        ProviderSummary(
            name=provider.name,
            api_key_link=provider.api_key_link,
            static_models=provider.list_static(),
        )
        for provider in ProviderRegistry.list_providers()
    ]


@router.get("/{name}/models", response_model=list[ModelRecord])
async def get_static_models(provider: ModelProvider = Depends(get_provider)) -> list[ModelRecord]:
    """Get a provider's hand-maintained model list."""
    return provider.list_static()


@router.post("/{name}/models", response_model=list[ModelRecord])
async def discover_models(
    request: ModelListRequest,
    provider: ModelProvider = Depends(get_provider),
    server_env: Mapping[str, str] = Depends(get_server_env),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> list[ModelRecord]:
    """
    Discover a provider's models using the caller's credentials.

    Falls back to the static list (or nothing, per provider) when the live
    listing is unavailable.
    """
    models = await provider.get_dynamic_models(
        api_keys=request.api_keys,
        env=server_env,
        provider_settings=request.provider_settings,
        client=http_client,
    )
    logger.info(f"Discovered {len(models)} models for {provider.name}")
    return models
