"""Generic model provider driven by a ProviderConfig."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

import httpx

from ...models import ModelRecord, ProviderSetting
from .base import CatalogFallback, CredentialFormat, ModelHandle, ProviderConfig
from .catalog import fetch_model_listing, normalize_listing
from .credentials import (
    ResolvedCredential,
    parse_bedrock_config,
    require_credentials,
    resolve_credentials,
)

logger = logging.getLogger(__name__)


class ModelProvider:
    """A named model backend.

    Resolves credentials, lists models (static and live) and builds model
    clients. Everything provider-specific comes from ``config``.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    def name(self) -> str:
        return self.config.identity.name

    @property
    def api_key_link(self) -> str:
        return self.config.identity.api_key_link

    @property
    def static_models(self) -> list[ModelRecord]:
        return list(self.config.static_models)

    def list_static(self) -> list[ModelRecord]:
        """Return the hand-maintained model list. No I/O."""
        return self.static_models

    def resolve_credentials(
        self,
        api_keys: Optional[Mapping[str, str]] = None,
        provider_settings: Optional[Mapping[str, ProviderSetting]] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ResolvedCredential:
        if env is None:
            env = os.environ
        return resolve_credentials(self.config, api_keys, provider_settings, env)

    def _fallback(self, reason: str) -> list[ModelRecord]:
        if self.config.empty_catalog_policy is CatalogFallback.EMPTY:
            logger.info(f"{self.name}: {reason}; returning no models")
            return []
        logger.info(f"{self.name}: {reason}; using static models")
        return self.static_models

    async def get_dynamic_models(
        self,
        api_keys: Optional[Mapping[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        env: Optional[Mapping[str, str]] = None,
        *,
        provider_settings: Optional[Mapping[str, ProviderSetting]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> list[ModelRecord]:
        """
        List the provider's models from its live endpoint.

        Never raises: failures degrade to the static list or an empty list,
        depending on the provider's empty catalog policy.

        Args:
            api_keys: Explicit keys sent by the caller
            settings: This provider's settings
            provider_settings: Settings keyed by provider name, including aliases;
                ``settings`` overrides the entry under this provider's name
            env: Server environment (defaults to os.environ)
            client: HTTP client to use instead of a fresh one

        Returns:
            Chat-capable models, unique by name, in listing order
        """
        if not self.config.catalog_paths:
            return self.static_models

        try:
            merged_settings = dict(provider_settings or {})
            if settings:
                merged_settings[self.name] = settings
            credential = self.resolve_credentials(api_keys, merged_settings, env)
            if not credential.base_url or not credential.api_key:
                return self._fallback("credentials not configured")

            body = await fetch_model_listing(
                credential.base_url,
                credential.api_key,
                self.config.catalog_paths,
                client=client,
            )
            if body is None:
                return self._fallback("no model listing endpoint responded")

            models = normalize_listing(body, self.name)
            if models is None:
                return self._fallback("unrecognized model listing shape")
            if not models:
                return self._fallback("model listing contained no chat models")
            return models

        except Exception as e:
            logger.warning(f"{self.name} model discovery failed: {e}")
            return self._fallback("model discovery failed")

    def get_model_instance(
        self,
        model: str,
        server_env: Optional[Mapping[str, str]] = None,
        api_keys: Optional[Mapping[str, str]] = None,
        provider_settings: Optional[Mapping[str, ProviderSetting]] = None,
    ) -> ModelHandle:
        """
        Build a client handle for ``model``.

        No network call is made; the handle is inert until the host invokes it.

        Raises:
            ConfigurationError: If credentials are missing or malformed
        """
        credential = self.resolve_credentials(api_keys, provider_settings, server_env)
        require_credentials(self.config, credential)

        if self.config.credential_format is CredentialFormat.JSON_BLOB:
            blob = parse_bedrock_config(credential.api_key, provider=self.name)
            client = self.config.client_factory(blob, model)
            metadata = {"region": blob.region}
        else:
            client = self.config.client_factory(credential, model)
            metadata = {"base_url": credential.base_url}

        logger.info(f"Created {self.name} client for model {model}")
        return ModelHandle(provider=self.name, model=model, client=client, metadata=metadata)
