"""Base types shared by all model providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from ...models import ModelRecord

if TYPE_CHECKING:
    from .provider import ModelProvider


class ConfigurationError(Exception):
    """Raised when a provider's credentials are missing or malformed.

    Attributes:
        provider: Name of the provider being configured
        reason: One of "missing_credentials", "invalid_format", "missing_fields"
        sources: Credential locations that were consulted, in order
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        reason: str,
        sources: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.provider = provider
        self.reason = reason
        self.sources = sources


class CatalogFallback(str, Enum):
    """What dynamic discovery returns when it has nothing usable."""

    STATIC = "static"
    EMPTY = "empty"


class CredentialFormat(str, Enum):
    """How a provider's resolved api key is interpreted."""

    URL_AND_KEY = "url_and_key"
    JSON_BLOB = "json_blob"


@dataclass(frozen=True)
class ProviderIdentity:
    name: str
    api_key_link: str


@dataclass(frozen=True)
class CredentialSpec:
    """Environment/settings key names a provider reads its credentials from."""

    base_url_key: str
    api_token_key: str


@dataclass(frozen=True)
class ProviderConfig:
    """Everything that distinguishes one provider from another.

    A single ModelProvider implementation consumes this; providers differ only
    in these parameters.
    """

    identity: ProviderIdentity
    credentials: CredentialSpec
    static_models: tuple[ModelRecord, ...]
    # Called with (ResolvedCredential or BedrockCredential, model id)
    client_factory: Callable[[Any, str], Any]
    credential_format: CredentialFormat = CredentialFormat.URL_AND_KEY
    default_base_url: str | None = None
    alias_base_url_keys: tuple[str, ...] = ()
    alias_api_token_keys: tuple[str, ...] = ()
    alias_provider_names: tuple[str, ...] = ()
    # Appended to the base URL, tried in order
    catalog_paths: tuple[str, ...] = ()
    empty_catalog_policy: CatalogFallback = CatalogFallback.STATIC

    @property
    def name(self) -> str:
        return self.identity.name


@dataclass
class ModelHandle:
    """A constructed, not yet invoked, model client bound to one model."""

    provider: str
    model: str
    client: Any
    metadata: dict[str, Any] = field(default_factory=dict)


class ProviderRegistry:
    """Registry to map provider names to provider instances."""

    _providers: dict[str, ModelProvider] = {}

    @classmethod
    def register(cls, provider: ModelProvider) -> None:
        """Register a provider under its name."""
        cls._providers[provider.name] = provider

    @classmethod
    def get(cls, name: str) -> ModelProvider:
        """Get provider by name.

        Raises:
            ValueError: If name is not registered
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) or "none"
            raise ValueError(f"Unknown provider: {name}. Available: {available}")
        return cls._providers[name]

    @classmethod
    def list_providers(cls) -> list[ModelProvider]:
        """List all registered providers in registration order."""
        return list(cls._providers.values())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered providers (for testing)."""
        cls._providers.clear()
