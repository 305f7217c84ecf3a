"""Model provider adapters.

Each provider is a ModelProvider driven by a ProviderConfig that names its
credential keys, default endpoint, listing paths and fallback policy.
"""

from .agentrouter_provider import AGENTROUTER_CONFIG
from .base import (
    CatalogFallback,
    ConfigurationError,
    CredentialFormat,
    CredentialSpec,
    ModelHandle,
    ProviderConfig,
    ProviderIdentity,
    ProviderRegistry,
)
from .bedrock_provider import BEDROCK_CONFIG
from .credentials import (
    BedrockCredential,
    ResolvedCredential,
    parse_bedrock_config,
    resolve_credentials,
)
from .provider import ModelProvider

__all__ = [
    # Base types
    "CatalogFallback",
    "ConfigurationError",
    "CredentialFormat",
    "CredentialSpec",
    "ModelHandle",
    "ModelProvider",
    "ProviderConfig",
    "ProviderIdentity",
    "ProviderRegistry",
    # Credentials
    "BedrockCredential",
    "ResolvedCredential",
    "parse_bedrock_config",
    "resolve_credentials",
    # Providers
    "AGENTROUTER_CONFIG",
    "BEDROCK_CONFIG",
    "register_default_providers",
]


def register_default_providers() -> None:
    """Register all default model providers.

    Call this at application startup to initialize the provider registry.
    """
    ProviderRegistry.register(ModelProvider(AGENTROUTER_CONFIG))
    ProviderRegistry.register(ModelProvider(BEDROCK_CONFIG))
