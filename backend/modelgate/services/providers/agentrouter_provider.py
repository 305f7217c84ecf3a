"""AgentRouter provider: an OpenAI-compatible gateway for Claude models."""

from __future__ import annotations

from openai import AsyncOpenAI

from ...models import ModelRecord
from .base import CatalogFallback, CredentialSpec, ProviderConfig, ProviderIdentity
from .credentials import ResolvedCredential

NAME = "AgentRouter"
DEFAULT_BASE_URL = "https://agentrouter.org/"


def create_openai_like_client(credential: ResolvedCredential, model: str) -> AsyncOpenAI:
    """Build an OpenAI SDK client pointed at the gateway.

    The model is bound by the returned ModelHandle, not the client.
    """
    return AsyncOpenAI(base_url=credential.base_url, api_key=credential.api_key)


AGENTROUTER_CONFIG = ProviderConfig(
    identity=ProviderIdentity(name=NAME, api_key_link="https://agentrouter.org/"),
    credentials=CredentialSpec(
        base_url_key="ANTHROPIC_BASE_URL",
        api_token_key="ANTHROPIC_API_KEY",
    ),
    static_models=(
        ModelRecord(
            name="claude-sonnet-4-5-20250929",
            label="Claude Sonnet 4.5",
            provider=NAME,
            max_token_allowed=200000,
            max_completion_tokens=8192,
        ),
    ),
    client_factory=create_openai_like_client,
    default_base_url=DEFAULT_BASE_URL,
    alias_base_url_keys=("AGENT_ROUTER_BASE_URL",),
    alias_api_token_keys=("AGENT_ROUTER_API_KEY",),
    alias_provider_names=("Anthropic",),
    catalog_paths=("/v1beta/models", "/v1/models", "/models"),
    empty_catalog_policy=CatalogFallback.STATIC,
)
