"""Credential resolution for model providers.

Credentials can come from three places, consulted in a fixed order:

1. explicit api keys sent with the request (keyed by provider name or by
   environment-style key name)
2. per-provider settings (``ProviderSetting.api_key`` / ``base_url``)
3. the server process environment

The base URL additionally falls back to the provider's literal default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional

from ...models import ProviderSetting
from .base import ConfigurationError, CredentialFormat, ProviderConfig

logger = logging.getLogger(__name__)

BEDROCK_REQUIRED_FIELDS = ("region", "accessKeyId", "secretAccessKey")


@dataclass(frozen=True)
class ResolvedCredential:
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class BedrockCredential:
    region: str
    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        """Serialize with the same keys the JSON blob uses."""
        data = {
            "region": self.region,
            "accessKeyId": self.access_key_id,
            "secretAccessKey": self.secret_access_key,
        }
        if self.session_token:
            data["sessionToken"] = self.session_token
        return data

    def client_kwargs(self) -> dict[str, str]:
        """Keyword arguments for anthropic.AsyncAnthropicBedrock."""
        kwargs = {
            "aws_region": self.region,
            "aws_access_key": self.access_key_id,
            "aws_secret_key": self.secret_access_key,
        }
        if self.session_token:
            kwargs["aws_session_token"] = self.session_token
        return kwargs


def _non_empty(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _api_key_candidates(
    config: ProviderConfig,
    api_keys: Mapping[str, str],
    provider_settings: Mapping[str, ProviderSetting],
    env: Mapping[str, str],
) -> Iterator[tuple[str, Optional[str]]]:
    key_names = [config.credentials.api_token_key, *config.alias_api_token_keys]
    key_names = [k for k in key_names if k]

    yield f"api_keys[{config.name!r}]", api_keys.get(config.name)
    for key in key_names:
        yield f"api_keys[{key!r}]", api_keys.get(key)
    for name in (config.name, *config.alias_provider_names):
        setting = provider_settings.get(name)
        yield f"provider_settings[{name!r}].api_key", setting.api_key if setting else None
    for key in key_names:
        yield f"env[{key!r}]", env.get(key)


def _base_url_candidates(
    config: ProviderConfig,
    api_keys: Mapping[str, str],
    provider_settings: Mapping[str, ProviderSetting],
    env: Mapping[str, str],
) -> Iterator[tuple[str, Optional[str]]]:
    key_names = [config.credentials.base_url_key, *config.alias_base_url_keys]
    key_names = [k for k in key_names if k]

    for key in key_names:
        yield f"api_keys[{key!r}]", api_keys.get(key)
    for name in (config.name, *config.alias_provider_names):
        setting = provider_settings.get(name)
        yield f"provider_settings[{name!r}].base_url", setting.base_url if setting else None
    for key in key_names:
        yield f"env[{key!r}]", env.get(key)
    if config.default_base_url:
        yield "default base URL", config.default_base_url


def _first_non_empty(
    candidates: Iterator[tuple[str, Optional[str]]],
    tried: list[str],
) -> Optional[str]:
    for label, value in candidates:
        tried.append(label)
        resolved = _non_empty(value)
        if resolved:
            return resolved
    return None


def resolve_credentials(
    config: ProviderConfig,
    api_keys: Optional[Mapping[str, str]] = None,
    provider_settings: Optional[Mapping[str, ProviderSetting]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ResolvedCredential:
    """
    Resolve a provider's base URL and api key.

    Each value is resolved independently; the first non-empty candidate wins.
    Nothing is raised here: callers decide whether a missing value is fatal.

    Args:
        config: Provider configuration (key names, aliases, default URL)
        api_keys: Explicit keys sent by the caller
        provider_settings: Settings keyed by provider name
        env: Server environment

    Returns:
        ResolvedCredential with every consulted source recorded in order
    """
    api_keys = api_keys or {}
    provider_settings = provider_settings or {}
    env = env or {}

    tried: list[str] = []
    api_key = _first_non_empty(
        _api_key_candidates(config, api_keys, provider_settings, env), tried
    )
    base_url = None
    if config.credential_format is CredentialFormat.URL_AND_KEY:
        base_url = _first_non_empty(
            _base_url_candidates(config, api_keys, provider_settings, env), tried
        )

    logger.debug(
        f"Resolved {config.name} credentials: api key {'set' if api_key else 'missing'}, "
        f"base URL {base_url or 'n/a'}"
    )

    return ResolvedCredential(base_url=base_url, api_key=api_key, sources=tuple(tried))


def require_credentials(config: ProviderConfig, credential: ResolvedCredential) -> None:
    """Raise ConfigurationError unless every value the provider needs is present."""
    missing = []
    if not credential.api_key:
        missing.append("api key")
    if config.credential_format is CredentialFormat.URL_AND_KEY and not credential.base_url:
        missing.append("base URL")
    if not missing:
        return

    tried = ", ".join(credential.sources) or "none"
    raise ConfigurationError(
        f"Missing {' and '.join(missing)} for {config.name} provider. Tried: {tried}",
        provider=config.name,
        reason="missing_credentials",
        sources=credential.sources,
    )


def parse_bedrock_config(raw: str, provider: str = "AmazonBedrock") -> BedrockCredential:
    """
    Parse a Bedrock JSON credential blob.

    Raises:
        ConfigurationError: reason "invalid_format" when the blob is not JSON,
            "missing_fields" when region, accessKeyId or secretAccessKey is absent
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"{provider} configuration has an invalid format. Provide a JSON string "
            "containing region, accessKeyId, and secretAccessKey.",
            provider=provider,
            reason="invalid_format",
        ) from None

    if not isinstance(parsed, dict):
        parsed = {}

    missing = [name for name in BEDROCK_REQUIRED_FIELDS if not _non_empty(parsed.get(name))]
    if missing:
        raise ConfigurationError(
            f"{provider} configuration is missing required fields: {', '.join(missing)}",
            provider=provider,
            reason="missing_fields",
        )

    return BedrockCredential(
        region=parsed["region"],
        access_key_id=parsed["accessKeyId"],
        secret_access_key=parsed["secretAccessKey"],
        session_token=_non_empty(parsed.get("sessionToken")),
    )
