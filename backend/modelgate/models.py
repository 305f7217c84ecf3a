from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ModelRecord(BaseModel):
    """A model a provider can serve, as shown to the host application."""

    name: str
    label: str
    provider: str
    max_token_allowed: int = Field(alias="maxTokenAllowed")
    max_completion_tokens: Optional[int] = Field(default=None, alias="maxCompletionTokens")

    class Config:
        populate_by_name = True


class ProviderSetting(BaseModel):
    """User-supplied settings for one provider."""

    enabled: bool = True
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    class Config:
        populate_by_name = True


class ProviderSummary(BaseModel):
    name: str
    api_key_link: str = Field(alias="apiKeyLink")
    static_models: list[ModelRecord] = Field(alias="staticModels")

    class Config:
        populate_by_name = True


class ModelListRequest(BaseModel):
    """Request body for dynamic model discovery."""

    api_keys: dict[str, str] = Field(default_factory=dict, alias="apiKeys")
    provider_settings: dict[str, ProviderSetting] = Field(
        default_factory=dict, alias="providerSettings"
    )

    class Config:
        populate_by_name = True
