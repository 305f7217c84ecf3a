"""Amazon Bedrock provider, configured by a single JSON credential blob.

Bedrock has no listing endpoint here, so dynamic discovery returns the static
models.
"""

from __future__ import annotations

from anthropic import AsyncAnthropicBedrock

from ...models import ModelRecord
from .base import CredentialFormat, CredentialSpec, ProviderConfig, ProviderIdentity
from .credentials import BedrockCredential

NAME = "AmazonBedrock"


def create_bedrock_client(credential: BedrockCredential, model: str) -> AsyncAnthropicBedrock:
    return AsyncAnthropicBedrock(**credential.client_kwargs())


BEDROCK_CONFIG = ProviderConfig(
    identity=ProviderIdentity(
        name=NAME,
        api_key_link="https://console.aws.amazon.com/iam/home",
    ),
    # The blob carries the region, so there is no base URL key
    credentials=CredentialSpec(base_url_key="", api_token_key="AWS_BEDROCK_CONFIG"),
    static_models=(
        ModelRecord(
            name="us.anthropic.claude-3-7-sonnet-20250219-v1:0",
            label="Claude 3.7 Sonnet (Bedrock)",
            provider=NAME,
            max_token_allowed=4096,
        ),
    ),
    client_factory=create_bedrock_client,
    credential_format=CredentialFormat.JSON_BLOB,
)
