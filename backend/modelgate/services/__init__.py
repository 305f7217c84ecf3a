"""Services layer for modelgate."""

from .providers import ModelProvider, ProviderRegistry, register_default_providers

__all__ = ["ModelProvider", "ProviderRegistry", "register_default_providers"]
