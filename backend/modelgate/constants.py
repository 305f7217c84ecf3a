"""Constants shared by the provider adapters."""

from __future__ import annotations

from typing import Final

# Used when a listed model does not advertise its context window
DEFAULT_MAX_TOKENS: Final[int] = 8000
MAX_COMPLETION_TOKENS: Final[int] = 8192

# Catalog discovery retries the same URL with x-api-key on these
AUTH_RETRY_STATUSES: Final[frozenset[int]] = frozenset({401, 403})

# Substrings that mark a model as chat-capable when it has no explicit type
CHAT_MODEL_HINTS: Final[tuple[str, ...]] = ("chat", "claude", "sonnet", "assistant")
CHAT_MODEL_TYPE: Final[str] = "chat"
