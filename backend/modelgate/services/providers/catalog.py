"""Live model discovery for providers exposing a models listing endpoint.

Gateways disagree on where the listing lives and how it is shaped, so
discovery tries a fixed list of candidate URLs and a fixed list of body
shapes, then normalizes whatever it finds into ModelRecord.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, Optional

import httpx

from ...constants import (
    AUTH_RETRY_STATUSES,
    CHAT_MODEL_HINTS,
    CHAT_MODEL_TYPE,
    DEFAULT_MAX_TOKENS,
    MAX_COMPLETION_TOKENS,
)
from ...models import ModelRecord

logger = logging.getLogger(__name__)

# Marks a candidate URL that produced no usable body
_NO_BODY = object()


def candidate_urls(base_url: str, paths: Iterable[str]) -> list[str]:
    """Join each listing path onto the base URL (trailing slashes stripped)."""
    root = base_url.rstrip("/")
    return [f"{root}{path}" for path in paths]


async def _get(
    client: httpx.AsyncClient, url: str, headers: dict[str, str]
) -> Optional[httpx.Response]:
    try:
        return await client.get(url, headers=headers, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"Model listing request to {url} failed: {e}")
        return None


async def _fetch_candidate(client: httpx.AsyncClient, url: str, api_key: str) -> Any:
    response = await _get(
        client,
        url,
        {"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
    )
    if response is not None and response.status_code in AUTH_RETRY_STATUSES:
        logger.debug(f"{url} rejected bearer auth ({response.status_code}), retrying with x-api-key")
        response = await _get(
            client,
            url,
            {"x-api-key": api_key, "Accept": "application/json"},
        )

    if response is None:
        return _NO_BODY
    if not response.is_success:
        logger.debug(f"Model listing at {url} returned {response.status_code}")
        return _NO_BODY

    try:
        return response.json()
    except ValueError:
        logger.debug(f"Model listing at {url} returned a non-JSON body")
        return _NO_BODY


async def fetch_model_listing(
    base_url: str,
    api_key: str,
    paths: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Fetch the first parseable model listing among the candidate URLs.

    Candidates are tried one after another, never in parallel.

    Returns:
        The decoded JSON body, or None when every candidate failed
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient()

    try:
        for url in candidate_urls(base_url, paths):
            body = await _fetch_candidate(client, url, api_key)
            if body is not _NO_BODY:
                logger.info(f"Fetched model listing from {url}")
                return body
    finally:
        if owns_client:
            await client.aclose()

    return None


# Body shape extraction

def _body_is_list(body: Any) -> Optional[list]:
    return body if isinstance(body, list) else None


def _list_under(key: str) -> Callable[[Any], Optional[list]]:
    def extract(body: Any) -> Optional[list]:
        if not isinstance(body, dict):
            return None
        value = body.get(key)
        return value if isinstance(value, list) else None

    return extract


def _first_list_value(body: Any) -> Optional[list]:
    if not isinstance(body, dict):
        return None
    for value in body.values():
        if isinstance(value, list):
            return value
    return None


EXTRACTION_STRATEGIES: tuple[tuple[str, Callable[[Any], Optional[list]]], ...] = (
    ("array", _body_is_list),
    ("models", _list_under("models")),
    ("data", _list_under("data")),
    ("result", _list_under("result")),
    ("items", _list_under("items")),
    ("first list value", _first_list_value),
)


def extract_raw_models(body: Any) -> Optional[list]:
    """Return the raw model entries from a listing body, or None if unrecognized."""
    for name, strategy in EXTRACTION_STRATEGIES:
        raw = strategy(body)
        if raw is not None:
            logger.debug(f"Model listing matched shape: {name}")
            return raw
    return None


# Entry normalization

def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return None
    return value if finite else None


def _model_id(entry: dict) -> Optional[str]:
    for key in ("id", "model_id", "name"):
        value = entry.get(key)
        if value:
            return str(value)
    if entry.get("_id") is not None:
        return str(entry["_id"])
    return None


def is_chat_model(entry: Any) -> bool:
    """Whether a raw listing entry looks like a chat model."""
    if not isinstance(entry, dict):
        return False
    kind = entry.get("type")
    if isinstance(kind, str):
        return kind.lower() == CHAT_MODEL_TYPE
    id_or_name = str(entry.get("id") or entry.get("name") or "").lower()
    return any(hint in id_or_name for hint in CHAT_MODEL_HINTS)


def _price_label(entry: dict) -> str:
    pricing = entry.get("pricing")
    if isinstance(pricing, dict):
        price_in = _number(pricing.get("input"))
        price_out = _number(pricing.get("output"))
        if price_in is not None and price_out is not None:
            return f" - in:${price_in:.2f} out:${price_out:.2f}"
    price = _number(entry.get("price"))
    if price:
        return f" - ${price:.4f}"
    return ""


def _context_length(entry: dict) -> Optional[int]:
    for key in ("context_length", "context"):
        value = _number(entry.get(key))
        if value is not None:
            return int(value)
    return None


def to_model_record(entry: dict, provider: str) -> ModelRecord:
    model_id = _model_id(entry)
    display_name = entry.get("display_name") or entry.get("name") or model_id or "unknown"
    context = _context_length(entry)
    context_label = f" - context {math.floor(context / 1000)}k" if context else ""
    max_token_allowed = context if context is not None else DEFAULT_MAX_TOKENS

    return ModelRecord(
        name=model_id or "",
        label=f"{display_name}{_price_label(entry)}{context_label}",
        provider=provider,
        max_token_allowed=max_token_allowed,
        max_completion_tokens=min(MAX_COMPLETION_TOKENS, max_token_allowed or MAX_COMPLETION_TOKENS),
    )


def dedupe_models(records: Iterable[ModelRecord]) -> list[ModelRecord]:
    """Drop nameless records and repeated names, keeping the first of each."""
    unique: dict[str, ModelRecord] = {}
    for record in records:
        if record.name and record.name not in unique:
            unique[record.name] = record
    return list(unique.values())


def normalize_listing(body: Any, provider: str) -> Optional[list[ModelRecord]]:
    """
    Turn a listing body into de-duplicated chat ModelRecords.

    Returns:
        The records (possibly empty), or None when the body shape is unknown
    """
    raw_models = extract_raw_models(body)
    if raw_models is None:
        return None

    chat_models = [entry for entry in raw_models if is_chat_model(entry)]
    return dedupe_models(to_model_record(entry, provider) for entry in chat_models)
