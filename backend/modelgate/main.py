"""FastAPI entrypoint for the modelgate backend."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

from .routers import providers_router
from .services.providers import ProviderRegistry, register_default_providers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="modelgate API",
    description="Provider adapters for chat model backends",
    version="1.0.0",
)

app.include_router(providers_router)


@app.on_event("startup")
async def startup_event() -> None:
    """Register providers on startup."""
    register_default_providers()
    names = ", ".join(p.name for p in ProviderRegistry.list_providers())
    logger.info(f"Registered providers: {names}")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
