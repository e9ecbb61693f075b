"""Health and info endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from legislature_api import __version__
from legislature_api.core.config import Settings, get_settings

health_router = APIRouter(tags=["health"])


@health_router.get("/health", status_code=200)
async def health_check() -> dict:
    """Liveness check."""
    return {"status": "healthy"}


@health_router.get("/info", status_code=200)
async def info(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Return application version and environment."""
    return {
        "version": __version__,
        "environment": settings.environment,
    }
