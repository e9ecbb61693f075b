"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from legislature_api.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware, setup_cors
from legislature_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from legislature_api.api.v1.bills import bills_router
    from legislature_api.api.v1.committees import committees_router
    from legislature_api.api.v1.districts import districts_router
    from legislature_api.api.v1.health import health_router
    from legislature_api.api.v1.legislators import legislators_router
    from legislature_api.api.v1.representatives import representatives_router
    from legislature_api.api.v1.states import states_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(health_router)
    root_router.include_router(states_router)
    root_router.include_router(legislators_router)
    root_router.include_router(bills_router)
    root_router.include_router(committees_router)
    root_router.include_router(representatives_router)
    root_router.include_router(districts_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
