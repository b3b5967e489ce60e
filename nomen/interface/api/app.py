"""FastAPI application for the identity service."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nomen.config import Settings
from nomen.interface.api.routes import health, hooks, merge, profile
from nomen.interface.error import register_error_handlers
from nomen.util.di.container import create_container, setup_di
from nomen.util.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_httpx,
)

_LOCAL_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Assemble the API.

    Logfire has to be configured before this runs; ``scripts/start_app.py``
    does so.

    Args:
        container: Container to resolve dependencies from. Defaults to the
            production container; tests pass one with in-memory components.
    """
    settings = Settings()
    instrument_httpx()

    app_instance = FastAPI(
        title="Nomen API",
        description="Accounts, profiles and identity linking behind the authentication gateway",
        version=SERVICE_VERSION,
    )
    instrument_fastapi(app_instance)

    # The session token may ride in the auth_token cookie
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, *_LOCAL_ORIGINS],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    for router in (health.router, hooks.router, profile.router, merge.router):
        app_instance.include_router(router)

    return app_instance


app = create_app()
