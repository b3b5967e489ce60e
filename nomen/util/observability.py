"""Logfire setup for the identity service.

Spans and events are emitted straight through ``logfire``:

    with logfire.span("merge_service.merge", source_account_id=str(source)):
        logfire.info("Attributes moved", count=moved)
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from nomen.config import ObservabilitySettings, Settings

SERVICE_NAME = "nomen-identity"
SERVICE_VERSION = "0.1.0"


def _should_send(observability: ObservabilitySettings) -> bool:
    """An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins over having a token."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return observability.logfire_token is not None


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Without a token and without an explicit opt-in, telemetry stays on
    the console.

    Args:
        settings: Application settings
    """
    send = _should_send(settings.observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # Only the route is recorded; hook payloads carry provider claims
    return {
        **attributes,
        "method": getattr(request, "method", None),
        "path": request.url.path if hasattr(request, "url") else None,
    }


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, leaving headers out.

    Headers carry the session token and the hook secret.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace calls to the gateway admin API."""
    logfire.instrument_httpx()
