"""Liveness probe."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from nomen.config import Settings
from nomen.util.observability import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Build and environment of the running process."""

    status: str
    service: str
    version: str
    git_sha: str
    environment: str
    checked_at: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is serving requests.

    The database is not touched; readiness is the orchestrator's concern.
    """
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        git_sha=settings.git_sha,
        environment=settings.environment,
        checked_at=datetime.now(timezone.utc),
    )
