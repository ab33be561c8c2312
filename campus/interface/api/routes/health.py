"""Liveness endpoint."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from campus.config import Settings
from campus.util.clock import utcnow
from campus.util.observability import SERVICE_NAME

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    service: str
    status: str
    environment: str
    git_sha: str
    checked_at: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up. Does not touch the database."""
    return HealthResponse(
        service=SERVICE_NAME,
        status="healthy",
        environment=settings.environment,
        git_sha=settings.git_sha,
        checked_at=utcnow(),
    )
