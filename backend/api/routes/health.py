"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from modules.access.widgets import WIDGET_REGISTRY

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    widgets: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether Supabase is configured and how many widgets the
    registry loaded. The registry is validated at import, so reaching
    this handler means it is consistent.
    """
    settings = get_settings()
    configured = bool(settings.supabase_url and settings.supabase_service_role_key)
    return ReadinessResponse(
        status="ready",
        database="configured" if configured else "in-memory",
        widgets=len(WIDGET_REGISTRY),
    )
