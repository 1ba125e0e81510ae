"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    identity_backend: str
    supabase: str


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

    Reports whether the identity backend has the configuration it needs.
    The in-memory backend is always ready.
    """
    settings = get_settings()
    configured = bool(
        settings.supabase_url
        and settings.supabase_service_role_key
        and settings.supabase_jwt_secret
    )
    ready = configured or settings.identity_backend == "memory"
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        identity_backend=settings.identity_backend,
        supabase="configured" if configured else "not_configured",
    )
