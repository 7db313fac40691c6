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
    user_store: str
    tokens: str


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

    Reports which user store is configured and whether token secrets are set.
    """
    settings = get_settings()
    tokens_configured = bool(settings.jwt_access_secret and settings.jwt_refresh_secret)
    return ReadinessResponse(
        status="ready" if tokens_configured else "not_ready",
        user_store=settings.user_store,
        tokens="configured" if tokens_configured else "missing",
    )
