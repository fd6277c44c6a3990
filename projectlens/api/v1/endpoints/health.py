"""Health check endpoints for Kubernetes probes."""

from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from projectlens.core.config import get_settings, settings

router = APIRouter()

# Track application start time
APP_START_TIME = datetime.now(timezone.utc)


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    uptime_seconds: float = Field(..., description="Application uptime in seconds")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Application environment")


class ReadinessStatus(BaseModel):
    """Readiness check response model."""

    ready: bool = Field(..., description="Whether the application is ready")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: Dict[str, bool] = Field(
        default_factory=dict, description="Individual readiness checks"
    )
    message: Optional[str] = Field(None, description="Additional status message")


@router.get(
    settings.health_check_path, response_model=HealthStatus, summary="Liveness probe"
)
async def health() -> HealthStatus:
    current = get_settings()
    return HealthStatus(
        status="healthy",
        uptime_seconds=(datetime.now(timezone.utc) - APP_START_TIME).total_seconds(),
        version=current.app_version,
        environment=current.environment.value,
    )


@router.get(
    settings.readiness_check_path,
    response_model=ReadinessStatus,
    summary="Readiness probe",
)
async def ready(response: Response) -> ReadinessStatus:
    current = get_settings()
    checks = {
        "recognized_roles": bool(current.recognized_roles),
    }
    is_ready = all(checks.values())
    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessStatus(
        ready=is_ready,
        checks=checks,
        message=None if is_ready else "No recognized roles configured",
    )
