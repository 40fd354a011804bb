"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from browser_ide import __version__
from browser_ide.api.deps import SubhostingDep
from browser_ide.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    org_id: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(subhosting: SubhostingDep) -> HealthResponse:
    """Check server health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        org_id=subhosting.org_id,
        timestamp=datetime.now(timezone.utc),
    )
