"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from vidhost.api.deps import StoreDep
from vidhost.config import settings
from vidhost.logging import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    database: bool
    storage: bool


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint that verifies the API is running.",
)
async def health_check() -> HealthResponse:
    """Basic health check - is the API up?"""
    from vidhost import __version__

    return HealthResponse(status="ok", service=settings.service_name, version=__version__)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Verifies the database and the object store are reachable.",
)
def readiness_check(store: StoreDep) -> ReadinessResponse:
    """Readiness check including dependencies."""
    database_ok = False
    try:
        from vidhost.db.session import init_db

        init_db()
        database_ok = True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))

    storage_ok = store.health_check()

    return ReadinessResponse(
        ready=database_ok and storage_ok,
        database=database_ok,
        storage=storage_ok,
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
    description="Simple liveness check for Kubernetes.",
)
async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness check - is the process alive?"""
    return {"status": "alive"}
