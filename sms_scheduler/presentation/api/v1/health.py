import structlog
from fastapi import APIRouter, Depends, Response, status

from ....bootstrap import Container
from ....infrastructure.logging import Timer
from ..dependencies import get_container

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/health", summary="Health check")
async def health() -> dict:
    """Basic liveness check."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness check")
async def readiness(response: Response, container: Container = Depends(get_container)) -> dict:
    """
    Readiness check covering the message store and, when enabled, the poll loop.

    Answers 503 while any check is unhealthy so that load balancers stop
    routing to the instance.
    """
    checks = {}

    try:
        with Timer() as t:
            await container.database.ping()
        checks["database"] = {"status": "healthy", "latency_ms": t.duration_ms}
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        checks["database"] = {"status": "unhealthy", "error": str(e)}

    if container.settings.scheduler_enabled:
        checks["poll_scheduler"] = {
            "status": "healthy" if container.poll_scheduler.running else "unhealthy",
            "interval_seconds": container.poll_scheduler.interval_seconds,
        }

    ready = all(c["status"] == "healthy" for c in checks.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ready" if ready else "degraded",
        "delivery_backend": container.backend.name,
        "checks": checks,
    }
