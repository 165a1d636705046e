"""
Health Check Endpoints.

Provides liveness and readiness checks.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (entry store readable)
"""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from blogpad.backend.context import AppContext
from blogpad.backend.core.dependencies import Context
from blogpad.backend.core.logging import get_logger
from blogpad.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_store(context: AppContext) -> dict[str, Any]:
    """
    Check that the entries key can be read from the store.

    Returns:
        Dict with status, latency, and optional error message
    """
    key = context.service.repo.key
    try:
        start = utc_now()
        context.store.get(key)
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
        return {
            "status": "healthy",
            "latency_ms": latency_ms,
        }
    except (OSError, ValueError) as e:
        logger.warning("Store health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(context: Context) -> JSONResponse:
    """
    Readiness check.

    Returns 200 if the entry store is readable, 503 otherwise.
    """
    store = check_store(context)
    healthy = store["status"] == "healthy"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "checks": {"store": store},
            "entries": len(context.service.entries),
            "timestamp": utc_now().isoformat(),
        },
    )
