"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, status

from app.core.exceptions import StoreUnavailableError
from app.dependencies.services import Store

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
def readiness_check(store: Store):
    """
    Readiness check that verifies the data file is reachable.
    """
    checks = {
        "api": "healthy",
        "document_store": "unknown",
    }

    try:
        store.ping()
        checks["document_store"] = "healthy"
    except StoreUnavailableError as e:
        checks["document_store"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
