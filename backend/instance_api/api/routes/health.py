"""Health & Readiness Probes — welcome page, liveness and readiness endpoints.

Invariants:
    - GET /api/ always returns the HTML welcome page
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if the instance store is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Store read through the module attribute at call time: the lifespan replaces it
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse, JSONResponse

import instance_api.infrastructure.instance_store as store_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])
welcome_router = APIRouter(prefix="/api", tags=["health"])


@welcome_router.get("/", response_class=HTMLResponse)
async def welcome():
    return "<h1>Welcome to Kai's api!</h1>"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "instance-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes store connectivity."""
    store = store_module.store
    store_ok = await store.health_check() if store else False
    if not store_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "store_unavailable",
            },
        )
    return {"status": "ready", "checks": {"store": "healthy"}}
