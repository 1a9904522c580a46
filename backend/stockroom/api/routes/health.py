"""Health & Readiness — liveness plus database and catalog readiness.

Invariants:
    - GET /health/ returns 200 whenever the process is up (liveness)
    - GET /health/ready returns 503 if the bridge's database is unreachable
      or the orchestrator has not been built yet
    - Readiness never calls the remote store: it reads local catalog state only

Design Decisions:
    - db_manager read through the module at request time: it is set during lifespan
    - An empty or not-yet-fetched mirror is still "ready": the catalog serves an
      empty view and POST /items/refresh can populate it
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from stockroom.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "stockroom-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness_check(request: Request):
    """Database reachable and orchestrator initialized."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    orchestrator = getattr(request.app.state, "orchestrator", None)

    if not db_ok or orchestrator is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable" if not db_ok else "catalog_not_initialized",
            },
        )
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "catalog": {
                "collection": orchestrator.collection,
                "mirror_size": len(orchestrator.mirror),
                "loading": orchestrator.loading,
                "in_flight": (
                    orchestrator.in_flight.describe() if orchestrator.in_flight else None
                ),
            },
        },
    }
