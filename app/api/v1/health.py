"""Health check endpoints."""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

SERVICE_NAME = "tasklist-rbac"
SERVICE_VERSION = "1.0.0"

# Mounted under /api/v1
router = APIRouter()

# Mounted at the root for orchestrator probes
probes = APIRouter()


@router.get("/ping")
async def ping() -> dict:
    """Simple ping endpoint for debugging."""
    return {"ping": "pong"}


@probes.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check: is the process running?"""
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@probes.get("/ready")
async def readiness_check(request: Request):
    """Readiness check: can the service handle traffic?"""
    checks: dict[str, str] = {}

    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception:
        checks["database"] = "unavailable"

    try:
        await request.app.state.redis.ping()
        checks["redis"] = "ok"
    except Exception:
        checks["redis"] = "unavailable"

    all_ok = all(v == "ok" for v in checks.values())
    payload = {"status": "ready" if all_ok else "degraded", "checks": checks}

    if not all_ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)
    return payload
