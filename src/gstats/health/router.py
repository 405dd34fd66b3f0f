"""Health, readiness, and version endpoints."""

from fastapi import APIRouter

from gstats.config import get_settings
from gstats.redis_client import get_redis, redis_enabled
from gstats.state import get_state

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: 200 while the process is up."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness() -> dict[str, object]:
    """Readiness probe: the service graph is built and Redis (when configured) answers."""
    checks: dict[str, object] = {}

    try:
        get_state()
        checks["state"] = "ok"
    except RuntimeError as exc:
        checks["state"] = f"error: {exc}"

    if redis_enabled():
        try:
            await get_redis().ping()
            checks["redis"] = "ok"
        except Exception as exc:  # noqa: BLE001
            checks["redis"] = f"error: {exc}"

    all_ok = all(v == "ok" for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    """Return API version and environment."""
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
    }
