"""Health check endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from bites.api.deps import get_redis
from bites.config import settings
from bites.redis_client import check_redis_connectivity

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "environment": settings.app_env}


@router.get("/ready")
async def ready(redis: Redis = Depends(get_redis)) -> JSONResponse:
    """Readiness probe: 200 when the store answers a PING, 503 otherwise."""
    ok = await check_redis_connectivity(redis)
    return JSONResponse(
        content={"redis": "ok" if ok else "error"},
        status_code=200 if ok else 503,
    )
