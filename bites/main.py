"""FastAPI application factory and configuration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bites.api.cuisines import router as cuisines_router
from bites.api.health import router as health_router
from bites.api.restaurants import router as restaurants_router
from bites.config import settings
from bites.errors import BitesError
from bites.redis_client import check_redis_connectivity, create_redis
from bites.schemas.restaurant import ErrorResponse
from bites.services import duplicates

# Configure logging
logging.basicConfig(
    level=logging.DEBUG
    if settings.debug
    else getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Owns the store client and the outbound HTTP client for the whole process.
    """
    logger.info("Starting application...")

    app.state.redis = create_redis()
    app.state.http_client = httpx.AsyncClient()

    if await check_redis_connectivity(app.state.redis):
        logger.info("Redis connectivity verified")
        await duplicates.ensure_filter(app.state.redis)
    else:
        logger.error("Redis connectivity check FAILED at startup")

    yield

    logger.info("Shutting down application...")
    await app.state.http_client.aclose()
    await app.state.redis.aclose()


# Create FastAPI app
app = FastAPI(
    title="Bites",
    description="Restaurants, cuisines, reviews and ratings over Redis Stack",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
if settings.cors_origins:
    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include routers
app.include_router(health_router)
app.include_router(restaurants_router)
app.include_router(cuisines_router)


def _error(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(BitesError)
async def bites_error_handler(request: Request, exc: BitesError) -> JSONResponse:
    """Render a typed core failure with its status code."""
    logger.warning(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return _error(exc.status_code, ErrorResponse(error=exc.message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return _error(400, ErrorResponse(error="Validation failed", details=details))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    message = (
        "An unexpected error occurred"
        if settings.app_env == "production"
        else str(exc) or "Internal server error"
    )
    return _error(500, ErrorResponse(error=message))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bites.main:app", host="0.0.0.0", port=settings.port)
