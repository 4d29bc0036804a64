"""FastAPI application for the weather trade analyzer service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import redis.asyncio as redis
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_cache import FastAPICache
from fastapi_cache.backends.redis import RedisBackend
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_trader.api.endpoints import router as weather_router
from weather_trader.api.favorites import router as favorites_router
from weather_trader.api.trading import router as trading_router
from weather_trader.config import HOST, PORT, DEBUG, REDIS_URL, CACHE_PREFIX
from weather_trader.logging_config import configure_logging
from weather_trader.storage.favorites import FavoritesStore
from weather_trader.weather.models import ErrorResponse
from weather_trader.weather.service import WeatherService

configure_logging(logging.DEBUG if DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Weather Trade Analyzer"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the Redis connections and the shared weather service for the app's lifetime."""
    logger.info(f"Connecting to Redis at {REDIS_URL}")
    # fastapi-cache stores bytes; the favorites store reads decoded strings
    cache_redis = redis.from_url(REDIS_URL)
    store_redis = redis.from_url(REDIS_URL, decode_responses=True)
    weather_service = WeatherService()

    FastAPICache.init(RedisBackend(cache_redis), prefix=CACHE_PREFIX)
    app.state.favorites_store = FavoritesStore(store_redis)
    app.state.weather_service = weather_service
    logger.info(f"{SERVICE_NAME} started with Redis cache and favorites store")

    try:
        yield
    finally:
        logger.info(f"Shutting down {SERVICE_NAME}")
        await weather_service.aclose()
        await store_redis.aclose()
        await cache_redis.aclose()


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=exc.headers,
    )


def create_app() -> FastAPI:
    """Build the application with CORS, error rendering and all API routers.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="Weather forecasts, climate comparison and weather-driven trade ideas",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    for router in (weather_router, favorites_router, trading_router):
        app.include_router(router)

    @app.get("/api", tags=["root"])
    async def api_index() -> dict:
        """List the service's entry points."""
        return {
            "message": SERVICE_NAME,
            "docs": "/docs",
            "health": "/api/health",
            "trading": "/api/trading/analyze",
        }

    return app


app = create_app()


def main() -> None:
    """Run the service with uvicorn."""
    logger.info(f"Starting {SERVICE_NAME} on {HOST}:{PORT}")
    uvicorn.run(
        "weather_trader.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )


if __name__ == "__main__":
    main()
