"""FastAPI application entry point for the football matches API."""

import asyncio
import contextlib
import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import settings
from errors import RateLimitExceededError, register_error_handlers
from services.cache import TTLCache
from services.clock import Clock
from services.football_data import FootballDataClient
from services.rate_limit import RateLimiter

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)

RATE_LIMITED_PREFIX = "/api/"


async def _sweep_periodically(app: FastAPI, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        app.state.cache.sweep()
        app.state.rate_limiter.prune()


def create_app(
    clock: Clock | None = None,
    cache: TTLCache | None = None,
    football_client: FootballDataClient | None = None,
    rate_limiter: RateLimiter | None = None,
) -> FastAPI:
    app = FastAPI(title="Football Matches API", version="1.0.0")

    clock = clock or Clock()
    app.state.clock = clock
    app.state.cache = cache or TTLCache(clock=clock)
    app.state.football_client = football_client or FootballDataClient(
        api_token=settings.football_api_token,
        base_url=settings.football_api_url,
        clock=clock,
    )
    app.state.rate_limiter = rate_limiter or RateLimiter(
        limit=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
        clock=clock,
    )

    # Rate limiting for /api/ only, so /health and the page never count.
    # Must be added before CORS: preflights skip it and 429s get CORS headers.
    @app.middleware("http")
    async def limit_api_requests(request: Request, call_next):
        if not request.url.path.startswith(RATE_LIMITED_PREFIX):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        try:
            state = app.state.rate_limiter.check(client_id)
        except RateLimitExceededError as e:
            return JSONResponse(
                {"error": str(e)},
                status_code=e.status_code,
                headers={
                    "Retry-After": str(e.retry_after),
                    "RateLimit-Limit": str(app.state.rate_limiter.limit),
                    "RateLimit-Remaining": "0",
                    "RateLimit-Reset": str(e.retry_after),
                },
            )

        response: Response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(state.limit)
        response.headers["RateLimit-Remaining"] = str(state.remaining)
        response.headers["RateLimit-Reset"] = str(state.reset_seconds)
        return response

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.frontend import router as frontend_router
    from routes.health import router as health_router
    from routes.matches import router as matches_router

    app.include_router(health_router)
    app.include_router(matches_router)
    app.include_router(frontend_router)

    if settings.public_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.public_dir), name="static")

    @app.on_event("startup")
    async def _start() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (match routes will return 503): %s", ", ".join(missing))
        else:
            logger.info("API token detected")
        app.state.sweeper = asyncio.create_task(
            _sweep_periodically(app, settings.cache_sweep_seconds)
        )

    @app.on_event("shutdown")
    async def _stop() -> None:
        sweeper = getattr(app.state, "sweeper", None)
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper
        app.state.cache.flush()
        logger.info("Shutdown complete. Cache cleared.")

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
