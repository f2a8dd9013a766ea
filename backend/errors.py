"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings

logger = logging.getLogger(__name__)

API_ENDPOINTS = [
    "GET /api/matches/today",
    "GET /api/matches/upcoming",
]


class MatchFeedError(Exception):
    """Base exception with HTTP status code."""

    kind = "MatchFeedError"

    def __init__(self, message: str, status_code: int = 503):
        super().__init__(message)
        self.status_code = status_code


class InvalidDateRange(MatchFeedError):
    kind = "InvalidDateRange"

    def __init__(self, field: str, value: str):
        super().__init__(f"Invalid {field} format: {value!r}", status_code=400)
        self.field = field
        self.value = value


class MissingCredential(MatchFeedError):
    kind = "MissingCredential"

    def __init__(self):
        super().__init__("API token missing")


class UpstreamError(MatchFeedError):
    """Non-2xx or unparseable response from the matches API."""

    kind = "UpstreamError"

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamTimeoutError(MatchFeedError):
    kind = "TimeoutError"


class NetworkError(MatchFeedError):
    kind = "NetworkError"


class RateLimitExceededError(MatchFeedError):
    def __init__(self, retry_after: int):
        super().__init__("Too many requests. Please try again later.", status_code=429)
        self.retry_after = retry_after


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 404:
            return JSONResponse({"error": exc.detail}, status_code=exc.status_code)
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                {"error": "API endpoint not found", "availableEndpoints": API_ENDPOINTS},
                status_code=404,
            )
        return JSONResponse(
            {"error": "Route not found", "message": f"Cannot {request.method} {request.url.path}"},
            status_code=404,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {
                "error": "Internal server error",
                "message": str(exc) if settings.is_development else "Something went wrong",
            },
            status_code=500,
        )
