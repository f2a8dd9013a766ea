"""Match routes — today's fixtures and the upcoming window, served from cache."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from services import matches
from services.football_data import MatchQueryResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches")

UNAVAILABLE_MESSAGE = "Service temporarily unavailable"


def _envelope(request: Request, result: MatchQueryResult, was_cached: bool) -> JSONResponse:
    """Wrap a result for the wire, hiding upstream error detail from clients."""
    now = request.app.state.clock.isoformat()
    body = result.to_dict()
    if result.error:
        logger.warning("Serving 503 for %s: %s (%s)", request.url.path, result.error, result.error_kind)
        body["error"] = UNAVAILABLE_MESSAGE
        return JSONResponse(body, status_code=503)

    body["cached"] = was_cached
    body["cacheTime" if was_cached else "fetchTime"] = now
    return JSONResponse(body)


@router.get("/today")
async def today(request: Request) -> JSONResponse:
    """Fixtures for today and tomorrow that have not finished."""
    state = request.app.state
    result, was_cached = await matches.get_today(state.cache, state.football_client, state.clock)
    return _envelope(request, result, was_cached)


@router.get("/upcoming")
async def upcoming(request: Request) -> JSONResponse:
    """Fixtures over the next few days, starting tomorrow."""
    state = request.app.state
    result, was_cached = await matches.get_upcoming(state.cache, state.football_client, state.clock)
    return _envelope(request, result, was_cached)
