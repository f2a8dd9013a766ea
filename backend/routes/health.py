"""Health and readiness check routes."""

from fastapi import APIRouter, Request

from config import settings

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "football-matches-api", "commit": settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness probe. Not rate limited."""
    return {"status": "UP", "timestamp": request.app.state.clock.isoformat()}
