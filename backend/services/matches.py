"""Route-level match lookups: rollover cache keys, TTLs and fetch ranges.

Keys embed the UTC calendar date, so each route holds at most one live
entry and rolls over at midnight without explicit eviction.
"""

import logging

from services.cache import TTLCache
from services.clock import Clock
from services.football_data import FootballDataClient, MatchQueryResult

logger = logging.getLogger(__name__)

TODAY_TTL_SECONDS = 30 * 60
UPCOMING_TTL_SECONDS = 5 * 60


def today_key(clock: Clock) -> str:
    return f"matches_today_{clock.today().isoformat()}"


def upcoming_key(clock: Clock) -> str:
    return f"matches_upcoming_from_{clock.date_offset(1).isoformat()}"


async def get_today(
    cache: TTLCache, client: FootballDataClient, clock: Clock
) -> tuple[MatchQueryResult, bool]:
    """Fixtures for [today, tomorrow], cached for 30 minutes."""
    today = clock.today()
    tomorrow = clock.date_offset(1)
    return await cache.get_or_load(
        today_key(clock),
        TODAY_TTL_SECONDS,
        lambda: client.fetch(today, tomorrow),
    )


async def get_upcoming(
    cache: TTLCache, client: FootballDataClient, clock: Clock
) -> tuple[MatchQueryResult, bool]:
    """Fixtures from tomorrow over the default window, cached for 5 minutes."""
    tomorrow = clock.date_offset(1)
    return await cache.get_or_load(
        upcoming_key(clock),
        UPCOMING_TTL_SECONDS,
        lambda: client.fetch(tomorrow),
    )
