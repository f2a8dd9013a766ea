"""Tests for route keys, TTLs and fetch ranges."""

import asyncio

from conftest import FakeUpstream
from services import matches
from services.cache import TTLCache
from services.football_data import FootballDataClient


def test_keys_embed_utc_dates(clock):
    """Test the rollover key formats."""
    assert matches.today_key(clock) == "matches_today_2026-10-17"
    assert matches.upcoming_key(clock) == "matches_upcoming_from_2026-10-18"


def test_keys_roll_over_at_midnight(clock):
    """Test that crossing midnight UTC changes both keys."""
    clock.advance(11 * 3600 + 59 * 60)  # 23:59
    assert matches.today_key(clock) == "matches_today_2026-10-17"
    clock.advance(60)
    assert matches.today_key(clock) == "matches_today_2026-10-18"
    assert matches.upcoming_key(clock) == "matches_upcoming_from_2026-10-19"


def test_today_fetches_today_to_tomorrow(clock, football_client, upstream):
    """Test the today range and that a second call is cached."""
    cache = TTLCache(clock=clock)

    _, first_cached = asyncio.run(matches.get_today(cache, football_client, clock))
    _, second_cached = asyncio.run(matches.get_today(cache, football_client, clock))

    params = upstream.requests[0].url.params
    assert (params["dateFrom"], params["dateTo"]) == ("2026-10-17", "2026-10-18")
    assert (first_cached, second_cached) == (False, True)
    assert len(upstream.requests) == 1


def test_upcoming_fetches_five_days_from_tomorrow(clock, football_client, upstream):
    """Test the upcoming range."""
    cache = TTLCache(clock=clock)
    asyncio.run(matches.get_upcoming(cache, football_client, clock))

    params = upstream.requests[0].url.params
    assert (params["dateFrom"], params["dateTo"]) == ("2026-10-18", "2026-10-23")


def test_route_ttls_differ(clock, football_client, upstream):
    """Test that upcoming expires after 5 minutes while today lives 30."""
    cache = TTLCache(clock=clock)
    asyncio.run(matches.get_today(cache, football_client, clock))
    asyncio.run(matches.get_upcoming(cache, football_client, clock))

    clock.advance(matches.UPCOMING_TTL_SECONDS)
    _, today_cached = asyncio.run(matches.get_today(cache, football_client, clock))
    _, upcoming_cached = asyncio.run(matches.get_upcoming(cache, football_client, clock))

    assert today_cached is True
    assert upcoming_cached is False
    assert len(upstream.requests) == 3


def test_midnight_rollover_triggers_fresh_fetch(clock, football_client, upstream):
    """Test that a new day means a new key even inside the old entry's TTL."""
    clock.advance(11 * 3600 + 50 * 60)  # 23:50
    cache = TTLCache(clock=clock)
    asyncio.run(matches.get_today(cache, football_client, clock))

    clock.advance(15 * 60)
    _, was_cached = asyncio.run(matches.get_today(cache, football_client, clock))

    assert was_cached is False
    assert upstream.requests[1].url.params["dateFrom"] == "2026-10-18"


def test_failed_fetch_retried_on_next_request(clock):
    """Test that an upstream outage is not pinned in the cache."""
    upstream = FakeUpstream({"message": "down"}, status_code=502)
    client = FootballDataClient("token", clock=clock, transport=upstream.transport)
    cache = TTLCache(clock=clock)

    result, _ = asyncio.run(matches.get_today(cache, client, clock))
    asyncio.run(matches.get_today(cache, client, clock))

    assert result.error_kind == "UpstreamError"
    assert len(upstream.requests) == 2
