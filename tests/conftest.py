"""Shared fixtures: a controllable clock and a fake football-data.org upstream."""

from datetime import datetime, timezone

import httpx
import pytest

from services.clock import Clock
from services.football_data import FootballDataClient

START = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc).timestamp()


class FakeClock(Clock):
    def __init__(self, start: float = START):
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeUpstream:
    """Records every request and answers with a canned response."""

    def __init__(self, payload=None, status_code: int = 200):
        self.payload = payload if payload is not None else {"matches": []}
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream(
        {
            "matches": [
                {"id": 1, "status": "SCHEDULED"},
                {"id": 2, "status": "IN_PLAY"},
                {"id": 3, "status": "FINISHED"},
                {"id": 4, "status": "PAUSED"},
                {"id": 5, "status": "POSTPONED"},
                {"id": 6, "status": "LIVE"},
            ]
        }
    )


@pytest.fixture
def football_client(upstream, clock) -> FootballDataClient:
    return FootballDataClient(api_token="test-token", clock=clock, transport=upstream.transport)
