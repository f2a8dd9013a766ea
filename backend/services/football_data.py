"""football-data.org v4 client — fetches fixtures for a date range.

Every failure is folded into a MatchQueryResult carrying ``error`` so callers
never see an exception from ``fetch``. Only fixtures that are still to be
played or currently running are kept.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

import httpx

from errors import (
    InvalidDateRange,
    MatchFeedError,
    MissingCredential,
    NetworkError,
    UpstreamError,
    UpstreamTimeoutError,
)
from services.clock import Clock

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = {"SCHEDULED", "LIVE", "IN_PLAY", "PAUSED"}
DEFAULT_RANGE_DAYS = 5
REQUEST_TIMEOUT_SECONDS = 10
USER_AGENT = "Football-Matches-App/1.0"


@dataclass
class MatchQueryResult:
    matches: list[dict] = field(default_factory=list)
    count: int = 0
    total_available: int | None = None
    error: str | None = None
    error_kind: str | None = None
    timestamp: str | None = None

    @classmethod
    def failed(cls, exc: MatchFeedError, timestamp: str) -> "MatchQueryResult":
        return cls(error=str(exc), error_kind=exc.kind, timestamp=timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape. Unset optional fields are omitted; error_kind stays internal."""
        data: dict[str, Any] = {"matches": self.matches, "count": self.count}
        if self.total_available is not None:
            data["totalAvailable"] = self.total_available
        if self.error is not None:
            data["error"] = self.error
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        return data


def _parse_date(name: str, value: str | date | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidDateRange(name, value) from e


def resolve_date_range(
    date_from: str | date | None, date_to: str | date | None
) -> tuple[date | None, date | None]:
    """Validate both ends; an open-ended range spans five days from ``date_from``."""
    start = _parse_date("dateFrom", date_from)
    end = _parse_date("dateTo", date_to)
    if start is not None and end is None:
        end = start + timedelta(days=DEFAULT_RANGE_DAYS)
    return start, end


def filter_active(matches: list) -> list[dict]:
    return [m for m in matches if isinstance(m, dict) and m.get("status") in ACTIVE_STATUSES]


class FootballDataClient:
    def __init__(
        self,
        api_token: str | None,
        base_url: str = "https://api.football-data.org/v4",
        clock: Clock | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._clock = clock or Clock()
        self._transport = transport

    async def fetch(
        self, date_from: str | date | None = None, date_to: str | date | None = None
    ) -> MatchQueryResult:
        """Fetch fixtures in [date_from, date_to]. Never raises."""
        try:
            return await self._fetch(date_from, date_to)
        except MatchFeedError as e:
            logger.warning("Match fetch failed (%s): %s", e.kind, e)
            return MatchQueryResult.failed(e, timestamp=self._clock.isoformat())

    async def _fetch(self, date_from, date_to) -> MatchQueryResult:
        if not self.api_token:
            raise MissingCredential()

        start, end = resolve_date_range(date_from, date_to)
        params = {}
        if start is not None:
            params["dateFrom"] = start.isoformat()
        if end is not None:
            params["dateTo"] = end.isoformat()

        data = await self._get_json("/matches", params)
        raw = data.get("matches") if isinstance(data, dict) else None
        matches = raw if isinstance(raw, list) else []
        active = filter_active(matches)

        logger.info(
            "Fetched %d matches (%d active) for %s..%s",
            len(matches), len(active), params.get("dateFrom"), params.get("dateTo"),
        )
        return MatchQueryResult(matches=active, count=len(active), total_available=len(matches))

    async def _get_json(self, path: str, params: dict) -> Any:
        headers = {"X-Auth-Token": self.api_token, "User-Agent": USER_AGENT}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                request = client.build_request(
                    "GET", f"{self.base_url}{path}", params=params, headers=headers
                )
                # Stream so the status is known before the body is read.
                resp = await client.send(request, stream=True)
                try:
                    if not resp.is_success:
                        body = await _error_body(resp)
                        raise UpstreamError(f"API Error {resp.status_code}: {body}", resp.status_code)
                    await resp.aread()
                finally:
                    await resp.aclose()
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"Upstream request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Upstream request failed: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError("Upstream returned malformed JSON", resp.status_code) from e


async def _error_body(resp: httpx.Response) -> str:
    try:
        await resp.aread()
    except (httpx.HTTPError, httpx.StreamError):
        return "Unknown error"
    return resp.text
