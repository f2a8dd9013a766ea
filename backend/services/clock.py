"""Clock abstraction so cache expiry and date-based keys can be tested."""

import time
from datetime import date, datetime, timedelta, timezone


class Clock:
    """Wall clock. Calendar dates are UTC, matching the upstream's date params."""

    def time(self) -> float:
        return time.time()

    def now(self) -> datetime:
        return datetime.fromtimestamp(self.time(), tz=timezone.utc)

    def today(self) -> date:
        return self.now().date()

    def date_offset(self, days: int) -> date:
        return self.today() + timedelta(days=days)

    def isoformat(self) -> str:
        """Current instant as an ISO-8601 string with millisecond precision."""
        return self.now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
