"""Clock implementations"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import ConfigurationError
from .interfaces import ClockInterface


class SystemClock(ClockInterface):
    """Wall clock, in local time or in a configured time zone"""

    def __init__(self, timezone: str | None = None):
        self._tz: ZoneInfo | None = None
        if timezone:
            try:
                self._tz = ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ConfigurationError("timezone", timezone, str(e)) from e

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock(ClockInterface):
    """Clock frozen at a given moment; advance() moves it forward"""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **delta: float) -> datetime:
        self.moment = self.moment + timedelta(**delta)
        return self.moment
