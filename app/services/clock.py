"""Time sources

All reservation times are naive datetimes in restaurant-local time.
Offset-aware values coming in over the API are converted with
``to_local_naive`` before they reach the services.
"""

from datetime import datetime, timedelta
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

from app.config import settings


def restaurant_zone() -> Optional[ZoneInfo]:
    """Configured restaurant time zone; None means the server's own zone"""
    if not settings.restaurant_timezone:
        return None
    return ZoneInfo(settings.restaurant_timezone)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware datetime to naive restaurant-local time"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(restaurant_zone()).replace(tzinfo=None)


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in restaurant-local time"""

    def now(self) -> datetime:
        zone = restaurant_zone()
        if zone is None:
            return datetime.now()
        return datetime.now(zone).replace(tzinfo=None)


class FixedClock:
    """Manually driven clock for tests and replays"""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now
