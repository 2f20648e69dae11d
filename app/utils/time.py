"""Time utilities (study planner timezone)."""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings


def local_zone(tz_name: Optional[str] = None) -> ZoneInfo:
    """Configured planner timezone."""
    return ZoneInfo(tz_name or settings.TIMEZONE)


def now_local_naive(tz_name: Optional[str] = None) -> datetime:
    """
    Current time in the planner timezone, returned as naive datetime for DB storage.
    """
    return datetime.now(local_zone(tz_name)).replace(tzinfo=None)


def today_local(tz_name: Optional[str] = None) -> date:
    """Calendar date of "today" in the planner timezone."""
    return datetime.now(local_zone(tz_name)).date()


def parse_iso_date(value: str) -> date:
    """
    Parse YYYY-MM-DD (a trailing time part such as "T00:00:00Z" is ignored).

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    return date.fromisoformat(value.strip()[:10])
