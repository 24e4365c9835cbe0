from datetime import datetime, date, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo

from corecare.core.config import settings

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_zoneinfo() -> Optional[ZoneInfo]:
    tz_name = getattr(settings, "DEFAULT_TIMEZONE", None)
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except Exception:
        return None


def now_local() -> datetime:
    """Current wall-clock time in the configured timezone, tzinfo stripped."""
    tz = get_zoneinfo()
    if tz is None:
        return datetime.now(dt_timezone.utc).replace(tzinfo=None)
    return datetime.now(tz).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()


def to_local_naive(dt: datetime | None) -> datetime | None:
    """
    Convert any datetime to local timezone (settings.DEFAULT_TIMEZONE) and strip tzinfo.
    - Aware datetimes are converted to local tz and tzinfo is stripped
    - Naive datetimes are assumed local and returned as-is
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    tz = get_zoneinfo()
    if tz is None:
        return dt.astimezone(dt_timezone.utc).replace(tzinfo=None)
    return dt.astimezone(tz).replace(tzinfo=None)


def format_timestamp(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return to_local_naive(dt).strftime(TIMESTAMP_FORMAT)
