from __future__ import annotations

from datetime import datetime, timedelta


def service_datetime_from_seconds(base: datetime, seconds: int) -> datetime:
    """Convert 'seconds since midnight' into an absolute datetime.

    Supports times over 24h (e.g. 25:10, or next-day timetable copies) by
    rolling into the next day. The provided base datetime is treated as the
    service day.
    """

    day0 = base.replace(hour=0, minute=0, second=0, microsecond=0)
    return day0 + timedelta(seconds=int(seconds))


def seconds_since_midnight(dt: datetime) -> int:
    # Treat provided datetime as local service time.
    return dt.hour * 3600 + dt.minute * 60 + dt.second
