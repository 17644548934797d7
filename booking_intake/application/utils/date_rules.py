from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def resolve_timezone(name: str | None, fallback: str) -> str:
    """Return `name` if it is a known IANA zone, otherwise `fallback`."""
    for candidate in (name, fallback):
        if not candidate:
            continue
        try:
            ZoneInfo(candidate)
            return candidate
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return "UTC"


def today_in(tz_name: str, now: datetime | None = None) -> date:
    tz = ZoneInfo(tz_name)
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(tz).date()


def is_date_selectable(candidate: date, today: date) -> bool:
    """Calendar pre-filter: strictly after today and Monday-Friday."""
    return candidate > today and candidate.weekday() < 5


def selectable_dates(today: date, days: int) -> list[date]:
    """Selectable dates in the window (today, today + days]."""
    return [
        today + timedelta(days=offset)
        for offset in range(1, days + 1)
        if is_date_selectable(today + timedelta(days=offset), today)
    ]


def parse_time_of_day(value: str) -> time:
    match = _TIME_OF_DAY.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def compose_scheduled_at(selected_date: date | None, selected_time: str | None, tz_name: str) -> datetime | None:
    """Combine a calendar day and a clock time in the session zone into a UTC instant."""
    if selected_date is None or not selected_time:
        return None
    local = datetime.combine(selected_date, parse_time_of_day(selected_time), tzinfo=ZoneInfo(tz_name))
    return local.astimezone(timezone.utc)


def to_iso_instant(value: datetime) -> str:
    """2026-10-20T17:00:00.000Z"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_long_date(value: date) -> str:
    """Tuesday, October 20, 2026"""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"
