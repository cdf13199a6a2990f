from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; a bare date means midnight."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid datetime: {value!r}")
    # Stored values are naive local time.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_period_end(value: str) -> datetime:
    """Parse a period end; a bare YYYY-MM-DD covers that whole day."""
    parsed = parse_iso_datetime(value)
    if len(value.strip()) == 10:
        # millisecond precision, matching the DATETIME(3) columns
        return end_of_day(parsed).replace(microsecond=999000)
    return parsed


def parse_optional_range(start: Optional[str], end: Optional[str]) -> tuple[Optional[datetime], Optional[datetime]]:
    start_at = start_of_day(parse_iso_date(start)) if start else None
    end_at = end_of_day(parse_iso_date(end)) if end else None
    return start_at, end_at


def is_weekend(moment: datetime | date) -> bool:
    return moment.weekday() >= 5


def start_of_day(day: datetime | date) -> datetime:
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min)


def end_of_day(day: datetime | date) -> datetime:
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.max)


def millis_between(start: datetime, end: datetime) -> int:
    return int((end - start) // timedelta(milliseconds=1))


def format_millis(value: int) -> str:
    """Render a duration in milliseconds as HH:MM."""
    minutes = int(value) // 60000
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
