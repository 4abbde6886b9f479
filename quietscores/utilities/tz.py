"""Timezone utilities.

Single source of truth for turning feed timestamps into display strings.
Display settings (timezone, time_format) come from quietscores.config.
"""

from datetime import UTC, date, datetime

from quietscores.config import get_time_format, get_user_timezone

__all__ = [
    "parse_event_date",
    "to_user_tz",
    "local_date",
    "format_time",
    "format_display_time",
    "today_local",
]


def parse_event_date(value: str | None) -> datetime | None:
    """Parse an ISO-8601 feed timestamp ("2025-01-05T18:00Z") to aware UTC.

    Returns None when the value is missing or unparseable.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def to_user_tz(dt: datetime) -> datetime:
    """Convert an aware datetime to the configured display timezone."""
    if dt.tzinfo is None:
        raise ValueError("Cannot convert naive datetime - must be timezone-aware")
    return dt.astimezone(get_user_timezone())


def local_date(value: str | None) -> date | None:
    """Calendar date of a feed timestamp in the display timezone."""
    if isinstance(value, str) and len(value) == 10:
        # Date-only value: already a calendar date
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    dt = parse_event_date(value)
    if dt is None:
        return None
    return to_user_tz(dt).date()


def format_time(dt: datetime) -> str:
    """Format time using the configured 12h/24h preference (e.g. '7:30 PM')."""
    local_dt = to_user_tz(dt)
    if get_time_format() == "24h":
        return local_dt.strftime("%H:%M")
    return local_dt.strftime("%-I:%M %p")


def format_display_time(value: str | None) -> str:
    """Start time for a scheduled game, or 'TBD' when the date is unusable."""
    dt = parse_event_date(value)
    if dt is None:
        return "TBD"
    return format_time(dt)


def today_local() -> date:
    """Today's date in the display timezone."""
    return datetime.now(get_user_timezone()).date()
