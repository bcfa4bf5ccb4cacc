from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime to UTC.

    SQLite hands back naive datetimes even for timezone-aware columns; those are
    assumed to already be in UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_event_datetime(dt: datetime | None) -> str:
    """Format an event timestamp for emails, e.g. '25 December 2026, 19:00 UTC'."""
    if dt is None:
        return ""
    return as_utc(dt).strftime("%d %B %Y, %H:%M UTC")
