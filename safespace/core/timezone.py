# safespace/core/timezone.py
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time with tzinfo attached."""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes coming back from SQLite."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_time(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return as_utc(dt).isoformat()
