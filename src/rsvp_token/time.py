"""Time utilities working in epoch milliseconds."""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to integer milliseconds since the epoch."""
    return (ensure_tz_aware(dt) - EPOCH) // _ONE_MS


def now_ms() -> int:
    """Return the current time in epoch milliseconds."""
    return to_epoch_ms(utc_now())
