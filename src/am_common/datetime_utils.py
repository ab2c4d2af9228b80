"""UTC datetime utilities."""

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware datetime (exact, no float)."""
    return (dt - _EPOCH) // timedelta(milliseconds=1)
