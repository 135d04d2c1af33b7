"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_ms() -> int:
    """Milliseconds since the epoch, as sent in server:reload."""
    return int(utc_now().timestamp() * 1000)
