from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Make a naive datetime timezone-aware (UTC). Already-aware datetimes pass through.

    Provider feeds (OpenLigaDB `matchDateTime`, CricAPI `dateTimeGMT`) send
    timestamps without an offset. Wrap them with ensure_utc() before comparing
    against utcnow(), otherwise Python raises "can't compare offset-naive and
    offset-aware datetimes".
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_utc(value: str | datetime) -> datetime:
    """Parse a date string or datetime into a tz-aware UTC datetime.

    Handles ISO 8601 strings (with or without Z/offset) and bare datetimes.
    Always returns a timezone-aware datetime in UTC.
    """
    if isinstance(value, datetime):
        return ensure_utc(value).astimezone(timezone.utc)
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00"))).astimezone(timezone.utc)


def try_parse_utc(value) -> datetime | None:
    """None-safe parse_utc() for untrusted provider payloads."""
    if value is None or value == "":
        return None
    try:
        return parse_utc(value)
    except (ValueError, TypeError, AttributeError):
        return None


def epoch_ms(dt: datetime | None = None) -> int:
    """Milliseconds since the epoch, used for alert ids and snapshot stamps."""
    return int((dt or utcnow()).timestamp() * 1000)
