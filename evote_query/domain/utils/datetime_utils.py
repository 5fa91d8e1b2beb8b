"""Date helpers for comparing election timestamps with filter bounds.

Naive datetimes are read as UTC so that timestamps from the listing service
(``2023-02-25T08:00:00Z``) and bounds typed by a user (``2023-02-25``) can be
compared without raising.
"""

from datetime import UTC, date, datetime, time


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 string, accepting a trailing ``Z``.

    Raises:
        ValueError: Not a valid ISO date or datetime
    """
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    if "T" not in text and " " not in text and len(text) == 10:
        return datetime.combine(date.fromisoformat(text), time.min)
    return datetime.fromisoformat(text)


def to_utc(value: datetime) -> datetime:
    """Return an aware datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def coerce_bound(value: object, end_of_day: bool = False) -> datetime | None:
    """Turn a date-range bound into an aware datetime.

    Args:
        value: ``datetime``, ``date``, ISO string, or empty
        end_of_day: Expand a bare date to 23:59:59.999999 instead of midnight

    Returns:
        Aware datetime, or None for an empty bound

    Raises:
        ValueError: The bound is present but cannot be interpreted
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return to_utc(datetime.combine(value, time.max if end_of_day else time.min))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = parse_iso_datetime(text)
        if end_of_day and len(text) == 10:
            parsed = datetime.combine(parsed.date(), time.max)
        return to_utc(parsed)
    msg = f"Unsupported date bound: {value!r}"
    raise ValueError(msg)


def format_bound(value: object) -> str:
    """Render a bound for chip labels (date part only when time is midnight)."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
