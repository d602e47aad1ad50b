"""
Date helpers shared by the visit model and the query services.

All timestamps are stored naive in server-local time; aware inputs are
converted to local time before the tzinfo is dropped.
"""
from datetime import date, datetime, time

END_OF_DAY = time(23, 59, 59, 999000)


def parse_datetime(value):
    """Parse an API timestamp into a naive local datetime.

    Accepts datetime/date objects, ISO-8601 strings (date-only or full,
    with or without offset, trailing ``Z`` allowed) and epoch milliseconds.
    Returns None for None or blank strings; raises ValueError otherwise.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid date: {value!r}")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"Invalid date: {value!r}") from None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_day(value):
    """Return the calendar day (server-local) named by ``value``."""
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError("Date is required")
    return parsed.date()


def day_bounds(day):
    """(00:00:00.000, 23:59:59.999) of the given calendar day."""
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def isoformat_or_none(value):
    return value.isoformat() if value else None
