from .dates import parse_datetime, parse_day, day_bounds

__all__ = [
    "parse_datetime",
    "parse_day",
    "day_bounds",
]
