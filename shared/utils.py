from datetime import datetime, timezone

from dateutil import parser as date_parser


def parse_datetime(date_str: str | None) -> datetime | None:
    """Parse an email Date header (or similar) into an aware datetime."""
    if not date_str:
        return None
    try:
        dt = date_parser.parse(date_str, fuzzy=True)
    except (ValueError, OverflowError, TypeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

