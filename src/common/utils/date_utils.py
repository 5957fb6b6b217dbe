"""Utility functions for ledger and transaction timestamps."""

from datetime import datetime

import pytz

from src.common.config.settings import settings

TIMESTAMP_FORMAT = "%Y%m%d:%H:%M"


def now() -> datetime:
    """Returns the current time in the configured timezone, or system local time."""
    if settings.TIMEZONE:
        return datetime.now(pytz.timezone(settings.TIMEZONE))
    return datetime.now()


def format_timestamp(dt: datetime) -> str:
    """Formats a datetime as YYYYMMDD:HH:MM."""
    return dt.strftime(TIMESTAMP_FORMAT)


def current_timestamp() -> str:
    """Current time formatted for ledger blocks and transaction records."""
    return format_timestamp(now())


def parse_timestamp(timestamp: str) -> datetime | None:
    """Parses a YYYYMMDD:HH:MM string back to a naive datetime."""
    if not timestamp:
        return None
    try:
        return datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except (ValueError, TypeError):
        return None
