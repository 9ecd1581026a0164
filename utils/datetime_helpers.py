"""Date/time helpers for the portal.

Reservation dates are naive calendar dates (ISO ``YYYY-MM-DD``) and start
times are wall-clock ``HH:MM`` strings; neither is converted between
timezones. The configured timezone is used only for audit timestamps.
"""

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app

TIME_PATTERN = re.compile(r'^([01]?\d|2[0-3]):([0-5]\d)$')


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Asia/Manila')
    return ZoneInfo(tz_name)


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def now_iso() -> str:
    """Current timestamp as an ISO string, seconds precision."""
    return get_now().isoformat(timespec='seconds')


def to_day_key(value) -> str:
    """
    Normalize a date-like value to its ISO calendar day.

    Accepts date, datetime (time of day dropped) or a string starting with
    ``YYYY-MM-DD`` (an ISO timestamp is truncated, not shifted).

    Raises:
        ValueError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10]).isoformat()
    raise ValueError(f'Unsupported date value: {value!r}')


def parse_hhmm(value: str) -> tuple:
    """
    Parse a ``HH:MM`` wall-clock string.

    Returns:
        tuple: (hours, minutes)

    Raises:
        ValueError: If the string is not a valid 24h time
    """
    match = TIME_PATTERN.match((value or '').strip())
    if not match:
        raise ValueError(f'Invalid time: {value!r}')
    return int(match.group(1)), int(match.group(2))


def format_log_date(day_key: str) -> str:
    """Format an ISO day like ``Jun 1, 2025`` for audit messages."""
    d = date.fromisoformat(day_key)
    return f"{d.strftime('%b')} {d.day}, {d.year}"
