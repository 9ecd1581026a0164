"""
Input validation helper functions.
Provides validation for common input types.
"""

import re
from datetime import datetime

MIN_REJECTION_COMMENT_LENGTH = 3


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str) -> bool:
    """
    Validate Philippine phone number format.
    Accepts: +63 9XX XXX XXXX, 639XXXXXXXXX, 09XXXXXXXXX, landline (02) XXXX XXXX

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone:
        return False

    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    patterns = [
        r'^\+639[0-9]{9}$',  # +639XXXXXXXXX
        r'^639[0-9]{9}$',    # 639XXXXXXXXX
        r'^09[0-9]{9}$',     # 09XXXXXXXXX
        r'^0[2-8][0-9]{7,8}$'  # Landline with area code
    ]

    return any(bool(re.match(pattern, cleaned)) for pattern in patterns)


def validate_date_format(date_str: str) -> bool:
    """
    Validate date string format (YYYY-MM-DD).

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    if not date_str:
        return False

    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except ValueError:
        return False


def validate_time_format(time_str: str) -> bool:
    """
    Validate wall-clock time format (HH:MM, 24h).

    Args:
        time_str: Time string to validate

    Returns:
        True if valid format
    """
    if not time_str:
        return False
    return bool(re.match(r'^([01]?\d|2[0-3]):[0-5]\d$', time_str.strip()))


def validate_date_range(start_date: str, end_date: str) -> bool:
    """
    Validate that end date is not before start date.

    Args:
        start_date: Start date (YYYY-MM-DD)
        end_date: End date (YYYY-MM-DD)

    Returns:
        True if valid date range
    """
    try:
        start = datetime.strptime(start_date, '%Y-%m-%d')
        end = datetime.strptime(end_date, '%Y-%m-%d')
        return end >= start
    except (TypeError, ValueError):
        return False


def validate_rejection_comment(comment: str) -> bool:
    """
    A rejection must carry a comment of at least three characters,
    ignoring surrounding whitespace.
    """
    if comment is None:
        return False
    return len(comment.strip()) >= MIN_REJECTION_COMMENT_LENGTH


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize user input by stripping whitespace and optionally truncating.

    Args:
        text: Input text
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
