"""
Input Validation Helpers

Parses and sanitizes values taken from JSON request bodies.
"""

import html
from datetime import date, datetime


def safe_int(value, default=0, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value not in (None, '') else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def sanitize_text(text, max_length=10000):
    """
    Sanitize free text by HTML-escaping special characters.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = html.escape(text.strip())

    if len(text) > max_length:
        text = text[:max_length] + '...'

    return text


def parse_plan_date(value):
    """
    Parse a plan date given as ``YYYY-MM-DD`` (or a date object).

    Returns:
        datetime.date, or None if the value is missing or malformed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


def parse_bool(value):
    """Interpret JSON booleans and common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)
