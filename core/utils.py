"""
Core utility functions for the bot.
Provides common functionality used across multiple modules.
"""
import math
import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import pytz

from core import constants

_WHITESPACE_RE = re.compile(r"\s+")


def get_today(tz_name: str = "UTC") -> date:
    """
    Get today's date in the given timezone.

    Args:
        tz_name: pytz timezone name

    Returns:
        Current calendar date in that timezone
    """
    return datetime.now(pytz.timezone(tz_name)).date()


def release_window(today: date, lookback_days: int) -> Tuple[str, str]:
    """
    Compute the (start, end) date strings of the release window.

    The window ends today and starts ``lookback_days`` earlier, both ends
    inclusive, formatted as YYYY-MM-DD.

    Example:
        >>> release_window(date(2024, 3, 10), 6)
        ('2024-03-04', '2024-03-10')
    """
    start = today - timedelta(days=lookback_days)
    return (
        start.strftime(constants.LISTING_DATE_FORMAT),
        today.strftime(constants.LISTING_DATE_FORMAT),
    )


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace (newlines included) with one space."""
    return _WHITESPACE_RE.sub(" ", text)


def parse_number(raw: Optional[str], as_int: bool = False):
    """
    Parse a scraped number, raising ValueError on anything non-numeric.

    Thousands separators are removed first ("1,234" -> 1234). Integer
    parsing goes through float so "74.0" is accepted.
    """
    if raw is None:
        raise ValueError("no value")
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        raise ValueError("empty value")
    value = float(cleaned)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    if as_int:
        return int(value)
    return value
