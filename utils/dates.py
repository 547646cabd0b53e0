"""
utils/dates.py
--------------
Date handling for review records.

Release dates arrive in a fixed "DD Mon YY HH:MM ZONE" layout
(e.g. "16 Jul 10 00:00 UTC"); the zone is optional. Stored values keep
only the date + time prefix ("16 Jul 10 00:00"). Unparseable input is
replaced by the current time on create instead of rejecting the request;
updates store it unchanged.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)

DATE_LAYOUT = "%d %b %y %H:%M"

_RELEASE_DATE_RE = re.compile(
    r"(?P<stamp>\d{1,2} [A-Za-z]{3} \d{2} \d{2}:\d{2})"
    r"(?: (?P<zone>[A-Za-z]{3,5}|[+-]\d{4}))?"
)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def format_stamp(value: datetime) -> str:
    """Render a datetime in the stored "DD Mon YY HH:MM" form."""
    return value.strftime(DATE_LAYOUT)


def parse_release_date(value: str) -> Optional[datetime]:
    """
    Parse a release date in the fixed layout.

    Returns:
        The parsed (naive) datetime, or None if the text does not match.
    """
    match = _RELEASE_DATE_RE.fullmatch(value.strip())
    if not match:
        return None
    try:
        return datetime.strptime(match.group("stamp"), DATE_LAYOUT)
    except ValueError:
        # Right shape, impossible date (e.g. "31 Feb 10 00:00")
        return None


def normalize_release_date(value: str, now: Optional[datetime] = None) -> str:
    """
    Normalize a client-supplied release date.

    Args:
        value: Raw text from the request body.
        now: Clock override, used as the fallback value.

    Returns:
        The "DD Mon YY HH:MM" form of the parsed date, or of the current
        time when the input cannot be parsed.
    """
    parsed = parse_release_date(value)
    if parsed is None:
        logger.warning(f"Unparseable releaseDate {value!r}, falling back to current time")
        parsed = now or now_utc()
    return format_stamp(parsed)


def created_stamp(now: Optional[datetime] = None) -> str:
    """Creation timestamp for a new review."""
    return format_stamp(now or now_utc())


def tidy_release_date(value: str) -> str:
    """
    Normalize a release date that parses, keep anything else as sent.

    Used on update, where substituting the clock would make two identical
    requests store different values.
    """
    parsed = parse_release_date(value)
    if parsed is None:
        return value
    return format_stamp(parsed)
