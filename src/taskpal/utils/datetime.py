"""Date and time helpers shared by the parser, the model and storage.

Task times are naive local datetimes: they are entered by the user in their
own wall-clock time and are never converted between zones.
"""

from datetime import date, datetime
from typing import Optional


def today() -> date:
    """Return the current local date."""
    return date.today()


def now() -> datetime:
    """Return the current local datetime."""
    return datetime.now()


def century_of(year: int) -> int:
    """Return the first year of the century containing ``year``."""
    return year - year % 100


def format_date(value: date) -> str:
    """Format a date for display, e.g. ``26 Aug 2020``."""
    return f"{value.day} {value.strftime('%b %Y')}"


def format_datetime(value: datetime) -> str:
    """Format a datetime for display, e.g. ``26 Aug 2020, 11:59 PM``.

    Args:
        value: Datetime to format

    Returns:
        Day without padding, abbreviated month, year and a 12-hour clock time
    """
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{format_date(value.date())}, {hour}:{value.minute:02d} {meridiem}"


def to_iso_string(value: Optional[datetime]) -> Optional[str]:
    """Convert datetime to an ISO string, or None if input was None."""
    if value is None:
        return None
    return value.isoformat()


def from_iso_string(text: Optional[str]) -> Optional[datetime]:
    """Parse an ISO string written by :func:`to_iso_string`.

    Raises:
        ValueError: If the text is not a valid ISO datetime
    """
    if not text:
        return None
    return datetime.fromisoformat(text)
