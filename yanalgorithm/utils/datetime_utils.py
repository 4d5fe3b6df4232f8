"""Date and time utilities."""

from datetime import date, datetime
from typing import Optional, Union

DayLike = Union[date, datetime, str]


def to_day(value: Union[date, datetime]) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_day(value: Optional[DayLike]) -> Optional[date]:
    """Parse an ISO date or datetime string (or date object) into a day."""
    if value is None or value == '':
        return None
    if isinstance(value, (date, datetime)):
        return to_day(value)

    text = str(value).strip()
    # Accept trailing 'Z' from JavaScript ISO timestamps
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    if 'T' in text or ' ' in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def days_until(due: Union[date, datetime], today: Union[date, datetime]) -> int:
    """Whole days from today to the due day (negative when overdue).

    Both sides are truncated to midnight first, so the ceiling of the
    difference in days is the plain day count.
    """
    return (to_day(due) - to_day(today)).days


def is_after_day(value: Optional[Union[date, datetime]], today: Union[date, datetime]) -> bool:
    """Check if a day is strictly later than today."""
    if value is None:
        return False
    return to_day(value) > to_day(today)


def is_before_day(value: Optional[Union[date, datetime]], today: Union[date, datetime]) -> bool:
    """Check if a day is strictly earlier than today."""
    if value is None:
        return False
    return to_day(value) < to_day(today)
