"""Calendar date parsing for transaction dates and range bounds."""
import re
from datetime import date, datetime
from typing import Any, Optional

DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Reduce a value to its calendar date.

    Accepts date and datetime objects (time of day dropped) and strings
    starting with YYYY-MM-DD, optionally followed by a time component.

    Args:
        value: Raw date value

    Returns:
        The calendar date, or None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return None

    match = DATE_PATTERN.match(value.strip())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None
