"""Parsing of human time ranges such as "8:30-9:50am" into 24-hour clock times."""
from __future__ import annotations

import re

from schedule_parser.models import TimeRange
from services.shared.errors import ParseError

TIME_RANGE_RE = re.compile(r"(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})(am|pm)", re.IGNORECASE)


def _to_24_hour(hour: int, period: str) -> int:
    if period == "pm":
        return hour if hour == 12 else hour + 12
    return 0 if hour == 12 else hour


def parse_time_range(text: str) -> TimeRange:
    """Parse a range like "8:30-9:50am" or "11:30-12:20pm".

    The trailing meridiem belongs to the end time and is applied to the start
    time as well, unless that would place the start after the end, in which
    case the start is read as a morning time ("11:30-12:20pm" crosses noon).
    If the end hour still precedes the start hour it is moved 12 hours forward.

    Args:
        text: The raw time range text.

    Returns:
        The normalized TimeRange.

    Raises:
        ParseError: If the text does not match ``H:MM-H:MM{am|pm}``.
    """
    match = TIME_RANGE_RE.search(text.strip())
    if not match:
        raise ParseError(f"Invalid time format: {text!r}")

    start_hour, start_min, end_hour, end_min, period = match.groups()
    period = period.lower()

    end_hour24 = _to_24_hour(int(end_hour), period)
    start_hour24 = _to_24_hour(int(start_hour), period)
    if period == "pm" and (start_hour24, start_min) > (end_hour24, end_min):
        start_hour24 = _to_24_hour(int(start_hour), "am")

    if end_hour24 < start_hour24:
        end_hour24 += 12

    return TimeRange(
        start_time=f"{start_hour24:02d}:{start_min}",
        end_time=f"{end_hour24:02d}:{end_min}",
    )
