"""
Weekly recurrence for imported classes.

A unique class is anchored on its first meeting on or after the term start
and repeats weekly until the end of the last term day. The RRULE text is
consumed by RFC 5545 calendar clients and must keep its exact format.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from productivity_server.models import CalendarEventPayload
from schedule_parser.models import UniqueClass

RFC_WEEKDAYS = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def _format(dt: datetime) -> str:
    """Format a datetime in UTC with trailing Z, dropping sub-seconds."""
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _parse_clock(s: str) -> time:
    return datetime.strptime(s, "%H:%M").time()


def day_of_week_to_rfc(day_of_week: int) -> str:
    """Convert 0=Sunday ... 6=Saturday to the two-letter RFC 5545 code."""
    return RFC_WEEKDAYS[day_of_week]


def sunday_based_weekday(d: date) -> int:
    return (d.weekday() + 1) % 7


def first_occurrence(start_date: date, day_of_week: int) -> date:
    """First date on or after ``start_date`` falling on ``day_of_week``."""
    days_to_add = (day_of_week - sunday_based_weekday(start_date) + 7) % 7
    return start_date + timedelta(days=days_to_add)


def build_rrule(day_of_week: int, end_date: date) -> str:
    """Weekly rule bounded by ``end_date`` at 23:59:59.999 UTC."""
    until = datetime.combine(end_date, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    return f"FREQ=WEEKLY;BYDAY={day_of_week_to_rfc(day_of_week)};UNTIL={_format(until)}"


def build_class_event(
    unique_class: UniqueClass,
    start_date: date,
    end_date: date,
    *,
    tzid: str | None = None,
) -> CalendarEventPayload:
    """Build the recurring calendar payload for one weekly class slot."""
    anchor = first_occurrence(start_date, unique_class.day_of_week)
    return CalendarEventPayload(
        title=unique_class.course_name,
        description=f"Location: {unique_class.location}",
        location=unique_class.location,
        startdatetime=datetime.combine(anchor, _parse_clock(unique_class.start_time)),
        enddatetime=datetime.combine(anchor, _parse_clock(unique_class.end_time)),
        allday=False,
        rrule=build_rrule(unique_class.day_of_week, end_date),
        tzid=tzid,
    )
