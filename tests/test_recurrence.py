# -*- coding: utf-8 -*-
"""Tests for weekly recurrence of imported classes."""
from datetime import date, datetime

import pytest

from schedule_parser.html_grid import parse_class_entry
from schedule_parser.recurrence import (
    build_class_event,
    build_rrule,
    day_of_week_to_rfc,
    first_occurrence,
    sunday_based_weekday,
)

TERM_START = date(2025, 9, 3)  # a Wednesday
TERM_END = date(2025, 12, 3)


def test_sunday_based_weekday() -> None:
    assert sunday_based_weekday(date(2025, 8, 31)) == 0
    assert sunday_based_weekday(TERM_START) == 3
    assert sunday_based_weekday(date(2025, 9, 6)) == 6


@pytest.mark.parametrize(
    "day_of_week, expected",
    [
        (3, date(2025, 9, 3)),   # same weekday keeps the start date
        (4, date(2025, 9, 4)),
        (1, date(2025, 9, 8)),
        (0, date(2025, 9, 7)),
        (2, date(2025, 9, 9)),
    ],
)
def test_first_occurrence(day_of_week: int, expected: date) -> None:
    assert first_occurrence(TERM_START, day_of_week) == expected


def test_weekday_codes() -> None:
    assert [day_of_week_to_rfc(d) for d in range(7)] == ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def test_rrule_format_is_exact() -> None:
    assert build_rrule(3, TERM_END) == "FREQ=WEEKLY;BYDAY=WE;UNTIL=20251203T235959Z"


def test_build_class_event_anchors_first_meeting() -> None:
    math = parse_class_entry("MATH 2008:30-9:50amHSD A240", 3)

    event = build_class_event(math, TERM_START, TERM_END, tzid="America/Vancouver")

    assert event.title == "MATH 200"
    assert event.description == "Location: HSD A240"
    assert event.location == "HSD A240"
    assert event.startdatetime == datetime(2025, 9, 3, 8, 30)
    assert event.enddatetime == datetime(2025, 9, 3, 9, 50)
    assert event.allday is False
    assert event.rrule == "FREQ=WEEKLY;BYDAY=WE;UNTIL=20251203T235959Z"
    assert event.tzid == "America/Vancouver"


def test_class_before_term_start_weekday_moves_to_next_week() -> None:
    monday = parse_class_entry("SENG 2652:30-3:20pmCLE A127", 1)

    event = build_class_event(monday, TERM_START, TERM_END)

    assert event.startdatetime == datetime(2025, 9, 8, 14, 30)
    assert event.enddatetime == datetime(2025, 9, 8, 15, 20)
    assert event.rrule == "FREQ=WEEKLY;BYDAY=MO;UNTIL=20251203T235959Z"
