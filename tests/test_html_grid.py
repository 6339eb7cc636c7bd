# -*- coding: utf-8 -*-
"""Tests for the calendar-grid schedule parser and the class deduplicator."""
import logging

import pytest

from schedule_parser.dedup import unique_classes
from schedule_parser.html_grid import parse_class_entry, parse_schedule_html
from services.shared.errors import ParseError


def test_parse_class_entry_splits_unseparated_fragment() -> None:
    occurrence = parse_class_entry("MATH 2008:30-9:50amHSD A240", 3)

    assert occurrence.course_name == "MATH 200"
    assert occurrence.time == "8:30-9:50am"
    assert occurrence.location == "HSD A240"
    assert occurrence.day_of_week == 3
    assert (occurrence.start_time, occurrence.end_time) == ("08:30", "09:50")


def test_parse_class_entry_with_two_digit_hour() -> None:
    occurrence = parse_class_entry("CSC 22511:30-12:20pmECS 123", 3)

    assert occurrence.course_name == "CSC 225"
    assert (occurrence.start_time, occurrence.end_time) == ("11:30", "12:20")
    assert occurrence.location == "ECS 123"


@pytest.mark.parametrize(
    ("fragment", "course", "time"),
    [
        ("ECON 10109:30-10:20amDTB A110", "ECON 1010", "9:30-10:20am"),
        ("HIST 12341:30-2:20pmCLE B315", "HIST 1234", "1:30-2:20pm"),
        ("ECON 10111:30-12:20pmDTB A110", "ECON 101", "11:30-12:20pm"),
        ("CSC 110A8:30-9:20amECS 125", "CSC 110A", "8:30-9:20am"),
    ],
)
def test_parse_class_entry_course_number_length(fragment: str, course: str, time: str) -> None:
    occurrence = parse_class_entry(fragment, 2)

    assert (occurrence.course_name, occurrence.time) == (course, time)


def test_parse_class_entry_rejects_malformed_text() -> None:
    with pytest.raises(ParseError):
        parse_class_entry("Lab TBA", 4)


def test_parse_schedule_html(schedule_html: str) -> None:
    occurrences = parse_schedule_html(schedule_html)

    assert [(o.course_name, o.day_of_week) for o in occurrences] == [
        ("MATH 200", 3),
        ("CSC 225", 3),
        ("SENG 265", 5),
        ("MATH 200", 3),
        ("SENG 265", 5),
    ]


def test_reading_break_and_padding_cells_are_skipped(schedule_html: str) -> None:
    courses = {o.course_name for o in parse_schedule_html(schedule_html)}
    assert "SPAN 100" not in courses


def test_malformed_fragment_is_logged_not_fatal(schedule_html: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="schedule_parser.html_grid"):
        occurrences = parse_schedule_html(schedule_html)

    assert occurrences
    assert any("Lab TBA" in record.getMessage() for record in caplog.records)


def test_empty_document_has_no_classes() -> None:
    assert parse_schedule_html("<html><body></body></html>") == []


def test_unique_classes_keeps_first_per_key(schedule_html: str) -> None:
    unique = unique_classes(parse_schedule_html(schedule_html))

    assert [(u.course_name, u.day_of_week, u.start_time) for u in unique] == [
        ("MATH 200", 3, "08:30"),
        ("CSC 225", 3, "11:30"),
        ("SENG 265", 5, "14:30"),
    ]


def test_unique_classes_is_idempotent(schedule_html: str) -> None:
    once = unique_classes(parse_schedule_html(schedule_html))
    assert unique_classes(once) == once


def test_same_course_on_another_day_is_kept() -> None:
    monday = parse_class_entry("MATH 2008:30-9:50amHSD A240", 1)
    thursday = parse_class_entry("MATH 2008:30-9:50amHSD A240", 4)

    assert unique_classes([monday, thursday, monday]) == [monday, thursday]
