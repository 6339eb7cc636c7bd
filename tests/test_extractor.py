# -*- coding: utf-8 -*-
"""Tests for assignment and exam extraction."""
from datetime import datetime

import pytest

from academic_planner.extractor import (
    UNKNOWN_COURSE,
    PdfTextSource,
    StaticCatalogSource,
    classify_event_title,
    extract_course_code,
    extract_from_events,
    select_course_documents,
)
from productivity_server.models import CalendarEvent


def _event(title: str, description: str = "", start: datetime = datetime(2025, 10, 10)) -> CalendarEvent:
    return CalendarEvent(
        title=title,
        description=description,
        startdatetime=start,
        enddatetime=start,
        calendar_id="evt",
    )


@pytest.mark.parametrize(
    "title, expected",
    [
        ("MATH 200 - Final Exam", "final"),
        ("CSC 225 - Midterm Exam", "final"),
        ("CSC 225 - Midterm", "midterm"),
        ("SENG 321 - Team Project", "project"),
        ("SPAN 100 - Quiz 1", "quiz"),
        ("SENG 265 - Assignment 2", "assignment"),
        ("Reading response", "assignment"),
    ],
)
def test_classify_event_title(title: str, expected: str) -> None:
    assert classify_event_title(title) == expected


def test_extract_course_code() -> None:
    assert extract_course_code("MATH 200 - Assignment 1") == "MATH 200"
    assert extract_course_code("outlines/SENG 265 Fall.pdf") == "SENG 265"
    assert extract_course_code("HIST 101 - Essay") is None


def test_extract_from_events_keeps_keyword_events_only() -> None:
    events = [
        _event("MATH 200 - Assignment 1", "Calculus Problems Set 1 (assignment)", datetime(2025, 9, 18)),
        _event("MATH 200", "Location: HSD A240"),
        _event("Coffee with Sam", "Bring the project notes"),
        _event("Senate meets"),
    ]

    items = extract_from_events(events)

    assert len(items) == 2
    first, second = items
    assert first.title == "Assignment 1"
    assert first.course == "MATH 200"
    assert first.due_date == datetime(2025, 9, 18)
    assert first.type == "assignment"
    assert second.course == UNKNOWN_COURSE
    assert second.title == "Coffee with Sam"


def test_select_course_documents_keeps_one_per_course() -> None:
    paths = ["MATH 200 outline.pdf", "CSC 225.pdf", "MATH 200 schedule.pdf", "misc.pdf", "notes.pdf"]

    assert select_course_documents(paths) == ["MATH 200 outline.pdf", "CSC 225.pdf", "misc.pdf"]


def test_static_catalog_source() -> None:
    items = StaticCatalogSource().extract("docs/MATH 200.pdf")

    assert [i.title for i in items] == [
        "Assignment 1", "Assignment 2", "Midterm Exam", "Assignment 3", "Final Exam",
    ]
    assert all(i.course == "MATH 200" for i in items)
    assert items[2].type == "midterm"
    assert items[2].is_exam


def test_static_catalog_source_unknown_course() -> None:
    assert StaticCatalogSource().extract("HIST 101.pdf") == []


def test_static_catalog_source_custom_table() -> None:
    catalog = {"CSC 110": [("Lab 1", datetime(2025, 9, 12), "assignment", "Python basics")]}

    items = StaticCatalogSource(catalog).extract("CSC 110.pdf")

    assert [(i.title, i.course, i.due_date) for i in items] == [("Lab 1", "CSC 110", datetime(2025, 9, 12))]


def test_pdf_text_source_mines_dated_keyword_lines() -> None:
    pages = [
        "SENG 265 Software Development Methods\nGrading\nAssignment 1 due Sep 25\n",
        "Midterm Exam: 2025-11-05\nFinal Project - December 1, 2025\nOffice hours: Tuesday\n"
        "Assignment 1 due Sep 25\n",
    ]
    source = PdfTextSource(term_year=2025, read_pages=lambda path: pages)

    items = source.extract("outline.pdf")

    assert [(i.course, i.type, i.due_date) for i in items] == [
        ("SENG 265", "assignment", datetime(2025, 9, 25)),
        ("SENG 265", "midterm", datetime(2025, 11, 5)),
        ("SENG 265", "project", datetime(2025, 12, 1)),
    ]
    assert items[0].title == "Assignment 1 due"
