# -*- coding: utf-8 -*-
"""Tests for the calendar reconciliation driver."""
from datetime import date, datetime

import pytest

from academic_planner.models import AssignmentItem, StudySession
from orchestrator.driver import (
    CalendarDriver,
    assignment_event_payload,
    is_assignment_task,
    session_event_payload,
)
from orchestrator.important_dates import IMPORTANT_DATES
from orchestrator.models import ImportantDate
from productivity_server.models import CalendarEventPayload
from productivity_server.store import InMemoryCalendarStore
from services.shared.config import Settings
from services.shared.errors import ExternalServiceError
from tests.conftest import FailingPlanner, FakePlanner

SETTINGS = Settings(tzid="America/Vancouver", term_start=date(2025, 9, 3), term_end=date(2025, 12, 3))


class FlakyStore(InMemoryCalendarStore):
    """Rejects creates and deletes of events whose title contains a marker."""

    def __init__(self, marker: str) -> None:
        super().__init__("student")
        self.marker = marker

    async def create_calendar_event(self, payload: CalendarEventPayload):
        if self.marker in payload.title:
            raise ExternalServiceError("productivity service unavailable")
        return await super().create_calendar_event(payload)

    async def delete_calendar_event(self, calendar_id: str) -> None:
        events = {e.calendar_id: e for e in await self.list_calendar_events()}
        if self.marker in events[calendar_id].title:
            raise ExternalServiceError("productivity service unavailable")
        await super().delete_calendar_event(calendar_id)


class UnreachableStore(InMemoryCalendarStore):
    async def list_calendar_events(self):
        raise ExternalServiceError("connection refused")


@pytest.fixture
def driver(store: InMemoryCalendarStore) -> CalendarDriver:
    return CalendarDriver(store, settings=SETTINGS)


def test_exam_payload_uses_afternoon_slot(math_final: AssignmentItem) -> None:
    payload = assignment_event_payload(math_final)

    assert payload.title == "MATH 200 - Final Exam"
    assert payload.description == "Comprehensive calculus exam (final)"
    assert payload.startdatetime == datetime(2025, 12, 8, 14, 0)
    assert payload.enddatetime == datetime(2025, 12, 8, 16, 0)
    assert payload.location == "TBD - Check course announcements"
    assert payload.allday is False
    assert payload.rrule is None


def test_assignment_payload_is_all_day(math_assignment: AssignmentItem) -> None:
    payload = assignment_event_payload(math_assignment)

    assert payload.title == "MATH 200 - Assignment 1"
    assert payload.description == "Calculus Problems Set 1 (assignment)"
    assert payload.allday is True
    assert payload.startdatetime == datetime(2025, 9, 18, 0, 0)
    assert payload.enddatetime == datetime(2025, 9, 18, 23, 59)


def test_session_payload_is_tagged() -> None:
    session = StudySession(
        title="Final Review: Final Exam",
        course="MATH 200",
        type="review_session",
        duration=3,
        date=datetime(2025, 11, 19, 16, 0),
        description="Final review and practice problems for Final Exam",
    )

    payload = session_event_payload(session)

    assert payload.description == (
        "AI-Generated Session\n\nFinal review and practice problems for Final Exam"
        "\n\nDuration: 3 hours\nType: REVIEW SESSION"
    )
    assert payload.location == "Study Location TBD"
    assert payload.enddatetime == datetime(2025, 11, 19, 19, 0)
    assert payload.allday is False
    assert payload.rrule is None


def test_assignment_task_matching() -> None:
    assert is_assignment_task("Assignment 1", "")
    assert is_assignment_task("Final Project", "")
    assert is_assignment_task("Read chapter 3", "MATH 200")
    assert not is_assignment_task("Buy groceries", "Personal")


@pytest.mark.asyncio
async def test_import_classes(driver: CalendarDriver, store: InMemoryCalendarStore, schedule_html: str) -> None:
    summary = await driver.import_classes(schedule_html)

    assert (summary.created, summary.failed, summary.skipped) == (3, 0, 0)
    events = {e.title: e for e in await store.list_calendar_events()}
    assert set(events) == {"MATH 200", "CSC 225", "SENG 265"}
    assert events["MATH 200"].rrule == "FREQ=WEEKLY;BYDAY=WE;UNTIL=20251203T235959Z"
    assert events["MATH 200"].startdatetime == datetime(2025, 9, 3, 8, 30)
    assert events["SENG 265"].startdatetime == datetime(2025, 9, 5, 14, 30)
    assert events["SENG 265"].tzid == "America/Vancouver"


@pytest.mark.asyncio
async def test_reimporting_classes_creates_no_duplicates(
    driver: CalendarDriver, store: InMemoryCalendarStore, schedule_html: str
) -> None:
    await driver.import_classes(schedule_html)
    summary = await driver.import_classes(schedule_html)

    assert (summary.created, summary.skipped) == (0, 3)
    assert len(await store.list_calendar_events()) == 3


@pytest.mark.asyncio
async def test_import_important_dates(driver: CalendarDriver, store: InMemoryCalendarStore) -> None:
    dates = [ImportantDate(date(2025, 10, 13), "University Closed (Thanksgiving Day)")]

    summary = await driver.import_important_dates(dates)

    assert summary.created == 1
    [event] = await store.list_calendar_events()
    assert event.allday is True
    assert event.rrule is None
    assert event.description == "UVic Important Date"
    assert event.startdatetime == datetime(2025, 10, 13, 0, 0)
    assert event.enddatetime == datetime(2025, 10, 13, 1, 0)
    assert event.tzid == "America/Vancouver"


@pytest.mark.asyncio
async def test_populate_from_schedule(driver: CalendarDriver, store: InMemoryCalendarStore, schedule_html: str) -> None:
    summary = await driver.populate_from_schedule(schedule_html)

    assert summary.created == len(IMPORTANT_DATES) + 3
    assert len(await store.list_calendar_events()) == len(IMPORTANT_DATES) + 3


@pytest.mark.asyncio
async def test_import_assignments(driver: CalendarDriver, store: InMemoryCalendarStore) -> None:
    summary = await driver.import_assignments(["MATH 200.pdf", "MATH 200 schedule.pdf"])

    assert (summary.created, summary.failed) == (5, 0)
    assert summary.tasks_created == 3
    titles = sorted(e.title for e in await store.list_calendar_events())
    assert titles == sorted(
        f"MATH 200 - {t}" for t in ["Assignment 1", "Assignment 2", "Midterm Exam", "Assignment 3", "Final Exam"]
    )
    assert sorted(t.taskname for t in await store.list_tasks()) == ["Assignment 1", "Assignment 2", "Assignment 3"]


@pytest.mark.asyncio
async def test_one_failed_create_does_not_abort_batch() -> None:
    store = FlakyStore("Midterm")
    driver = CalendarDriver(store, settings=SETTINGS)

    summary = await driver.import_assignments(["MATH 200.pdf"])

    assert (summary.created, summary.failed) == (4, 1)
    assert summary.errors and "Midterm" in summary.errors[0]


@pytest.mark.asyncio
async def test_generate_study_schedule_with_mock_plan(
    driver: CalendarDriver, store: InMemoryCalendarStore, now: datetime
) -> None:
    await driver.import_assignments(["MATH 200.pdf"])

    summary = await driver.generate_study_schedule(now=now)

    assert summary.source == "mock"
    # 3 sessions for each assignment, 5 for each exam
    assert summary.created == 3 * 3 + 5 * 2
    sessions = [e for e in await store.list_calendar_events() if e.location == "Study Location TBD"]
    assert len(sessions) == 19
    assert all(s.description.startswith("AI-Generated Session") for s in sessions)


@pytest.mark.asyncio
async def test_generate_study_schedule_with_planner(store: InMemoryCalendarStore, now: datetime, schedule_html: str) -> None:
    canned = [
        StudySession(
            title="Work Session: Assignment 1",
            course="MATH 200",
            type="work_session",
            duration=1.5,
            date=datetime(2025, 9, 10, 14, 0),
            description="Start the problem set",
        )
    ]
    planner = FakePlanner(canned)
    driver = CalendarDriver(store, planner=planner, settings=SETTINGS)
    await driver.import_classes(schedule_html)
    await driver.import_assignments(["MATH 200.pdf"])

    summary = await driver.generate_study_schedule(now=now)

    assert (summary.source, summary.created) == ("openai", 1)
    assignments, existing = planner.calls[0]
    assert len(assignments) == 5
    assert len(existing) == 8
    [session] = [e for e in await store.list_calendar_events() if e.title.startswith("Work Session")]
    assert session.enddatetime == datetime(2025, 9, 10, 15, 30)
    assert "Duration: 1.5 hours\nType: WORK SESSION" in session.description


@pytest.mark.asyncio
async def test_generate_study_schedule_falls_back(store: InMemoryCalendarStore, now: datetime) -> None:
    driver = CalendarDriver(store, planner=FailingPlanner(), settings=SETTINGS)
    await driver.import_assignments(["SPAN 100.pdf"])

    summary = await driver.generate_study_schedule(now=now)

    assert summary.source == "mock_fallback"
    assert summary.created > 0


@pytest.mark.asyncio
async def test_generate_without_assignments(driver: CalendarDriver, store: InMemoryCalendarStore, now: datetime) -> None:
    summary = await driver.generate_study_schedule(now=now)

    assert summary.created == 0
    assert await store.list_calendar_events() == []


@pytest.mark.asyncio
async def test_clears_are_selective_and_idempotent(
    driver: CalendarDriver, store: InMemoryCalendarStore, schedule_html: str, now: datetime
) -> None:
    await driver.import_classes(schedule_html)
    await driver.import_assignments(["MATH 200.pdf"])
    await driver.generate_study_schedule(now=now)

    sessions = await driver.clear_study_sessions()
    assert sessions.deleted_events == 19
    assert (await driver.clear_study_sessions()).deleted_events == 0

    assignments = await driver.clear_assignments_and_exams()
    assert (assignments.deleted_events, assignments.deleted_tasks) == (5, 3)
    again = await driver.clear_assignments_and_exams()
    assert (again.deleted_events, again.deleted_tasks) == (0, 0)
    assert sorted(e.title for e in await store.list_calendar_events()) == ["CSC 225", "MATH 200", "SENG 265"]

    everything = await driver.clear_all_events()
    assert everything.deleted_events == 3
    assert (await driver.clear_all_events()).deleted_events == 0


@pytest.mark.asyncio
async def test_failed_delete_is_counted() -> None:
    store = FlakyStore("CSC")
    driver = CalendarDriver(store, settings=SETTINGS)
    await store.create_calendar_event(
        CalendarEventPayload("MATH 200", datetime(2025, 9, 3, 8, 30), datetime(2025, 9, 3, 9, 50))
    )
    store.marker = "MATH"

    summary = await driver.clear_all_events()

    assert (summary.deleted_events, summary.failed) == (0, 1)


@pytest.mark.asyncio
async def test_unreachable_store_aborts_operation(schedule_html: str) -> None:
    driver = CalendarDriver(UnreachableStore(), settings=SETTINGS)

    with pytest.raises(ExternalServiceError):
        await driver.import_classes(schedule_html)
    with pytest.raises(ExternalServiceError):
        await driver.clear_all_events()
