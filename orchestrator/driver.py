# -*- coding: utf-8 -*-
"""
Calendar reconciliation driver.

``CalendarDriver`` is the single effectful stage of the pipeline. The parsing,
recurrence, extraction and planning stages only build payloads; the driver
writes them to a ``CalendarStore`` one at a time and reports what happened in
an ``ImportSummary`` or ``ClearSummary``.

Per-item failures are logged and counted and never abort a batch. Failing to
acquire the initial context (listing the store, reading a source document)
propagates to the caller.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
from datetime import date, datetime, time, timedelta

from academic_planner.extractor import (
    DEPARTMENTS,
    AssignmentSource,
    StaticCatalogSource,
    contains_assignment_keyword,
    extract_from_events,
    select_course_documents,
)
from academic_planner.models import WORK_TYPES, AssignmentItem, StudySession
from academic_planner.planner import StudyPlanner, generate_study_plan
from orchestrator.important_dates import IMPORTANT_DATES
from orchestrator.models import ClearSummary, ImportantDate, ImportSummary
from productivity_server.models import CalendarEvent, CalendarEventPayload, TaskPayload
from productivity_server.store import CalendarStore
from schedule_parser.dedup import unique_classes
from schedule_parser.html_grid import parse_schedule_html
from schedule_parser.recurrence import build_class_event
from services.shared.config import Settings
from services.shared.errors import StudySchedulerError

logger = logging.getLogger(__name__)

IMPORTANT_DATE_DESCRIPTION = "UVic Important Date"
IMPORTANT_DATE_LOCATION = "University of Victoria"
EXAM_LOCATION = "TBD - Check course announcements"
EXAM_START = time(14, 0)
EXAM_END = time(16, 0)
END_OF_DAY = time(23, 59)
STUDY_LOCATION = "Study Location TBD"
AI_SESSION_MARKER = "AI-Generated Session"
SESSION_TITLE_MARKERS = ("study session", "work session", "review session")


def _class_key(payload: CalendarEventPayload) -> tuple[str, t.Optional[str], datetime]:
    return payload.title, payload.rrule, payload.startdatetime


def is_assignment_or_exam_event(event: CalendarEvent) -> bool:
    return contains_assignment_keyword(event.title, event.description or "")


def is_assignment_task(taskname: str, coursename: str) -> bool:
    name = (taskname or "").lower()
    course = (coursename or "").lower()
    return (
        "assignment" in name
        or "project" in name
        or any(dept.lower() in course for dept in DEPARTMENTS)
    )


def is_study_session_event(event: CalendarEvent) -> bool:
    title = event.title.lower()
    description = (event.description or "").lower()
    return any(marker in title for marker in SESSION_TITLE_MARKERS) or (
        AI_SESSION_MARKER.lower() in description
    )


def important_date_payload(important: ImportantDate, tzid: str) -> CalendarEventPayload:
    start = datetime.combine(important.date, time())
    return CalendarEventPayload(
        title=important.title,
        description=IMPORTANT_DATE_DESCRIPTION,
        location=IMPORTANT_DATE_LOCATION,
        startdatetime=start,
        enddatetime=start + timedelta(hours=1),
        allday=important.all_day,
        rrule=None,
        tzid=tzid,
    )


def assignment_event_payload(item: AssignmentItem) -> CalendarEventPayload:
    """Exams get a fixed afternoon slot; everything else is due by end of day."""
    due_day = item.due_date.date()
    if item.is_exam:
        start = datetime.combine(due_day, EXAM_START)
        end = datetime.combine(due_day, EXAM_END)
        allday = False
        location = EXAM_LOCATION
    else:
        start = datetime.combine(due_day, time())
        end = datetime.combine(due_day, END_OF_DAY)
        allday = True
        location = ""
    return CalendarEventPayload(
        title=f"{item.course} - {item.title}",
        description=f"{item.description} ({item.type})",
        location=location,
        startdatetime=start,
        enddatetime=end,
        allday=allday,
    )


def assignment_task_payload(item: AssignmentItem) -> TaskPayload:
    return TaskPayload(
        taskname=item.title,
        coursename=item.course,
        duedate=item.due_date,
        description=item.description,
    )


def session_event_payload(session: StudySession) -> CalendarEventPayload:
    duration = f"{session.duration:g}"
    return CalendarEventPayload(
        title=session.title,
        description=(
            f"{AI_SESSION_MARKER}\n\n{session.description}\n\n"
            f"Duration: {duration} hours\nType: {session.type.replace('_', ' ').upper()}"
        ),
        location=STUDY_LOCATION,
        startdatetime=session.date,
        enddatetime=session.date + timedelta(hours=session.duration),
        allday=False,
        rrule=None,
    )


class CalendarDriver:
    """Populates and tears down a student's calendar."""

    def __init__(
        self,
        store: CalendarStore,
        planner: t.Optional[StudyPlanner] = None,
        assignment_source: t.Optional[AssignmentSource] = None,
        settings: t.Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.planner = planner
        self.assignment_source = assignment_source or StaticCatalogSource()
        self.settings = settings or Settings()

    async def _create_event(self, payload: CalendarEventPayload, summary: ImportSummary) -> bool:
        try:
            await self.store.create_calendar_event(payload)
        except StudySchedulerError as e:
            logger.error("Failed to create calendar event %s: %s", payload.title, e)
            summary.failed += 1
            summary.errors.append(f"{payload.title}: {e}")
            return False
        logger.info("Created calendar event: %s", payload.title)
        summary.created += 1
        return True

    async def import_classes(
        self,
        html: str,
        start_date: t.Optional[date] = None,
        end_date: t.Optional[date] = None,
    ) -> ImportSummary:
        """Create one weekly recurring event per unique class in the grid."""
        start_date = start_date or self.settings.term_start
        end_date = end_date or self.settings.term_end
        classes = unique_classes(parse_schedule_html(html))
        logger.info("Found %d unique classes", len(classes))

        existing = {_class_key(e) for e in await self.store.list_calendar_events()}
        summary = ImportSummary()
        for unique_class in classes:
            payload = build_class_event(unique_class, start_date, end_date, tzid=self.settings.tzid)
            if _class_key(payload) in existing:
                logger.debug("Class already on calendar: %s %s", payload.title, payload.rrule)
                summary.skipped += 1
                continue
            if await self._create_event(payload, summary):
                existing.add(_class_key(payload))
        return summary

    async def import_important_dates(self, dates: t.Optional[t.Iterable[ImportantDate]] = None) -> ImportSummary:
        summary = ImportSummary()
        for important in IMPORTANT_DATES if dates is None else dates:
            await self._create_event(important_date_payload(important, self.settings.tzid), summary)
        return summary

    async def populate_from_schedule(
        self,
        html: str,
        start_date: t.Optional[date] = None,
        end_date: t.Optional[date] = None,
    ) -> ImportSummary:
        """Add the term's important dates, then the weekly classes."""
        dates = await self.import_important_dates()
        classes = await self.import_classes(html, start_date, end_date)
        return dates.merge(classes)

    async def import_assignments(self, paths: t.Iterable[str]) -> ImportSummary:
        """Create events (and tasks for graded work) from course documents."""
        summary = ImportSummary()
        for path in select_course_documents(paths):
            items = self.assignment_source.extract(path)
            for item in items:
                if not await self._create_event(assignment_event_payload(item), summary):
                    continue
                if item.type not in WORK_TYPES:
                    continue
                try:
                    await self.store.create_task(assignment_task_payload(item))
                except StudySchedulerError as e:
                    logger.error("Failed to create task %s: %s", item.title, e)
                    summary.tasks_failed += 1
                    summary.errors.append(f"task {item.title}: {e}")
                else:
                    summary.tasks_created += 1
        return summary

    async def generate_study_schedule(self, now: t.Optional[datetime] = None) -> ImportSummary:
        """Plan study sessions for the assignments already on the calendar."""
        events, _tasks = await asyncio.gather(self.store.list_calendar_events(), self.store.list_tasks())
        assignments = extract_from_events(events)
        logger.info("Found %d assignments/exams to schedule study sessions for", len(assignments))

        result = await generate_study_plan(
            assignments,
            planner=self.planner,
            existing_events=events,
            now=now,
        )
        summary = ImportSummary(source=result.source)
        for session in result.sessions:
            await self._create_event(session_event_payload(session), summary)
        logger.info("Created %d study sessions (source: %s)", summary.created, result.source)
        return summary

    async def _delete_events(self, events: t.Iterable[CalendarEvent], summary: ClearSummary) -> None:
        for event in events:
            try:
                await self.store.delete_calendar_event(event.calendar_id)
            except StudySchedulerError as e:
                logger.error("Failed to delete calendar event %s: %s", event.title, e)
                summary.failed += 1
                summary.errors.append(f"{event.title}: {e}")
            else:
                logger.info("Deleted calendar event: %s", event.title)
                summary.deleted_events += 1

    async def clear_assignments_and_exams(self) -> ClearSummary:
        events, tasks = await asyncio.gather(self.store.list_calendar_events(), self.store.list_tasks())
        summary = ClearSummary()
        await self._delete_events([e for e in events if is_assignment_or_exam_event(e)], summary)
        for task in tasks:
            if not is_assignment_task(task.taskname, task.coursename):
                continue
            try:
                await self.store.delete_task(task.task_id)
            except StudySchedulerError as e:
                logger.error("Failed to delete task %s: %s", task.taskname, e)
                summary.failed += 1
                summary.errors.append(f"task {task.taskname}: {e}")
            else:
                logger.info("Deleted task: %s - %s", task.coursename, task.taskname)
                summary.deleted_tasks += 1
        return summary

    async def clear_study_sessions(self) -> ClearSummary:
        events = await self.store.list_calendar_events()
        summary = ClearSummary()
        await self._delete_events([e for e in events if is_study_session_event(e)], summary)
        return summary

    async def clear_all_events(self) -> ClearSummary:
        events = await self.store.list_calendar_events()
        summary = ClearSummary()
        await self._delete_events(events, summary)
        return summary
