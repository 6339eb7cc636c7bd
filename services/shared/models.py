"""
Shared Pydantic models for REST API serialization.

These are the validated shapes that cross a service boundary: the planner
request/response contract and the productivity service payloads. Converters
translate them to and from the dataclasses used inside the engine.
"""
from __future__ import annotations

import typing as t
from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from academic_planner.models import AssignmentItem, StudySession
from productivity_server.models import CalendarEvent, CalendarEventPayload, Task, TaskPayload


AssignmentType = t.Literal["assignment", "exam", "quiz", "project", "midterm", "final"]
SessionType = t.Literal["work_session", "study_session", "review_session"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Planner contract
class AssignmentModel(_CamelModel):
    """An assignment or exam as sent to the planner."""
    title: str
    course: str
    due_date: datetime = Field(alias="dueDate")
    type: AssignmentType = "assignment"
    description: str = ""


class StudySessionModel(_CamelModel):
    """A study session as returned by the planner."""
    title: str
    course: str
    type: SessionType
    duration: float = Field(gt=0, le=24)
    date: datetime
    description: str = ""
    related_assignment: t.Optional[str] = Field(default=None, alias="relatedAssignment")


class CalendarEventModel(BaseModel):
    """Represents a stored calendar event."""
    calendar_id: str = ""
    title: str
    description: str = ""
    location: str = ""
    startdatetime: datetime
    enddatetime: datetime
    allday: bool = False
    rrule: t.Optional[str] = None
    tzid: t.Optional[str] = None


class StudyPlanRequest(_CamelModel):
    """Request model for generating a study plan."""
    assignments: list[AssignmentModel]
    existing_events: list[CalendarEventModel] = Field(default_factory=list, alias="existingEvents")


class StudyPlanResponse(_CamelModel):
    """Response model for a generated study plan."""
    study_sessions: list[StudySessionModel] = Field(alias="studySessions")
    source: t.Optional[str] = None
    message: t.Optional[str] = None


# Productivity service models
class CreateCalendarEventRequest(BaseModel):
    """Request model for creating a calendar event."""
    title: str = ""
    description: str = ""
    location: str = ""
    startdatetime: t.Optional[datetime] = None
    enddatetime: t.Optional[datetime] = None
    allday: bool = False
    rrule: t.Optional[str] = None
    tzid: t.Optional[str] = None


class TaskModel(BaseModel):
    """Represents a stored task."""
    task_id: str = ""
    taskname: str
    coursename: str = ""
    duedate: datetime
    description: str = ""
    colour: str = "#3B82F6"
    priority_id: t.Optional[str] = None
    kanban_label_id: t.Optional[str] = None


class CreateTaskRequest(BaseModel):
    """Request model for creating a task."""
    taskname: str = ""
    coursename: str = ""
    duedate: t.Optional[datetime] = None
    description: str = ""
    colour: str = "#3B82F6"
    priority_id: t.Optional[str] = None
    kanban_label_id: t.Optional[str] = None


# Converters
def to_naive_local(value: datetime, tz: t.Optional[ZoneInfo] = None) -> datetime:
    """Convert an aware datetime to naive wall-clock time in ``tz``."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def assignment_to_model(item: AssignmentItem) -> AssignmentModel:
    return AssignmentModel(
        title=item.title,
        course=item.course,
        due_date=item.due_date,
        type=item.type,
        description=item.description,
    )


def assignment_from_model(model: AssignmentModel, tz: t.Optional[ZoneInfo] = None) -> AssignmentItem:
    return AssignmentItem(
        title=model.title,
        course=model.course,
        due_date=to_naive_local(model.due_date, tz),
        type=model.type,
        description=model.description,
    )


def session_to_model(session: StudySession) -> StudySessionModel:
    return StudySessionModel(
        title=session.title,
        course=session.course,
        type=session.type,
        duration=session.duration,
        date=session.date,
        description=session.description,
        related_assignment=session.related_assignment,
    )


def session_from_model(model: StudySessionModel, tz: t.Optional[ZoneInfo] = None) -> StudySession:
    return StudySession(
        title=model.title,
        course=model.course,
        type=model.type,
        duration=model.duration,
        date=to_naive_local(model.date, tz),
        description=model.description,
        related_assignment=model.related_assignment,
    )


def event_to_model(event: CalendarEvent) -> CalendarEventModel:
    return CalendarEventModel(
        calendar_id=event.calendar_id,
        title=event.title,
        description=event.description,
        location=event.location,
        startdatetime=event.startdatetime,
        enddatetime=event.enddatetime,
        allday=event.allday,
        rrule=event.rrule,
        tzid=event.tzid,
    )


def event_from_model(model: CalendarEventModel, tz: t.Optional[ZoneInfo] = None) -> CalendarEvent:
    event = CalendarEvent(**model.model_dump())
    event.startdatetime = to_naive_local(event.startdatetime, tz)
    event.enddatetime = to_naive_local(event.enddatetime, tz)
    return event


def event_payload_to_request(payload: CalendarEventPayload) -> CreateCalendarEventRequest:
    return CreateCalendarEventRequest(**vars(payload))


def event_payload_from_request(
    request: CreateCalendarEventRequest,
    tz: t.Optional[ZoneInfo] = None,
) -> CalendarEventPayload:
    """Payload for the store, with offset-carrying datetimes moved to wall time in ``tz``."""
    payload = CalendarEventPayload(**request.model_dump())
    if payload.startdatetime is not None:
        payload.startdatetime = to_naive_local(payload.startdatetime, tz)
    if payload.enddatetime is not None:
        payload.enddatetime = to_naive_local(payload.enddatetime, tz)
    return payload


def task_to_model(task: Task) -> TaskModel:
    return TaskModel(**vars(task))


def task_from_model(model: TaskModel, tz: t.Optional[ZoneInfo] = None) -> Task:
    task = Task(**model.model_dump())
    task.duedate = to_naive_local(task.duedate, tz)
    return task


def task_payload_to_request(payload: TaskPayload) -> CreateTaskRequest:
    return CreateTaskRequest(**vars(payload))


def task_payload_from_request(request: CreateTaskRequest, tz: t.Optional[ZoneInfo] = None) -> TaskPayload:
    payload = TaskPayload(**request.model_dump())
    if payload.duedate is not None:
        payload.duedate = to_naive_local(payload.duedate, tz)
    return payload
