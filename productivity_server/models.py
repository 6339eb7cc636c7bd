"""
Data models for productivity server calendar events and tasks.

Payload classes describe what a caller asks the store to create; the stored
classes add the identifier assigned by the store.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
import typing as t


@dataclass
class CalendarEventPayload:
    """A calendar event to be created. ``rrule`` is set for recurring classes."""
    title: str
    startdatetime: datetime
    enddatetime: datetime
    description: str = ""
    location: str = ""
    allday: bool = False
    rrule: t.Optional[str] = None
    tzid: t.Optional[str] = None


@dataclass
class CalendarEvent(CalendarEventPayload):
    """A calendar event as stored by the productivity server."""
    calendar_id: str = ""

    @classmethod
    def from_payload(cls, payload: CalendarEventPayload, calendar_id: str) -> "CalendarEvent":
        values = {f.name: getattr(payload, f.name) for f in fields(CalendarEventPayload)}
        return cls(**values, calendar_id=calendar_id)


@dataclass
class TaskPayload:
    """A to-do task created next to assignment and project events."""
    taskname: str
    coursename: str
    duedate: datetime
    description: str = ""
    colour: str = "#3B82F6"
    priority_id: t.Optional[str] = None
    kanban_label_id: t.Optional[str] = None


@dataclass
class Task(TaskPayload):
    """A task as stored by the productivity server."""
    task_id: str = ""

    @classmethod
    def from_payload(cls, payload: TaskPayload, task_id: str) -> "Task":
        values = {f.name: getattr(payload, f.name) for f in fields(TaskPayload)}
        return cls(**values, task_id=task_id)
