# -*- coding: utf-8 -*-
"""
Storage for calendar events and tasks.

``CalendarStore`` is the persistence contract the calendar driver works
against. ``InMemoryCalendarStore`` keeps one partition per user; in a real
deployment it would be replaced by a database-backed implementation.
"""
from __future__ import annotations

import typing as t
import uuid

from productivity_server.models import CalendarEvent, CalendarEventPayload, Task, TaskPayload
from services.shared.errors import NotFoundError, ValidationError


class CalendarStore(t.Protocol):
    """Fallible, async persistence for calendar events and tasks."""

    async def create_calendar_event(self, payload: CalendarEventPayload) -> CalendarEvent: ...

    async def list_calendar_events(self) -> list[CalendarEvent]: ...

    async def delete_calendar_event(self, calendar_id: str) -> None: ...

    async def create_task(self, payload: TaskPayload) -> Task: ...

    async def list_tasks(self) -> list[Task]: ...

    async def delete_task(self, task_id: str) -> None: ...


def validate_event_payload(payload: CalendarEventPayload) -> None:
    """Raise ValidationError if a required calendar field is missing."""
    if not payload.title:
        raise ValidationError("Title is required")
    if not payload.startdatetime:
        raise ValidationError("Start datetime is required")
    if not payload.enddatetime:
        raise ValidationError("End datetime is required")


def validate_task_payload(payload: TaskPayload) -> None:
    """Raise ValidationError if a required task field is missing."""
    if not payload.taskname:
        raise ValidationError("Task name is required")
    if not payload.duedate:
        raise ValidationError("Due date is required")


class InMemoryCalendarStore:
    """Keeps calendar events and tasks in memory, partitioned by user."""

    def __init__(self, user: str = "student") -> None:
        self.user = user
        self._events: dict[str, dict[str, CalendarEvent]] = {}
        self._tasks: dict[str, dict[str, Task]] = {}

    def for_user(self, user: str) -> "InMemoryCalendarStore":
        """Return a view of the same storage acting as ``user``."""
        view = InMemoryCalendarStore(user)
        view._events = self._events
        view._tasks = self._tasks
        return view

    def _user_events(self) -> dict[str, CalendarEvent]:
        return self._events.setdefault(self.user, {})

    def _user_tasks(self) -> dict[str, Task]:
        return self._tasks.setdefault(self.user, {})

    async def create_calendar_event(self, payload: CalendarEventPayload) -> CalendarEvent:
        validate_event_payload(payload)
        event = CalendarEvent.from_payload(payload, str(uuid.uuid4()))
        self._user_events()[event.calendar_id] = event
        return event

    async def list_calendar_events(self) -> list[CalendarEvent]:
        return list(self._user_events().values())

    async def delete_calendar_event(self, calendar_id: str) -> None:
        if self._user_events().pop(calendar_id, None) is None:
            raise NotFoundError("Calendar not found or not owned by user")

    async def create_task(self, payload: TaskPayload) -> Task:
        validate_task_payload(payload)
        task = Task.from_payload(payload, str(uuid.uuid4()))
        self._user_tasks()[task.task_id] = task
        return task

    async def list_tasks(self) -> list[Task]:
        return list(self._user_tasks().values())

    async def delete_task(self, task_id: str) -> None:
        if self._user_tasks().pop(task_id, None) is None:
            raise NotFoundError("Task not found or not owned by user")
