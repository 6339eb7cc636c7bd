# -*- coding: utf-8 -*-
"""Plain-text tables of calendar events and tasks for MCP tool output."""
import typing as t
from datetime import datetime

from productivity_server.models import CalendarEvent, Task


def _format_datetime(value: datetime, allday: bool = False) -> str:
    """Formats a datetime into a concise readable format.

    :param value: The naive local datetime.
    :param allday: Drop the clock time for all-day entries.
    :return: Concise datetime string (e.g., 'Mon 9/15 2:30 PM').
    """
    if allday:
        return value.strftime("%a %-m/%-d")
    return value.strftime("%a %-m/%-d %-I:%M %p")


def _clip(text: t.Optional[str], width: int) -> str:
    if not text:
        return "—"
    return text[: width - 1] if len(text) > width - 1 else text


def format_calendar_events(events: list[CalendarEvent]) -> str:
    """Formats calendar events as a clean table.

    :param events: The events to show, in the order given.
    :return: Formatted table string of the calendar events.
    """
    if not events:
        return "📅 No calendar events found."

    lines = []
    lines.append("📅 CALENDAR EVENTS")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Title':<35} {'Start':<18} {'End':<18} {'Repeats':<8} {'Location':<15}")
    lines.append("-" * 100)

    for idx, event in enumerate(sorted(events, key=lambda e: e.startdatetime), 1):
        repeats = "weekly" if event.rrule else "—"
        lines.append(
            f"{idx:<4} {_clip(event.title, 35):<35} "
            f"{_format_datetime(event.startdatetime, event.allday):<18} "
            f"{_format_datetime(event.enddatetime, event.allday):<18} "
            f"{repeats:<8} {_clip(event.location, 15):<15}"
        )

    lines.append("=" * 100)
    lines.append(f"Total: {len(events)} event(s)")
    return "\n".join(lines)


def format_tasks(tasks: list[Task]) -> str:
    """Formats tasks as a clean table.

    :param tasks: The tasks to show.
    :return: Formatted table string of the tasks.
    """
    if not tasks:
        return "✅ No tasks found."

    lines = []
    lines.append("✅ TASKS")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Task':<35} {'Course':<12} {'Due':<18} {'Notes':<27}")
    lines.append("-" * 100)

    for idx, task in enumerate(sorted(tasks, key=lambda x: x.duedate), 1):
        lines.append(
            f"{idx:<4} {_clip(task.taskname, 35):<35} {_clip(task.coursename, 12):<12} "
            f"{_format_datetime(task.duedate):<18} {_clip(task.description, 27):<27}"
        )

    lines.append("=" * 100)
    lines.append(f"Total: {len(tasks)} task(s)")
    return "\n".join(lines)
