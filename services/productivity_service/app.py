"""
FastAPI service for productivity operations.

Exposes the calendar event and task store as a REST API. These are fast
operations without LLM involvement. The acting user is taken from the
``X-User`` header and every user only sees their own entities.
"""
from __future__ import annotations

import logging
import typing as t
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Header, HTTPException

from productivity_server.store import InMemoryCalendarStore
from services.shared.config import Settings
from services.shared.errors import NotFoundError, ValidationError
from services.shared.models import (
    CalendarEventModel,
    CreateCalendarEventRequest,
    CreateTaskRequest,
    TaskModel,
    event_payload_from_request,
    event_to_model,
    task_payload_from_request,
    task_to_model,
)

logger = logging.getLogger(__name__)

# In a distributed system this would be replaced with a persistent database
store = InMemoryCalendarStore()

# Datetimes sent with a UTC offset are stored as wall-clock time in this zone
SERVICE_TZ = ZoneInfo(Settings.from_env().tzid)

app = FastAPI(
    title="Productivity Service",
    description="REST API for calendar events and task management",
    version="1.0.0",
)


def _user_store(user: t.Optional[str]) -> InMemoryCalendarStore:
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated. X-User header is required.")
    return store.for_user(user)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "productivity-service"}


@app.post("/calendar/events", response_model=CalendarEventModel, status_code=201)
async def create_calendar_event(
    request: CreateCalendarEventRequest,
    x_user: t.Optional[str] = Header(default=None),
) -> CalendarEventModel:
    """Create a single calendar event."""
    try:
        payload = event_payload_from_request(request, SERVICE_TZ)
        event = await _user_store(x_user).create_calendar_event(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("Created calendar event %s: %s", event.calendar_id, event.title)
    return event_to_model(event)


@app.get("/calendar/events", response_model=list[CalendarEventModel])
async def list_calendar_events(x_user: t.Optional[str] = Header(default=None)) -> list[CalendarEventModel]:
    """List all calendar events of the acting user."""
    events = await _user_store(x_user).list_calendar_events()
    return [event_to_model(e) for e in events]


@app.delete("/calendar/events/{calendar_id}", status_code=204)
async def delete_calendar_event(calendar_id: str, x_user: t.Optional[str] = Header(default=None)) -> None:
    """Delete one calendar event owned by the acting user."""
    try:
        await _user_store(x_user).delete_calendar_event(calendar_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/tasks", response_model=TaskModel, status_code=201)
async def create_task(
    request: CreateTaskRequest,
    x_user: t.Optional[str] = Header(default=None),
) -> TaskModel:
    """Create a single task."""
    try:
        task = await _user_store(x_user).create_task(task_payload_from_request(request, SERVICE_TZ))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("Created task %s: %s", task.task_id, task.taskname)
    return task_to_model(task)


@app.get("/tasks", response_model=list[TaskModel])
async def list_tasks(x_user: t.Optional[str] = Header(default=None)) -> list[TaskModel]:
    """List all tasks of the acting user."""
    tasks = await _user_store(x_user).list_tasks()
    return [task_to_model(task) for task in tasks]


@app.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, x_user: t.Optional[str] = Header(default=None)) -> None:
    """Delete one task owned by the acting user."""
    try:
        await _user_store(x_user).delete_task(task_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8003)
