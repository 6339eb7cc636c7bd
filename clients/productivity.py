"""
HTTP client for the productivity service.

``HttpCalendarStore`` implements the ``CalendarStore`` contract by calling the
productivity service REST API. Transport failures and non-success statuses
become ``ExternalServiceError``; a 404 becomes ``NotFoundError`` and a 422
becomes ``ValidationError``.
"""
from __future__ import annotations

import typing as t
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError as SchemaError

from productivity_server.models import CalendarEvent, CalendarEventPayload, Task, TaskPayload
from services.shared.errors import ExternalServiceError, NotFoundError, ValidationError
from services.shared.models import (
    CalendarEventModel,
    TaskModel,
    event_from_model,
    event_payload_to_request,
    task_from_model,
    task_payload_to_request,
)

# Timeout settings for fast operations (in seconds)
STANDARD_TIMEOUT = 30.0


class HttpCalendarStore:
    """Calendar and task persistence backed by the productivity service."""

    def __init__(
        self,
        base_url: str,
        user: str,
        *,
        timeout: float = STANDARD_TIMEOUT,
        tz: t.Optional[ZoneInfo] = None,
        transport: t.Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user = user
        self.timeout = timeout
        self.tz = tz
        self.transport = transport

    async def _request(self, method: str, path: str, json: t.Any = None) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
                headers={"X-User": self.user},
            ) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"{method} {path} timed out after {self.timeout} seconds") from e
        except httpx.HTTPStatusError as e:
            detail = f"{e.response.status_code} {e.response.text}"
            if e.response.status_code == 404:
                raise NotFoundError(detail) from e
            if e.response.status_code == 422:
                raise ValidationError(detail) from e
            raise ExternalServiceError(f"HTTP error from productivity service: {detail}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Error calling productivity service: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response, model: type, many: bool = False) -> t.Any:
        try:
            data = response.json()
            if many:
                return [model.model_validate(item) for item in data]
            return model.model_validate(data)
        except (ValueError, TypeError, SchemaError) as e:
            raise ExternalServiceError(f"Invalid response from productivity service: {e}") from e

    async def create_calendar_event(self, payload: CalendarEventPayload) -> CalendarEvent:
        request = event_payload_to_request(payload)
        response = await self._request("POST", "/calendar/events", json=request.model_dump(mode="json"))
        return event_from_model(self._decode(response, CalendarEventModel), self.tz)

    async def list_calendar_events(self) -> list[CalendarEvent]:
        response = await self._request("GET", "/calendar/events")
        return [event_from_model(m, self.tz) for m in self._decode(response, CalendarEventModel, many=True)]

    async def delete_calendar_event(self, calendar_id: str) -> None:
        await self._request("DELETE", f"/calendar/events/{calendar_id}")

    async def create_task(self, payload: TaskPayload) -> Task:
        request = task_payload_to_request(payload)
        response = await self._request("POST", "/tasks", json=request.model_dump(mode="json"))
        return task_from_model(self._decode(response, TaskModel), self.tz)

    async def list_tasks(self) -> list[Task]:
        response = await self._request("GET", "/tasks")
        return [task_from_model(m, self.tz) for m in self._decode(response, TaskModel, many=True)]

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")
