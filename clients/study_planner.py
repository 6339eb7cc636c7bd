"""
HTTP client for the academic planner service.

``HttpStudyPlanner`` posts ``{assignments, existingEvents}`` to
``/study-plan/generate`` and validates the ``{studySessions: [...]}`` reply.
"""
from __future__ import annotations

import typing as t
from zoneinfo import ZoneInfo

import httpx

from academic_planner.models import AssignmentItem, StudySession
from academic_planner.planner import parse_sessions_payload
from productivity_server.models import CalendarEvent
from services.shared.errors import ExternalServiceError
from services.shared.models import StudyPlanRequest, assignment_to_model, event_to_model

# LLM planning can take a while
PLANNER_TIMEOUT = 60.0


class HttpStudyPlanner:
    """Delegates planning to the academic planner service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = PLANNER_TIMEOUT,
        tz: t.Optional[ZoneInfo] = None,
        transport: t.Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.tz = tz
        self.transport = transport
        # "source" of the most recent reply: "openai", "mock" or "mock_fallback".
        self.last_source: t.Optional[str] = None

    async def plan(
        self,
        assignments: list[AssignmentItem],
        existing_events: list[CalendarEvent],
    ) -> list[StudySession]:
        request = StudyPlanRequest(
            assignments=[assignment_to_model(a) for a in assignments],
            existing_events=[event_to_model(e) for e in existing_events],
        )
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/study-plan/generate",
                    json=request.model_dump(mode="json", by_alias=True),
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"Study plan generation timed out after {self.timeout} seconds") from e
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Backend API error: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Error calling academic planner service: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError("Invalid response format from backend API") from e
        if not isinstance(data, dict) or not isinstance(data.get("studySessions"), list):
            raise ExternalServiceError("Invalid response format from backend API")
        sessions = parse_sessions_payload(data, self.tz)
        self.last_source = data.get("source")
        return sessions
