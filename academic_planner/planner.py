# -*- coding: utf-8 -*-
"""
Study plan generation with an AI planner and a deterministic fallback.

A ``StudyPlanner`` is any object with an async ``plan`` method. The planner is
constructed by the caller and passed in, so tests can substitute a fake. Any
planner failure (transport error, non-success status, malformed JSON, schema
mismatch) makes ``generate_study_plan`` fall back to the heuristic plan; the
planner is never retried.
"""
from __future__ import annotations

import json
import logging
import re
import typing as t
from datetime import datetime
from zoneinfo import ZoneInfo

import openai
from openai import AsyncOpenAI
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from academic_planner.fallback import generate_fallback_plan, upcoming_assignments
from academic_planner.models import AssignmentItem, PlanSource, StudyPlanResult, StudySession
from productivity_server.models import CalendarEvent
from prompts import load_prompt, render_prompt
from services.shared.errors import ExternalServiceError
from services.shared.models import StudySessionModel, session_from_model

logger = logging.getLogger(__name__)

_SESSIONS_ADAPTER = TypeAdapter(list[StudySessionModel])
_CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")


class StudyPlanner(t.Protocol):
    """An external capability that turns upcoming assignments into sessions."""

    async def plan(
        self,
        assignments: list[AssignmentItem],
        existing_events: list[CalendarEvent],
    ) -> list[StudySession]: ...


def parse_sessions_payload(data: t.Any, tz: t.Optional[ZoneInfo] = None) -> list[StudySession]:
    """Validate a decoded planner response into study sessions.

    Accepts a bare JSON array or an object with a ``studySessions`` array.

    Raises:
        ExternalServiceError: If the payload does not match the session schema.
    """
    if isinstance(data, dict) and "studySessions" in data:
        data = data["studySessions"]
    try:
        models = _SESSIONS_ADAPTER.validate_python(data)
    except SchemaError as e:
        raise ExternalServiceError(f"Planner returned invalid study sessions: {e}") from e
    return [session_from_model(m, tz) for m in models]


def parse_sessions_json(text: str, tz: t.Optional[ZoneInfo] = None) -> list[StudySession]:
    """Decode planner text (optionally wrapped in markdown fences) into sessions."""
    cleaned = _CODE_FENCE_RE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExternalServiceError(f"Invalid JSON response from planner: {e}") from e
    return parse_sessions_payload(data, tz)


def _assignment_line(a: AssignmentItem) -> str:
    return f"- {a.course} {a.title} ({a.type}) - Due: {a.due_date:%a %b %d %Y} - {a.description or 'No description'}"


def _event_line(e: CalendarEvent) -> str:
    return f"- {e.title}: {e.startdatetime:%a %b %d %Y %H:%M} - {e.enddatetime:%H:%M}" + (
        f" (weekly, {e.rrule})" if e.rrule else ""
    )


def build_user_prompt(
    assignments: list[AssignmentItem],
    existing_events: list[CalendarEvent],
    now: datetime,
) -> str:
    return render_prompt(
        "study_planner_user_prompt",
        current_date=f"{now:%a %b %d %Y}",
        assignment_lines="\n".join(_assignment_line(a) for a in assignments),
        event_lines="\n".join(_event_line(e) for e in existing_events) or "- None",
    )


class OpenAIStudyPlanner:
    """Delegates planning to an OpenAI chat completion."""

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: str = "gpt-4",
        tz: t.Optional[ZoneInfo] = None,
        now: t.Callable[[], datetime] = datetime.now,
    ) -> None:
        self.client = client
        self.model = model
        self.tz = tz
        self.now = now
        self.system_prompt = load_prompt("study_planner_system_prompt")

    async def plan(
        self,
        assignments: list[AssignmentItem],
        existing_events: list[CalendarEvent],
    ) -> list[StudySession]:
        prompt = build_user_prompt(assignments, existing_events, self.now())
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=2000,
                temperature=0.7,
            )
        except openai.OpenAIError as e:
            raise ExternalServiceError(f"OpenAI API error: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ExternalServiceError("No response from OpenAI")
        return parse_sessions_json(content, self.tz)


async def generate_study_plan(
    assignments: t.Iterable[AssignmentItem],
    planner: t.Optional[StudyPlanner] = None,
    existing_events: t.Optional[list[CalendarEvent]] = None,
    now: t.Optional[datetime] = None,
) -> StudyPlanResult:
    """Produce study sessions for the assignments due after ``now``.

    Args:
        assignments: Candidate items; past-due ones are filtered out.
        planner: The delegated planner, or None to use the heuristic directly.
        existing_events: Calendar events passed to the planner for conflicts.
        now: Generation time, defaults to the current local time.

    Returns:
        The sessions and their source: "openai", "mock" or "mock_fallback".
    """
    now = now or datetime.now()
    upcoming = upcoming_assignments(assignments, now)
    if not upcoming:
        logger.info("No upcoming assignments found")
        return StudyPlanResult(sessions=[], source="mock" if planner is None else "openai")

    if planner is None:
        logger.warning("No study planner configured. Using mock study plan.")
        return StudyPlanResult(sessions=generate_fallback_plan(upcoming, now), source="mock")

    try:
        sessions = await planner.plan(upcoming, existing_events or [])
    except Exception as e:
        logger.error("Study planner failed, falling back to mock study plan: %s", e)
        return StudyPlanResult(sessions=generate_fallback_plan(upcoming, now), source="mock_fallback")

    future = [s for s in sessions if s.date > now]
    if len(future) < len(sessions):
        logger.warning("Dropped %d study sessions scheduled in the past", len(sessions) - len(future))
    if sessions and not future:
        logger.error("Study planner returned only past sessions, falling back to mock study plan")
        return StudyPlanResult(sessions=generate_fallback_plan(upcoming, now), source="mock_fallback")

    # A remote planner service reports whether it answered with its own fallback.
    source = getattr(planner, "last_source", None)
    if source not in t.get_args(PlanSource):
        source = "openai"
    logger.info("Generated %d study sessions (source: %s)", len(future), source)
    return StudyPlanResult(sessions=future, source=source)
