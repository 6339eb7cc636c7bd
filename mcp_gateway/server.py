"""
MCP Gateway Server - Unified entry point for the study scheduler.

Exposes the schedule parser, the assignment extractor and the study planner
as MCP tools. Calendar reads go to the productivity service and planning is
delegated to the academic planner service over HTTP; when the planner service
is unavailable the deterministic plan is used instead.
"""
from __future__ import annotations

import typing as t
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastmcp import FastMCP

from academic_planner.extractor import (
    AssignmentSource,
    StaticCatalogSource,
    extract_from_events,
    select_course_documents,
)
from academic_planner.planner import StudyPlanner, generate_study_plan as plan_sessions
from clients.productivity import HttpCalendarStore
from clients.study_planner import HttpStudyPlanner
from productivity_server.formatting import format_calendar_events, format_tasks
from productivity_server.store import CalendarStore
from schedule_parser.dedup import unique_classes
from schedule_parser.documents import read_schedule_html
from schedule_parser.html_grid import parse_schedule_html
from schedule_parser.recurrence import build_class_event
from services.shared.config import Settings
from services.shared.models import (
    AssignmentModel,
    CreateCalendarEventRequest,
    StudyPlanResponse,
    assignment_to_model,
    event_payload_to_request,
    session_to_model,
)

mcp = FastMCP("StudySchedulerGateway")


def _store(settings: Settings) -> HttpCalendarStore:
    return HttpCalendarStore(settings.productivity_service_url, settings.user, tz=ZoneInfo(settings.tzid))


def _planner(settings: Settings) -> HttpStudyPlanner:
    return HttpStudyPlanner(
        settings.academic_planner_service_url,
        timeout=settings.planner_timeout,
        tz=ZoneInfo(settings.tzid),
    )


def get_service_status(settings: Settings) -> dict[str, str]:
    """
    Get the configured endpoints of the services behind the gateway.
    """
    return {
        "academic_planner_service": settings.academic_planner_service_url,
        "productivity_service": settings.productivity_service_url,
        "user": settings.user,
        "timezone": settings.tzid,
        "gateway_status": "running",
    }


def _parse_schedule(html: str) -> list[dict[str, t.Any]]:
    return [
        {
            "course_name": c.course_name,
            "day_of_week": c.day_of_week,
            "start_time": c.start_time,
            "end_time": c.end_time,
            "location": c.location,
        }
        for c in unique_classes(parse_schedule_html(html))
    ]


def _build_class_events(html: str, start_date: date, end_date: date, tzid: str) -> list[CreateCalendarEventRequest]:
    payloads = [
        build_class_event(c, start_date, end_date, tzid=tzid)
        for c in unique_classes(parse_schedule_html(html))
    ]
    return [event_payload_to_request(p) for p in payloads]


def _extract_assignments(paths: list[str], source: AssignmentSource) -> list[AssignmentModel]:
    items = []
    for path in select_course_documents(paths):
        items.extend(source.extract(path))
    return [assignment_to_model(item) for item in items]


async def _generate_study_plan(
    store: CalendarStore,
    planner: t.Optional[StudyPlanner],
    now: t.Optional[datetime] = None,
) -> StudyPlanResponse:
    events = await store.list_calendar_events()
    result = await plan_sessions(
        extract_from_events(events),
        planner=planner,
        existing_events=events,
        now=now,
    )
    return StudyPlanResponse(
        study_sessions=[session_to_model(s) for s in result.sessions],
        source=result.source,
        message=None if result.sessions else "No upcoming assignments found",
    )


async def _show_calendar_events(store: CalendarStore) -> str:
    return format_calendar_events(await store.list_calendar_events())


async def _show_tasks(store: CalendarStore) -> str:
    return format_tasks(await store.list_tasks())


@mcp.tool()
def parse_schedule(html_path_or_url: str) -> list[dict[str, t.Any]]:
    """Parse a calendar-grid schedule page into its unique weekly classes.

    :param html_path_or_url: Local path or URL of the schedule HTML.
    :return: One entry per (course, weekday, start time), day 0 being Sunday.
    """
    return _parse_schedule(read_schedule_html(html_path_or_url))


@mcp.tool()
def build_class_events(
    html_path_or_url: str,
    start_date: t.Optional[str] = None,
    end_date: t.Optional[str] = None,
) -> list[CreateCalendarEventRequest]:
    """Build the weekly recurring calendar events for a schedule page.

    :param html_path_or_url: Local path or URL of the schedule HTML.
    :param start_date: First term day (YYYY-MM-DD), defaults to TERM_START.
    :param end_date: Last term day (YYYY-MM-DD), defaults to TERM_END.
    :return: Event payloads with their RRULE, not yet written to the calendar.
    """
    settings = Settings.from_env()
    return _build_class_events(
        read_schedule_html(html_path_or_url),
        date.fromisoformat(start_date) if start_date else settings.term_start,
        date.fromisoformat(end_date) if end_date else settings.term_end,
        settings.tzid,
    )


@mcp.tool()
def extract_assignments(document_paths: list[str]) -> list[AssignmentModel]:
    """List the assignments and exams of the courses named by the documents."""
    return _extract_assignments(document_paths, StaticCatalogSource())


@mcp.tool()
async def generate_study_plan() -> StudyPlanResponse:
    """Plan study sessions for the assignments and exams on the calendar.

    The sessions are returned, not written to the calendar.
    """
    settings = Settings.from_env()
    return await _generate_study_plan(_store(settings), _planner(settings))


@mcp.tool()
async def show_calendar_events() -> str:
    """Displays all calendar events of the configured user as a table."""
    return await _show_calendar_events(_store(Settings.from_env()))


@mcp.tool()
async def show_tasks() -> str:
    """Displays all tasks of the configured user as a table."""
    return await _show_tasks(_store(Settings.from_env()))


@mcp.tool()
def get_gateway_info() -> dict[str, str]:
    """
    Get information about the MCP Gateway and connected services.
    """
    return get_service_status(Settings.from_env())


if __name__ == "__main__":
    mcp.run()
