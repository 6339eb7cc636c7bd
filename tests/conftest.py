# -*- coding: utf-8 -*-
"""Shared fixtures for the study scheduler tests."""
import typing as t
from datetime import datetime

import pytest

from academic_planner.models import AssignmentItem, StudySession
from productivity_server.models import CalendarEvent
from productivity_server.store import InMemoryCalendarStore
from services.shared.errors import ExternalServiceError


# Two weeks of a September 2025 grid. The first cell is Sunday Aug 31 (padding),
# so Sep 3 and Sep 10 sit at positions 3 and 10, both Wednesdays.
SCHEDULE_HTML = """
<div class="calendar">
  <div class="day empty"></div>
  <div class="day"><div class="day-number">1</div></div>
  <div class="day"><div class="day-number">2</div></div>
  <div class="day">
    <div class="day-number">3</div>
    <div class="class">MATH 2008:30-9:50amHSD A240</div>
    <div class="class">CSC 22511:30-12:20pmECS 123</div>
  </div>
  <div class="day">
    <div class="day-number">4</div>
    <div class="class">Lab TBA</div>
  </div>
  <div class="day">
    <div class="day-number">5</div>
    <div class="class">SENG 2652:30-3:20pmCLE A127</div>
  </div>
  <div class="day"><div class="day-number">6</div></div>
  <div class="day"><div class="day-number">7</div></div>
  <div class="day"><div class="day-number">8</div></div>
  <div class="day reading-break">
    <div class="day-number">9</div>
    <div class="class">SPAN 1009:30-10:20amCLE C112</div>
  </div>
  <div class="day">
    <div class="day-number">10</div>
    <div class="class">MATH 2008:30-9:50amHSD A240</div>
  </div>
  <div class="day"><div class="day-number">11</div></div>
  <div class="day">
    <div class="day-number">12</div>
    <div class="class">SENG 2652:30-3:20pmCLE A127</div>
  </div>
  <div class="day"><div class="day-number">13</div></div>
</div>
"""


class FakePlanner:
    """Returns canned sessions and records what it was asked to plan."""

    def __init__(self, sessions: list[StudySession]) -> None:
        self.sessions = sessions
        self.calls: list[tuple[list[AssignmentItem], list[CalendarEvent]]] = []

    async def plan(
        self,
        assignments: list[AssignmentItem],
        existing_events: list[CalendarEvent],
    ) -> list[StudySession]:
        self.calls.append((assignments, existing_events))
        return self.sessions


class FailingPlanner:
    """Always fails the way an unreachable planner does."""

    def __init__(self) -> None:
        self.calls = 0

    async def plan(self, assignments: t.Any, existing_events: t.Any) -> list[StudySession]:
        self.calls += 1
        raise ExternalServiceError("planner unavailable")


@pytest.fixture
def schedule_html() -> str:
    return SCHEDULE_HTML


@pytest.fixture
def store() -> InMemoryCalendarStore:
    return InMemoryCalendarStore("student")


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 9, 1, 9, 0)


@pytest.fixture
def math_assignment() -> AssignmentItem:
    return AssignmentItem(
        title="Assignment 1",
        course="MATH 200",
        due_date=datetime(2025, 9, 18),
        type="assignment",
        description="Calculus Problems Set 1",
    )


@pytest.fixture
def math_final() -> AssignmentItem:
    return AssignmentItem(
        title="Final Exam",
        course="MATH 200",
        due_date=datetime(2025, 12, 8, 14, 0),
        type="final",
        description="Comprehensive calculus exam",
    )
