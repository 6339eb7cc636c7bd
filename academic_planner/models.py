# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import typing as t


AssignmentType = t.Literal["assignment", "exam", "quiz", "project", "midterm", "final"]
SessionType = t.Literal["work_session", "study_session", "review_session"]
PlanSource = t.Literal["openai", "mock", "mock_fallback"]

EXAM_TYPES = ("exam", "midterm", "final")
WORK_TYPES = ("assignment", "project")
ASSIGNMENT_KEYWORDS = ("assignment", "exam", "quiz", "project", "midterm", "final")


@dataclass
class AssignmentItem:
    """A due-date-bearing academic item (assignment, quiz, exam, ...)."""
    title: str
    course: str
    due_date: datetime
    type: AssignmentType = "assignment"
    description: str = ""

    @property
    def is_exam(self) -> bool:
        return self.type in EXAM_TYPES


@dataclass
class StudySession:
    """A planned block of study or work time."""
    title: str
    course: str
    type: SessionType
    duration: float  # hours
    date: datetime
    description: str = ""
    related_assignment: t.Optional[str] = None


@dataclass
class StudyPlanResult:
    """Sessions produced by the study plan generator and where they came from."""
    sessions: list[StudySession] = field(default_factory=list)
    source: PlanSource = "mock"
