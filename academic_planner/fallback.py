# -*- coding: utf-8 -*-
"""
Deterministic study plan used whenever the AI planner is unavailable.

Assignments and projects get two or three 2-hour work sessions spread across
the time left; exams get a rising cadence of study sessions ending with a
3-hour review. Every session falls strictly between now and the item's due
date, and every upcoming item gets at least one. The generator never raises.
"""
from __future__ import annotations

import math
import typing as t
from datetime import datetime, timedelta

from academic_planner.models import EXAM_TYPES, AssignmentItem, StudySession


def upcoming_assignments(items: t.Iterable[AssignmentItem], now: datetime) -> list[AssignmentItem]:
    """Items due strictly after ``now``, earliest first."""
    return sorted((a for a in items if a.due_date > now), key=lambda a: a.due_date)


def days_until(due: datetime, now: datetime) -> int:
    return math.ceil((due - now).total_seconds() / 86400)


def _session_date(now: datetime, offset_days: int, hour: int) -> datetime:
    date = (now + timedelta(days=offset_days)).replace(hour=hour, minute=0, second=0, microsecond=0)
    # A same-day slot that has already passed moves to the following day.
    while date <= now:
        date += timedelta(days=1)
    return date


def _next_hour(now: datetime, due: datetime) -> datetime:
    """The top of the next hour, or halfway to ``due`` when that comes first."""
    date = now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
    if date < due:
        return date
    return now + (due - now) / 2


def _last_chance_session(item: AssignmentItem, now: datetime) -> StudySession:
    if item.type in EXAM_TYPES:
        label, kind = "Final Review", "review_session"
    elif item.type == "quiz":
        label, kind = "Study Session", "study_session"
    else:
        label, kind = "Work Session", "work_session"
    hours_left = (item.due_date - now).total_seconds() / 3600
    return StudySession(
        title=f"{label}: {item.title}",
        course=item.course,
        type=kind,
        duration=min(2, max(round(hours_left, 2), 0.25)),
        date=_next_hour(now, item.due_date),
        description=f"Finish {item.title} before it is due",
        related_assignment=item.title,
    )


def _work_sessions(item: AssignmentItem, now: datetime, days: int) -> list[StudySession]:
    sessions = []
    num_sessions = 3 if days > 14 else 2
    kind = "study_session" if item.type == "quiz" else "work_session"
    label = "Study Session" if item.type == "quiz" else "Work Session"
    for i in range(num_sessions):
        offset = math.floor(days * (0.3 + i * 0.3))
        sessions.append(
            StudySession(
                title=f"{label}: {item.title}",
                course=item.course,
                type=kind,
                duration=2,
                date=_session_date(now, offset, 14 + (i % 2) * 2),  # 2 PM or 4 PM
                description=f"Work on {item.title} - {item.description or 'Complete the assignment requirements'}",
                related_assignment=item.title,
            )
        )
    return sessions


def _exam_sessions(item: AssignmentItem, now: datetime, days: int) -> list[StudySession]:
    sessions = []
    num_sessions = 5 if days > 21 else max(3, math.floor(days / 7))
    for i in range(num_sessions):
        offset = math.floor(days * (0.2 + i * 0.15))
        is_review = i == num_sessions - 1
        sessions.append(
            StudySession(
                title=f"{'Final Review' if is_review else 'Study Session'}: {item.title}",
                course=item.course,
                type="review_session" if is_review else "study_session",
                duration=3 if is_review else 2,
                date=_session_date(now, offset, 15 + (i % 3)),  # 3, 4 or 5 PM
                description=(
                    f"{'Final review and practice problems for' if is_review else 'Study material for'} {item.title}"
                ),
                related_assignment=item.title,
            )
        )
    return sessions


def generate_fallback_plan(items: t.Iterable[AssignmentItem], now: datetime) -> list[StudySession]:
    """Heuristic study plan for every item due after ``now``."""
    sessions: list[StudySession] = []
    for item in upcoming_assignments(items, now):
        days = days_until(item.due_date, now)
        if item.type in EXAM_TYPES:
            planned = _exam_sessions(item, now, days)
        else:
            planned = _work_sessions(item, now, days)
        # Slots rolled past the deadline are dropped; every item keeps at least one session.
        planned = [s for s in planned if s.date < item.due_date]
        sessions.extend(planned or [_last_chance_session(item, now)])
    return sessions
