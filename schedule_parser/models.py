"""
Data models for schedule document parsing.

This module contains the dataclasses produced by the time range parser, the
calendar-grid parser and the class deduplicator.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeRange:
    """A normalized 24-hour clock range, e.g. 08:30 -> 09:50."""
    start_time: str  # "HH:MM" 24h
    end_time: str    # "HH:MM" 24h


@dataclass(frozen=True)
class ClassOccurrence:
    """
    One class meeting found in a single grid cell, like:
    - "MATH 2008:30-9:50amHSD A240" in the third cell of a week row
    """
    course_name: str
    time: str            # raw text, "8:30-9:50am"
    location: str
    day_of_week: int     # 0=Sunday ... 6=Saturday
    start_time: str      # "HH:MM" 24h
    end_time: str        # "HH:MM" 24h

    @property
    def key(self) -> tuple[str, int, str]:
        return (self.course_name, self.day_of_week, self.start_time)


# A weekly recurring slot has the same shape as the occurrence it was taken from.
UniqueClass = ClassOccurrence
