"""
Data models for the calendar reconciliation driver.

Every import or teardown operation returns a summary so a caller can see what
was done even when some items failed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import typing as t


@dataclass
class ImportSummary:
    """Outcome of one import operation."""
    created: int = 0
    failed: int = 0
    skipped: int = 0
    tasks_created: int = 0
    tasks_failed: int = 0
    source: t.Optional[str] = None
    errors: list[str] = field(default_factory=list)

    def merge(self, other: "ImportSummary") -> "ImportSummary":
        return ImportSummary(
            created=self.created + other.created,
            failed=self.failed + other.failed,
            skipped=self.skipped + other.skipped,
            tasks_created=self.tasks_created + other.tasks_created,
            tasks_failed=self.tasks_failed + other.tasks_failed,
            source=other.source or self.source,
            errors=self.errors + other.errors,
        )


@dataclass
class ClearSummary:
    """Outcome of one teardown operation."""
    deleted_events: int = 0
    deleted_tasks: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class ImportantDate:
    """A term date shown as an all-day calendar entry."""
    date: date
    title: str
    all_day: bool = True
