"""Collapse repeated class occurrences into one weekly slot per class."""
from __future__ import annotations

import typing as t

from schedule_parser.models import ClassOccurrence, UniqueClass


def unique_classes(occurrences: t.Iterable[ClassOccurrence]) -> list[UniqueClass]:
    """Keep the first occurrence for each (course, weekday, start time).

    A term grid repeats the same class every week; later duplicates are
    discarded rather than merged. Input order is preserved.
    """
    seen: dict[tuple[str, int, str], UniqueClass] = {}
    for occurrence in occurrences:
        seen.setdefault(occurrence.key, occurrence)
    return list(seen.values())
