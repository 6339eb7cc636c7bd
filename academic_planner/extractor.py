# -*- coding: utf-8 -*-
"""
Extraction of assignments and exams.

Two modes produce the same ``AssignmentItem`` list:

- document mode: an ``AssignmentSource`` reads a course document. The
  ``StaticCatalogSource`` looks the course up in a fixed table, while
  ``PdfTextSource`` mines dated keyword lines out of the PDF text.
- reverse mode: ``extract_from_events`` rebuilds items from calendar events
  that were created for assignments and exams earlier.
"""
from __future__ import annotations

import logging
import re
import typing as t
from datetime import datetime
from pathlib import Path

from academic_planner.course_catalog import COURSE_CATALOG
from academic_planner.models import ASSIGNMENT_KEYWORDS, AssignmentItem, AssignmentType
from productivity_server.models import CalendarEvent
from schedule_parser.documents import extract_pdf_pages

logger = logging.getLogger(__name__)

DEPARTMENTS = ("CSC", "SENG", "MATH", "SPAN")
COURSE_CODE_RE = re.compile("(" + "|".join(rf"{dept} \d+" for dept in DEPARTMENTS) + ")")
UNKNOWN_COURSE = "Unknown Course"

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
MONTH_DATE_RE = re.compile(
    r"\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+(\d{1,2})(?:,\s*(\d{4}))?",
    re.IGNORECASE,
)


def extract_course_code(text: str) -> t.Optional[str]:
    """Return the first department course code in ``text``, e.g. "CSC 225"."""
    match = COURSE_CODE_RE.search(text)
    return match.group(1) if match else None


def contains_assignment_keyword(*texts: str) -> bool:
    return any(keyword in text.lower() for text in texts for keyword in ASSIGNMENT_KEYWORDS)


def classify_event_title(title: str) -> AssignmentType:
    """Derive the item type of an existing calendar title.

    Priority: final/exam -> final, midterm, project, quiz, else assignment.
    """
    lowered = title.lower()
    if "exam" in lowered or "final" in lowered:
        return "final"
    if "midterm" in lowered:
        return "midterm"
    if "project" in lowered:
        return "project"
    if "quiz" in lowered:
        return "quiz"
    return "assignment"


def extract_from_events(events: t.Iterable[CalendarEvent]) -> list[AssignmentItem]:
    """Rebuild assignment items from calendar events carrying a keyword."""
    items: list[AssignmentItem] = []
    for event in events:
        description = event.description or ""
        if not contains_assignment_keyword(event.title, description):
            continue
        course = extract_course_code(event.title) or UNKNOWN_COURSE
        items.append(
            AssignmentItem(
                title=event.title.replace(f"{course} - ", ""),
                course=course,
                due_date=event.startdatetime,
                type=classify_event_title(event.title),
                description=description,
            )
        )
    return items


def select_course_documents(paths: t.Iterable[str]) -> list[str]:
    """Keep one document per course code, the first one listed."""
    selected: list[str] = []
    seen: set[str] = set()
    for path in paths:
        course = extract_course_code(Path(path).name) or UNKNOWN_COURSE
        if course in seen:
            logger.info("Skipping %s - already processed %s", path, course)
            continue
        seen.add(course)
        selected.append(path)
    return selected


class AssignmentSource(t.Protocol):
    """Reads the assignments and exams of one course document."""

    def extract(self, path: str) -> list[AssignmentItem]: ...


class StaticCatalogSource:
    """Looks the course named in the document filename up in a fixed table."""

    def __init__(self, catalog: t.Optional[dict[str, list[tuple[str, datetime, str, str]]]] = None) -> None:
        self.catalog = COURSE_CATALOG if catalog is None else catalog

    def extract(self, path: str) -> list[AssignmentItem]:
        course = extract_course_code(Path(path).name) or UNKNOWN_COURSE
        items = [
            AssignmentItem(title=title, course=course, due_date=due, type=kind, description=description)
            for title, due, kind, description in self.catalog.get(course, [])
        ]
        logger.info("Found %d assignments/exams for %s", len(items), course)
        return items


def _classify_text_line(line: str) -> AssignmentType:
    lowered = line.lower()
    for keyword in ("project", "midterm", "final", "exam", "quiz"):
        if keyword in lowered:
            return t.cast(AssignmentType, keyword)
    return "assignment"


def _find_date(line: str, default_year: int) -> t.Optional[tuple[datetime, str]]:
    iso = ISO_DATE_RE.search(line)
    if iso:
        year, month, day = (int(g) for g in iso.groups())
        try:
            return datetime(year, month, day), iso.group(0)
        except ValueError:
            return None

    named = MONTH_DATE_RE.search(line)
    if named:
        month = MONTHS[named.group(1)[:3].lower()]
        year = int(named.group(3)) if named.group(3) else default_year
        try:
            return datetime(year, month, int(named.group(2))), named.group(0)
        except ValueError:
            return None
    return None


class PdfTextSource:
    """Mines "<keyword> ... <date>" lines out of a course PDF."""

    def __init__(
        self,
        term_year: int = 2025,
        read_pages: t.Callable[[str], list[str]] = extract_pdf_pages,
    ) -> None:
        self.term_year = term_year
        self.read_pages = read_pages

    def extract(self, path: str) -> list[AssignmentItem]:
        pages = self.read_pages(path)
        full_text = "\n".join(pages)
        course = (
            extract_course_code(Path(path).name)
            or extract_course_code(full_text)
            or UNKNOWN_COURSE
        )

        items: list[AssignmentItem] = []
        seen: set[tuple[str, datetime]] = set()
        for raw_line in full_text.splitlines():
            line = raw_line.strip()
            if not line or not contains_assignment_keyword(line):
                continue
            found = _find_date(line, self.term_year)
            if found is None:
                continue
            due, date_text = found
            title = re.sub(r"\s{2,}", " ", line.replace(date_text, " ")).strip(" -:,\t")
            if (title, due) in seen:
                continue
            seen.add((title, due))
            items.append(
                AssignmentItem(title=title, course=course, due_date=due, type=_classify_text_line(line))
            )

        logger.info("Mined %d assignments/exams for %s from %s", len(items), course, path)
        return items
