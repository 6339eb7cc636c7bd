"""
Parse a calendar-grid schedule document into class occurrences.

The grid is a month view: every ``.day`` element is one cell, the first cell
is a Sunday and weeks are always complete (partial weeks are padded with
``.day.empty`` cells). Each ``.class`` element inside a cell holds course
code, time range and location run together, e.g.::

    <div class="day">
      <div class="day-number">3</div>
      <div class="class">MATH 2008:30-9:50amHSD A240</div>
    </div>
"""
from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from schedule_parser.models import ClassOccurrence
from schedule_parser.time_range import parse_time_range
from services.shared.errors import ParseError

logger = logging.getLogger(__name__)

# Fragments have no separators. The course number is read as three digits when
# the rest still starts with a clock hour (1-12), otherwise as four, so
# "ECON 10111:30-..." is ECON 101 at 11:30 and never ECON 1011 at 1:30.
CLASS_ENTRY_RE = re.compile(
    r"^([A-Z]+\s+\d{3,4}?[A-Z]*)((?:1[0-2]|[1-9]):\d{2}-(?:1[0-2]|[1-9]):\d{2}[ap]m)(.+)$"
)
SKIPPED_CELL_CLASSES = {"empty", "reading-break"}


def parse_class_entry(text: str, day_of_week: int) -> ClassOccurrence:
    """Split one class fragment like "MATH 2008:30-9:50amHSD A240".

    Raises:
        ParseError: If the fragment does not contain a course code, a time
            range and a location.
    """
    match = CLASS_ENTRY_RE.match(text.strip())
    if not match:
        raise ParseError(f"Could not parse class format: {text!r}")

    course_name = match.group(1).strip()
    time = match.group(2)
    location = match.group(3).strip()
    time_range = parse_time_range(time)

    return ClassOccurrence(
        course_name=course_name,
        time=time,
        location=location,
        day_of_week=day_of_week,
        start_time=time_range.start_time,
        end_time=time_range.end_time,
    )


def parse_schedule_html(html: str) -> list[ClassOccurrence]:
    """Extract every class occurrence from a calendar-grid document.

    Malformed fragments are logged and skipped; they never abort the document.
    """
    soup = BeautifulSoup(html, "html.parser")
    classes: list[ClassOccurrence] = []

    # The weekday comes from the position among all cells, skipped ones included.
    for position, day in enumerate(soup.select(".day")):
        if SKIPPED_CELL_CLASSES.intersection(day.get("class", [])):
            continue

        day_number = day.select_one(".day-number")
        if day_number is None or not day_number.get_text(strip=True):
            continue

        day_of_week = position % 7
        entries = day.select(".class")
        logger.debug(
            "Day %s: position %d, dayOfWeek %d, %d class elements",
            day_number.get_text(strip=True), position, day_of_week, len(entries),
        )

        for entry in entries:
            text = entry.get_text(strip=True)
            if not text:
                continue
            try:
                classes.append(parse_class_entry(text, day_of_week))
            except ParseError as e:
                logger.warning("Skipping class entry: %s", e)

    return classes
