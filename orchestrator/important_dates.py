"""Fall 2025 academic calendar dates added next to the class schedule."""
from __future__ import annotations

from datetime import date

from orchestrator.models import ImportantDate


def _d(month: int, day: int, title: str) -> ImportantDate:
    return ImportantDate(date=date(2025, month, day), title=title)


IMPORTANT_DATES: list[ImportantDate] = [
    # September 2025
    _d(9, 1, "University Closed (Labour Day)"),
    _d(9, 2, "First year registration and opening assembly for Faculty of Law"),
    _d(9, 3, "First term classes begin for all faculties"),
    _d(9, 11, "Last day for adding or dropping courses in the Faculty of Law"),
    _d(9, 16, "Last day for 100% reduction of tuition fees for standard first term and full year courses"),
    _d(9, 19, "Last day for adding courses that begin in the first term (except Faculty of Law)"),
    _d(9, 30, "Last day for paying first term fees without penalty"),
    _d(9, 30, "University Closed (National Day for Truth and Reconciliation)"),
    # October 2025
    _d(10, 3, "Senate meets"),
    _d(10, 7, "Last day for 50% reduction of tuition fees for standard courses"),
    _d(10, 13, "University Closed (Thanksgiving Day)"),
    _d(10, 24, "Senate Committee on Academic Standards meets to approve Convocation lists"),
    _d(10, 31, "Last day for withdrawing from first term courses without penalty of failure"),
    # November 2025
    _d(11, 7, "Senate meets"),
    _d(11, 10, "Reading Break for all faculties"),
    _d(11, 10, "Fall Convocation"),
    _d(11, 11, "University Closed (Remembrance Day)"),
    _d(11, 11, "Reading Break for all faculties"),
    _d(11, 12, "Reading Break for all faculties"),
    _d(11, 12, "Fall Convocation"),
    _d(11, 15, "Faculty of Graduate Studies deadline to apply to graduate for Spring Convocation"),
    # December 2025
    _d(12, 3, "Last day of classes in first term for all faculties"),
    _d(12, 3, "National Day of Remembrance and Action on Violence Against Women"),
    _d(12, 4, "S.E.L. days (Student Experience of Learning survey)"),
    _d(12, 5, "S.E.L. days (Student Experience of Learning survey)"),
    _d(12, 5, "Senate meets"),
    _d(12, 6, "First term examinations begin for all faculties"),
    _d(12, 15, "Undergraduate deadline to apply to graduate for Spring Convocation"),
    _d(12, 20, "First term examinations end for all faculties"),
    *(_d(12, day, "University closed (Winter Break)") for day in range(25, 32)),
]
