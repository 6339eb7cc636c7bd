# -*- coding: utf-8 -*-
"""
Known Fall 2025 assignments and exams per course.

The table stands in for text mining of the course outline PDFs and is used by
``StaticCatalogSource``.
"""
from __future__ import annotations

from datetime import datetime


# (title, due date, type, description)
COURSE_CATALOG: dict[str, list[tuple[str, datetime, str, str]]] = {
    "CSC 225": [
        ("Assignment 1", datetime(2025, 9, 20), "assignment", "Discrete Math Problems"),
        ("Assignment 2", datetime(2025, 10, 15), "assignment", "Algorithm Analysis"),
        ("Midterm Exam", datetime(2025, 10, 25), "midterm", "In-class midterm"),
        ("Final Exam", datetime(2025, 12, 10), "final", "Comprehensive final exam"),
    ],
    "SENG 265": [
        ("Assignment 1", datetime(2025, 9, 25), "assignment", "C Programming Basics"),
        ("Assignment 2", datetime(2025, 10, 20), "assignment", "Data Structures"),
        ("Midterm Exam", datetime(2025, 11, 5), "midterm", "Programming concepts"),
        ("Final Project", datetime(2025, 12, 1), "project", "Complete software project"),
        ("Final Exam", datetime(2025, 12, 15), "final", "Comprehensive exam"),
    ],
    "SENG 321": [
        ("Assignment 1", datetime(2025, 9, 30), "assignment", "Requirements Analysis"),
        ("Midterm Exam", datetime(2025, 11, 8), "midterm", "Software Engineering Principles"),
        ("Team Project", datetime(2025, 11, 25), "project", "Group software project"),
        ("Final Exam", datetime(2025, 12, 12), "final", "Comprehensive final"),
    ],
    "MATH 200": [
        ("Assignment 1", datetime(2025, 9, 18), "assignment", "Calculus Problems Set 1"),
        ("Assignment 2", datetime(2025, 10, 10), "assignment", "Integration Techniques"),
        ("Midterm Exam", datetime(2025, 10, 28), "midterm", "Differentiation and Integration"),
        ("Assignment 3", datetime(2025, 11, 15), "assignment", "Series and Sequences"),
        ("Final Exam", datetime(2025, 12, 8), "final", "Comprehensive calculus exam"),
    ],
    "SPAN 100": [
        ("Quiz 1", datetime(2025, 9, 22), "quiz", "Vocabulary and Grammar"),
        ("Assignment 1", datetime(2025, 10, 5), "assignment", "Essay in Spanish"),
        ("Midterm Exam", datetime(2025, 11, 12), "midterm", "Oral and Written Exam"),
        ("Final Project", datetime(2025, 12, 20), "project", "Cultural presentation"),
        ("Final Exam", datetime(2025, 12, 18), "final", "Comprehensive language exam"),
    ],
}
