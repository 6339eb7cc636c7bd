"""
Exception types shared by the schedule engine, the planner and the
productivity services.
"""
from __future__ import annotations


class StudySchedulerError(Exception):
    """Base class for all study scheduler errors."""


class ParseError(StudySchedulerError):
    """Raised when time or class text does not match the expected grammar."""


class ValidationError(StudySchedulerError):
    """Raised when a create request is missing a required field."""


class ExternalServiceError(StudySchedulerError):
    """Raised when the planner or persistence collaborator fails."""


class NotFoundError(StudySchedulerError):
    """Raised when an entity is absent or not owned by the acting user."""
