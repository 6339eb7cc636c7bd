"""
Runtime configuration read from environment variables.

Settings are built once by the entry point and passed to the clients and the
driver explicitly.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date


DEFAULT_TZID = "America/Vancouver"
DEFAULT_TERM_START = date(2025, 9, 3)
DEFAULT_TERM_END = date(2025, 12, 3)


def _env_date(name: str, default: date) -> date:
    value = os.getenv(name)
    return date.fromisoformat(value) if value else default


@dataclass
class Settings:
    """Configuration for services, clients and the calendar driver."""
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    productivity_service_url: str = "http://localhost:8003"
    academic_planner_service_url: str = "http://localhost:8002"
    user: str = "student"
    tzid: str = DEFAULT_TZID
    term_start: date = DEFAULT_TERM_START
    term_end: date = DEFAULT_TERM_END
    planner_timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4"),
            productivity_service_url=os.getenv("PRODUCTIVITY_SERVICE_URL", "http://localhost:8003"),
            academic_planner_service_url=os.getenv("ACADEMIC_PLANNER_SERVICE_URL", "http://localhost:8002"),
            user=os.getenv("STUDY_SCHEDULER_USER", "student"),
            tzid=os.getenv("STUDY_SCHEDULER_TZID", DEFAULT_TZID),
            term_start=_env_date("TERM_START", DEFAULT_TERM_START),
            term_end=_env_date("TERM_END", DEFAULT_TERM_END),
            planner_timeout=float(os.getenv("PLANNER_TIMEOUT", "60")),
        )
