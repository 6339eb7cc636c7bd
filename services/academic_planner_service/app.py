"""
FastAPI service for study plan generation.

Wraps ``academic_planner.planner.generate_study_plan`` behind
``POST /study-plan/generate``. When ``OPENAI_API_KEY`` is not configured the
deterministic plan is returned with ``source="mock"``; when the OpenAI call
fails the response carries ``source="mock_fallback"``.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Request
from openai import AsyncOpenAI

from academic_planner.planner import OpenAIStudyPlanner, generate_study_plan
from services.shared.config import Settings
from services.shared.models import (
    StudyPlanRequest,
    StudyPlanResponse,
    assignment_from_model,
    event_from_model,
    session_to_model,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the planner on startup and close its client on shutdown."""
    settings = Settings.from_env()
    app.state.tz = ZoneInfo(settings.tzid)
    app.state.planner = None
    client = None
    if settings.openai_api_key:
        client = AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.planner_timeout)
        app.state.planner = OpenAIStudyPlanner(client, model=settings.openai_model, tz=app.state.tz)
    else:
        logger.warning("OpenAI API key not configured. Study plans will use the mock planner.")

    yield

    if client is not None:
        await client.close()


app = FastAPI(
    title="Academic Planner Service",
    description="REST API for AI-assisted study plan generation",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "academic-planner-service"}


@app.post("/study-plan/generate", response_model=StudyPlanResponse, response_model_by_alias=True)
async def generate(request: StudyPlanRequest, http_request: Request) -> StudyPlanResponse:
    """
    Generate study sessions for the upcoming assignments in the request.

    This endpoint can take up to a minute when the OpenAI planner is used.
    """
    state = http_request.app.state
    logger.info("Generating study plan for %d assignments", len(request.assignments))
    try:
        assignments = [assignment_from_model(a, state.tz) for a in request.assignments]
        existing_events = [event_from_model(e, state.tz) for e in request.existing_events]
        result = await generate_study_plan(
            assignments,
            planner=state.planner,
            existing_events=existing_events,
            now=datetime.now(),
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to generate study plan: {e}")

    return StudyPlanResponse(
        study_sessions=[session_to_model(s) for s in result.sessions],
        source=result.source,
        message=None if result.sessions else "No upcoming assignments found",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)
