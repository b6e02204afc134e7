"""FastAPI app exposing the matchmaking queries.

Two read-only endpoints rank mentors for a startup and startups for a mentor.
Authentication and the rest of the platform live in the surrounding shell.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .db import get_session
from .logging_config import setup_logging
from .pipelines.matching import Match, NotFound, find_mentor_matches, find_startup_matches
from .repository import EntityRepository, SqlAlchemyRepository

logger = logging.getLogger(__name__)


# Pydantic response models
class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    scoring_version: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: str | None = None


class SignalTraceDTO(BaseModel):
    """Contribution of one signal to a score."""
    signal: str
    points: float
    max_points: float
    reason: str


class MentorDTO(BaseModel):
    """Mentor as returned in match results."""
    id: int | None
    full_name: str
    title: str | None = None
    organization: str | None = None
    industries: list[str] = Field(default_factory=list)
    expertise: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    availability: str | None = None
    rating_average: float = 0.0
    rating_count: int = 0
    active_mentees: int = 0


class StartupDTO(BaseModel):
    """Startup as returned in match results."""
    id: int | None
    name: str
    tagline: str | None = None
    industry: str | None = None
    stage: str | None = None
    tags: list[str] = Field(default_factory=list)
    looking_for: list[str] = Field(default_factory=list)


class MentorMatchDTO(BaseModel):
    """Ranked mentor candidate."""
    candidate: MentorDTO
    score: int = Field(ge=0, le=100)
    breakdown: list[SignalTraceDTO] = Field(default_factory=list)


class StartupMatchDTO(BaseModel):
    """Ranked startup candidate."""
    candidate: StartupDTO
    score: int = Field(ge=0, le=100)
    breakdown: list[SignalTraceDTO] = Field(default_factory=list)


def _breakdown_dtos(match: Match) -> list[SignalTraceDTO]:
    return [
        SignalTraceDTO(
            signal=t.signal.value,
            points=round(t.points, 2),
            max_points=t.max_points,
            reason=t.reason,
        )
        for t in match.breakdown.traces
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    # Startup
    setup_logging()
    logger.info("Application starting up")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Startup ↔ mentor compatibility ranking",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


async def get_repository(session: AsyncSession = Depends(get_session)) -> EntityRepository:
    """Repository dependency (overridden in tests)."""
    return SqlAlchemyRepository(session)


# Exception handlers
@app.exception_handler(NotFound)
async def not_found_handler(request, exc: NotFound):
    """Unknown anchor startup or mentor."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(error="not_found", detail=str(exc)).model_dump(),
    )


@app.exception_handler(SQLAlchemyError)
async def upstream_error_handler(request, exc: SQLAlchemyError):
    """Storage could not serve the request."""
    logger.error(f"Storage error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse(error="upstream_failure", detail="Storage is unavailable").model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        scoring_version=settings.matching.scoring_version,
    )


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.version,
        "scoring_version": settings.matching.scoring_version,
        "endpoints": {
            "health": "/health",
            "mentors_for_startup": "/api/matchmaking/mentors-for-startup/{startup_id}",
            "startups_for_mentor": "/api/matchmaking/startups-for-mentor/{mentor_id}",
            "docs": "/docs",
        },
    }


@app.get(
    "/api/matchmaking/mentors-for-startup/{startup_id}",
    response_model=list[MentorMatchDTO],
)
async def mentors_for_startup(
    startup_id: int,
    limit: int = Query(
        default=settings.matching.default_limit,
        ge=1,
        le=settings.matching.max_limit,
    ),
    repository: EntityRepository = Depends(get_repository),
) -> list[MentorMatchDTO]:
    """Best mentor matches for a startup, highest score first."""
    matches = await find_mentor_matches(repository, startup_id, limit)
    return [
        MentorMatchDTO(
            candidate=MentorDTO.model_validate(m.candidate.to_dict()),
            score=m.score,
            breakdown=_breakdown_dtos(m),
        )
        for m in matches
    ]


@app.get(
    "/api/matchmaking/startups-for-mentor/{mentor_id}",
    response_model=list[StartupMatchDTO],
)
async def startups_for_mentor(
    mentor_id: int,
    limit: int = Query(
        default=settings.matching.default_limit,
        ge=1,
        le=settings.matching.max_limit,
    ),
    repository: EntityRepository = Depends(get_repository),
) -> list[StartupMatchDTO]:
    """Best startup matches for a mentor, highest score first."""
    matches = await find_startup_matches(repository, mentor_id, limit)
    return [
        StartupMatchDTO(
            candidate=StartupDTO.model_validate(m.candidate.to_dict()),
            score=m.score,
            breakdown=_breakdown_dtos(m),
        )
        for m in matches
    ]
