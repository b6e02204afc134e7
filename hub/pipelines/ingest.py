"""Ingestion helpers for startups, mentors and mentorships.

Used by the seed script and tests. Payloads are validated with pydantic, so
an unknown industry, need or specialization is rejected here rather than
silently scoring zero later.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from .. import models
from ..taxonomy import ApprovalStatus, AvailabilityStatus, Industry, MenteeStatus, Need, Specialization, Stage


class StartupPayload(BaseModel):
    """Structured startup data."""
    name: str = Field(min_length=1, max_length=100)
    tagline: str | None = Field(default=None, max_length=200)
    description: str | None = None
    industry: Industry
    stage: Stage | None = None
    tags: list[str] = Field(default_factory=list)
    looking_for: list[Need] = Field(default_factory=list)
    status: ApprovalStatus = ApprovalStatus.PENDING
    is_active: bool = True
    featured: bool = False


class MentorPayload(BaseModel):
    """Structured mentor data."""
    full_name: str = Field(min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=100)
    organization: str | None = None
    bio: str | None = None
    expertise: list[str] = Field(default_factory=list)
    industries: list[Industry] = Field(default_factory=list)
    specializations: list[Specialization] = Field(default_factory=list)
    availability_status: AvailabilityStatus | None = AvailabilityStatus.AVAILABLE
    hours_per_week: int | None = Field(default=5, ge=0, le=40)
    rating_average: float = Field(default=0.0, ge=0.0, le=5.0)
    rating_count: int = Field(default=0, ge=0)
    status: ApprovalStatus = ApprovalStatus.PENDING
    is_active: bool = True
    featured: bool = False


async def create_startup(session: AsyncSession, payload: StartupPayload) -> models.Startup:
    """Insert a startup and flush to obtain its id."""
    startup = models.Startup(
        name=payload.name,
        tagline=payload.tagline,
        description=payload.description,
        industry=payload.industry,
        stage=payload.stage,
        tags=[t.strip() for t in payload.tags if t.strip()],
        looking_for=[need.value for need in payload.looking_for],
        status=payload.status,
        is_active=payload.is_active,
        featured=payload.featured,
    )
    session.add(startup)
    await session.flush()
    return startup


async def create_mentor(session: AsyncSession, payload: MentorPayload) -> models.Mentor:
    """Insert a mentor and flush to obtain its id."""
    mentor = models.Mentor(
        full_name=payload.full_name,
        title=payload.title,
        organization=payload.organization,
        bio=payload.bio,
        expertise=[e.strip() for e in payload.expertise if e.strip()],
        industries=[industry.value for industry in payload.industries],
        specializations=[spec.value for spec in payload.specializations],
        availability_status=payload.availability_status,
        hours_per_week=payload.hours_per_week,
        rating_average=payload.rating_average,
        rating_count=payload.rating_count,
        status=payload.status,
        is_active=payload.is_active,
        featured=payload.featured,
    )
    session.add(mentor)
    await session.flush()
    return mentor


async def add_mentorship(
    session: AsyncSession,
    *,
    mentor_id: int,
    startup_id: int,
    status: MenteeStatus = MenteeStatus.ACTIVE,
) -> models.Mentorship:
    """Record that a mentor mentors a startup."""
    mentorship = models.Mentorship(mentor_id=mentor_id, startup_id=startup_id, status=status)
    session.add(mentorship)
    await session.flush()
    return mentorship
