"""Read-side persistence collaborator for matchmaking.

Loads startup and mentor rows and hands them to the scorer as snapshots.
Candidate pools are ordered by primary key so the fetch order, and therefore
tie order after ranking, is reproducible. Database errors are not caught here.
"""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hub import models
from hub.snapshots import MentorSnapshot, StartupSnapshot
from hub.taxonomy import ApprovalStatus

logger = logging.getLogger(__name__)


class EntityRepository(Protocol):
    """What the match finder needs from storage."""

    async def get_startup_by_id(self, startup_id: int) -> StartupSnapshot | None:
        ...

    async def get_mentor_by_id(self, mentor_id: int) -> MentorSnapshot | None:
        ...

    async def list_approved_active_mentors(self) -> list[MentorSnapshot]:
        ...

    async def list_approved_active_startups(self) -> list[StartupSnapshot]:
        ...


class SqlAlchemyRepository:
    """EntityRepository backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_startup_by_id(self, startup_id: int) -> StartupSnapshot | None:
        query = select(models.Startup).where(models.Startup.id == startup_id)
        result = await self.session.execute(query)
        startup = result.scalar_one_or_none()
        return StartupSnapshot.from_record(startup) if startup else None

    async def get_mentor_by_id(self, mentor_id: int) -> MentorSnapshot | None:
        query = (
            select(models.Mentor)
            .where(models.Mentor.id == mentor_id)
            .options(selectinload(models.Mentor.mentorships))
        )
        result = await self.session.execute(query)
        mentor = result.scalar_one_or_none()
        return MentorSnapshot.from_record(mentor) if mentor else None

    async def list_approved_active_mentors(self) -> list[MentorSnapshot]:
        query = (
            select(models.Mentor)
            .where(
                models.Mentor.status == ApprovalStatus.APPROVED,
                models.Mentor.is_active.is_(True),
            )
            .options(selectinload(models.Mentor.mentorships))
            .order_by(models.Mentor.id)
        )
        result = await self.session.execute(query)
        mentors = [MentorSnapshot.from_record(m) for m in result.scalars().all()]
        logger.debug(f"Loaded {len(mentors)} approved active mentors")
        return mentors

    async def list_approved_active_startups(self) -> list[StartupSnapshot]:
        query = (
            select(models.Startup)
            .where(
                models.Startup.status == ApprovalStatus.APPROVED,
                models.Startup.is_active.is_(True),
            )
            .order_by(models.Startup.id)
        )
        result = await self.session.execute(query)
        startups = [StartupSnapshot.from_record(s) for s in result.scalars().all()]
        logger.debug(f"Loaded {len(startups)} approved active startups")
        return startups
