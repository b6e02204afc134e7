"""
Pytest configuration and shared fixtures.
"""

import os

# Settings are read at import time; point the app at SQLite before importing hub.
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from hub.models import Base
from hub.snapshots import MentorSnapshot, StartupSnapshot


class FakeRepository:
    """In-memory EntityRepository returning pools in insertion order."""

    def __init__(self, startups=(), mentors=()):
        self.startups = {s.id: s for s in startups}
        self.mentors = {m.id: m for m in mentors}
        self.pool_fetches = 0

    async def get_startup_by_id(self, startup_id):
        return self.startups.get(startup_id)

    async def get_mentor_by_id(self, mentor_id):
        return self.mentors.get(mentor_id)

    async def list_approved_active_mentors(self):
        self.pool_fetches += 1
        return list(self.mentors.values())

    async def list_approved_active_startups(self):
        self.pool_fetches += 1
        return list(self.startups.values())


@pytest.fixture
def example_startup_doc():
    """Startup document from the worked scoring example."""
    return {
        "id": 1,
        "name": "AgroTech Solutions",
        "industry": "Agriculture",
        "tags": ["AI", "IoT"],
        "lookingFor": ["Funding"],
    }


@pytest.fixture
def example_mentor_doc():
    """Mentor document from the worked scoring example (scores 86)."""
    return {
        "id": 10,
        "full_name": "Rajesh Kumar",
        "industries": ["Agriculture"],
        "expertise": ["AI Strategy"],
        "specializations": ["Fundraising"],
        "availability": {"status": "available"},
        "ratings": {"average": 4},
        "mentees": [],
    }


@pytest.fixture
def example_startup(example_startup_doc):
    return StartupSnapshot.from_mapping(example_startup_doc)


@pytest.fixture
def example_mentor(example_mentor_doc):
    return MentorSnapshot.from_mapping(example_mentor_doc)


@pytest.fixture
def fake_repository():
    """Factory for FakeRepository instances."""
    return FakeRepository


@pytest.fixture
async def db_session(tmp_path):
    """Async session on a fresh SQLite database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
