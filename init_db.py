"""Initialize database schema for the matchmaking service.

Creates the startups, mentors and mentorships tables. With ``--seed`` it also
inserts a small sample of approved startups and mentors.
Run this before starting the API server.
"""

import argparse
import asyncio
import sys

from hub.config import settings
from hub.db import AsyncSessionMaker, engine
from hub.models import Base
from hub.pipelines.ingest import MentorPayload, StartupPayload, add_mentorship, create_mentor, create_startup
from hub.taxonomy import ApprovalStatus, MenteeStatus

SAMPLE_STARTUPS = [
    StartupPayload(
        name="AgroTech Solutions",
        tagline="AI-powered crop management for Indian farmers",
        industry="Agriculture",
        stage="Early Traction",
        tags=["AI", "AgriTech", "Sustainability", "IoT"],
        looking_for=["Co-Founder", "Funding", "Mentor"],
        status=ApprovalStatus.APPROVED,
        featured=True,
    ),
    StartupPayload(
        name="LearnBridge",
        tagline="Bridging the gap in rural education through mobile learning",
        industry="Education",
        stage="MVP",
        tags=["EdTech", "Mobile", "Social Impact", "Vernacular"],
        looking_for=["Co-Founder", "Partnerships", "Funding"],
        status=ApprovalStatus.APPROVED,
        featured=True,
    ),
]

SAMPLE_MENTORS = [
    MentorPayload(
        full_name="Rajesh Kumar",
        title="Chief Strategy Officer",
        organization="TechVentures India",
        expertise=["Business Strategy", "Fundraising", "Go-to-Market", "Team Building"],
        specializations=["Business Strategy", "Finance", "Product Development"],
        industries=["Technology", "Finance", "E-Commerce"],
        availability_status="available",
        hours_per_week=10,
        rating_average=4.8,
        rating_count=12,
        status=ApprovalStatus.APPROVED,
        featured=True,
    ),
    MentorPayload(
        full_name="Sneha Patel",
        title="VP of Marketing",
        organization="GrowthLab",
        expertise=["Digital Marketing", "Growth Hacking", "Brand Strategy", "Content Marketing"],
        specializations=["Marketing", "Sales", "Design"],
        industries=["E-Commerce", "Education", "Healthcare"],
        availability_status="available",
        hours_per_week=8,
        rating_average=4.6,
        rating_count=8,
        status=ApprovalStatus.APPROVED,
        featured=True,
    ),
]


async def init_database(drop: bool = False):
    """Create all database tables."""
    print(f"Initializing database: {settings.db.url}")

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            print("✓ Dropped existing tables")

        await conn.run_sync(Base.metadata.create_all)
        print("✓ Created all tables")

    print(f"Tables: {', '.join(Base.metadata.tables.keys())}")


async def seed_database():
    """Insert sample startups, mentors and one active mentorship."""
    async with AsyncSessionMaker() as session:
        startups = [await create_startup(session, payload) for payload in SAMPLE_STARTUPS]
        mentors = [await create_mentor(session, payload) for payload in SAMPLE_MENTORS]
        await add_mentorship(
            session,
            mentor_id=mentors[1].id,
            startup_id=startups[1].id,
            status=MenteeStatus.ACTIVE,
        )
        await session.commit()

    print(f"✓ Seeded {len(SAMPLE_STARTUPS)} startups and {len(SAMPLE_MENTORS)} mentors")


async def main(args: argparse.Namespace):
    """Main entry point."""
    try:
        await init_database(drop=args.drop)
        if args.seed:
            await seed_database()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="Insert sample startups and mentors")

    try:
        asyncio.run(main(parser.parse_args()))
    except Exception as e:
        print(f"\n❌ Error initializing database: {e}", file=sys.stderr)
        sys.exit(1)
