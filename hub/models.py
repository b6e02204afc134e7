"""Core SQLAlchemy models (2.x style) for startups, mentors and mentorships.

These rows are owned by the surrounding platform; the matchmaking code only
reads them. List-valued fields are stored as JSON arrays of enum values.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Enum, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from hub.taxonomy import ApprovalStatus, AvailabilityStatus, Industry, MenteeStatus, Stage


def _enum_column(enum_cls: type, name: str) -> Enum:
    """Store enum *values* ("AI/ML"), not member names, without a native DB type."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Startup(Base):
    """Startup profiles."""
    __tablename__ = "startups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tagline: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[Industry] = mapped_column(_enum_column(Industry, "industry"), nullable=False, index=True)
    stage: Mapped[Stage | None] = mapped_column(_enum_column(Stage, "stage"))
    tags: Mapped[list[str] | None] = mapped_column(JSON)
    looking_for: Mapped[list[str] | None] = mapped_column(JSON)  # Need values
    status: Mapped[ApprovalStatus] = mapped_column(
        _enum_column(ApprovalStatus, "approval_status"),
        default=ApprovalStatus.PENDING,
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    mentorships: Mapped[list[Mentorship]] = relationship("Mentorship", back_populates="startup")

    __table_args__ = (
        Index("ix_startups_status_active", "status", "is_active"),
    )


class Mentor(Base):
    """Mentor profiles."""
    __tablename__ = "mentors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(100))
    organization: Mapped[str | None] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text)
    expertise: Mapped[list[str] | None] = mapped_column(JSON)
    industries: Mapped[list[str] | None] = mapped_column(JSON)  # Industry values
    specializations: Mapped[list[str] | None] = mapped_column(JSON)  # Specialization values
    availability_status: Mapped[AvailabilityStatus | None] = mapped_column(
        _enum_column(AvailabilityStatus, "availability_status"),
        default=AvailabilityStatus.AVAILABLE,
        index=True,
    )
    hours_per_week: Mapped[int | None] = mapped_column(Integer, default=5)
    rating_average: Mapped[float] = mapped_column(Float, default=0.0, nullable=False, index=True)
    rating_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[ApprovalStatus] = mapped_column(
        _enum_column(ApprovalStatus, "approval_status"),
        default=ApprovalStatus.PENDING,
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Refreshed by a separate batch job; matchmaking queries never write it.
    match_score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    mentorships: Mapped[list[Mentorship]] = relationship(
        "Mentorship",
        back_populates="mentor",
        order_by="Mentorship.id",
    )

    __table_args__ = (
        Index("ix_mentors_status_active", "status", "is_active"),
    )


class Mentorship(Base):
    """A mentor's relationship with one startup (the mentor's mentees)."""
    __tablename__ = "mentorships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mentor_id: Mapped[int] = mapped_column(ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False, index=True)
    startup_id: Mapped[int] = mapped_column(ForeignKey("startups.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[MenteeStatus] = mapped_column(
        _enum_column(MenteeStatus, "mentee_status"),
        default=MenteeStatus.ACTIVE,
        nullable=False,
    )
    started_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)

    # Relationships
    mentor: Mapped[Mentor] = relationship("Mentor", back_populates="mentorships")
    startup: Mapped[Startup] = relationship("Startup", back_populates="mentorships")

    __table_args__ = (
        Index("ix_mentorships_mentor_status", "mentor_id", "status"),
    )
