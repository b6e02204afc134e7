"""Read-only entity snapshots consumed by the compatibility scorer.

Snapshots are built fresh per request from ORM rows (``from_record``) or from
plain documents (``from_mapping``) and never written back. Construction is
where absent data is normalized: ``None`` collections become empty (except
the mentee roster, which stays ``None`` when unknown), blank terms are
dropped, enum values are coerced, and the rating is clamped.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from hub.taxonomy import (
    AvailabilityStatus,
    Industry,
    MenteeStatus,
    Need,
    Specialization,
    Stage,
    coerce,
)

MAX_RATING = 5.0


def _terms(values: Iterable[Any] | None) -> tuple[str, ...]:
    """Strip, drop blanks, and de-duplicate free-text terms (first seen wins)."""
    seen: dict[str, None] = {}
    for value in values or ():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _members(enum_cls, values: Iterable[Any] | None) -> tuple:
    seen: dict = {}
    for value in values or ():
        member = coerce(enum_cls, value)
        if member is not None:
            seen.setdefault(member, None)
    return tuple(seen)


def _rating(value: Any) -> float:
    try:
        rating = float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0
    if rating != rating:  # NaN
        return 0.0
    return min(max(rating, 0.0), MAX_RATING)


def _count(value: Any) -> int:
    try:
        count = float(value or 0)
        if count != count or count < 0:  # NaN or negative
            return 0
        return int(count)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class Mentee:
    """One mentorship relationship held by a mentor."""
    startup_id: int | None = None
    status: MenteeStatus | None = None


@dataclass(frozen=True)
class StartupSnapshot:
    """Fields of a startup the scorer reads, plus display fields."""
    id: int | None = None
    name: str = ""
    tagline: str | None = None
    industry: Industry | None = None
    stage: Stage | None = None
    tags: tuple[str, ...] = ()
    looking_for: tuple[Need, ...] = ()

    @classmethod
    def from_record(cls, record: Any) -> StartupSnapshot:
        """Build from a ``hub.models.Startup`` row."""
        return cls(
            id=getattr(record, "id", None),
            name=getattr(record, "name", None) or "",
            tagline=getattr(record, "tagline", None),
            industry=coerce(Industry, getattr(record, "industry", None)),
            stage=coerce(Stage, getattr(record, "stage", None)),
            tags=_terms(getattr(record, "tags", None)),
            looking_for=_members(Need, getattr(record, "looking_for", None)),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StartupSnapshot:
        """Build from a plain document (snake_case or the dashboard's camelCase)."""
        looking_for = data.get("looking_for", data.get("lookingFor"))
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            tagline=data.get("tagline"),
            industry=coerce(Industry, data.get("industry")),
            stage=coerce(Stage, data.get("stage")),
            tags=_terms(data.get("tags")),
            looking_for=_members(Need, looking_for),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tagline": self.tagline,
            "industry": self.industry.value if self.industry else None,
            "stage": self.stage.value if self.stage else None,
            "tags": list(self.tags),
            "looking_for": [need.value for need in self.looking_for],
        }


@dataclass(frozen=True)
class MentorSnapshot:
    """Fields of a mentor the scorer reads, plus display fields."""
    id: int | None = None
    full_name: str = ""
    title: str | None = None
    organization: str | None = None
    industries: frozenset[Industry] = frozenset()
    expertise: tuple[str, ...] = ()
    specializations: tuple[Specialization, ...] = ()
    availability: AvailabilityStatus | None = None
    rating_average: float = 0.0
    rating_count: int = 0
    # None means the roster is unknown, as opposed to known to be empty.
    mentees: tuple[Mentee, ...] | None = None

    @property
    def active_mentee_count(self) -> int:
        return sum(1 for m in self.mentees or () if m.status is MenteeStatus.ACTIVE)

    @classmethod
    def from_record(cls, record: Any) -> MentorSnapshot:
        """Build from a ``hub.models.Mentor`` row with ``mentorships`` loaded."""
        mentorships = getattr(record, "mentorships", None)
        mentees = None
        if mentorships is not None:
            mentees = tuple(
                Mentee(
                    startup_id=getattr(m, "startup_id", None),
                    status=coerce(MenteeStatus, getattr(m, "status", None)),
                )
                for m in mentorships
            )
        return cls(
            id=getattr(record, "id", None),
            full_name=getattr(record, "full_name", None) or "",
            title=getattr(record, "title", None),
            organization=getattr(record, "organization", None),
            industries=frozenset(_members(Industry, getattr(record, "industries", None))),
            expertise=_terms(getattr(record, "expertise", None)),
            specializations=_members(Specialization, getattr(record, "specializations", None)),
            availability=coerce(AvailabilityStatus, getattr(record, "availability_status", None)),
            rating_average=_rating(getattr(record, "rating_average", None)),
            rating_count=_count(getattr(record, "rating_count", None)),
            mentees=mentees,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MentorSnapshot:
        """Build from a plain document.

        Accepts the nested platform shape (``availability.status``,
        ``ratings.average``, ``mentees[].status``) as well as flat keys.
        """
        availability = data.get("availability")
        if isinstance(availability, Mapping):
            availability = availability.get("status")
        if availability is None:
            availability = data.get("availability_status")

        ratings = data.get("ratings")
        if isinstance(ratings, Mapping):
            rating_average = ratings.get("average")
            rating_count = ratings.get("count")
        else:
            rating_average = data.get("rating_average")
            rating_count = data.get("rating_count")

        raw_mentees = data.get("mentees")
        mentees = None
        if raw_mentees is not None:
            mentees = tuple(
                Mentee(
                    startup_id=m.get("startup_id", m.get("startup")),
                    status=coerce(MenteeStatus, m.get("status")),
                )
                for m in raw_mentees
                if isinstance(m, Mapping)
            )
        return cls(
            id=data.get("id"),
            full_name=data.get("full_name") or "",
            title=data.get("title"),
            organization=data.get("organization"),
            industries=frozenset(_members(Industry, data.get("industries"))),
            expertise=_terms(data.get("expertise")),
            specializations=_members(Specialization, data.get("specializations")),
            availability=coerce(AvailabilityStatus, availability),
            rating_average=_rating(rating_average),
            rating_count=_count(rating_count),
            mentees=mentees,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "title": self.title,
            "organization": self.organization,
            "industries": sorted(industry.value for industry in self.industries),
            "expertise": list(self.expertise),
            "specializations": [s.value for s in self.specializations],
            "availability": self.availability.value if self.availability else None,
            "rating_average": self.rating_average,
            "rating_count": self.rating_count,
            "active_mentees": self.active_mentee_count,
        }
