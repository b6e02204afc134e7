"""Closed vocabularies shared by startups and mentors.

The values mirror what the platform stores, so they double as the wire
representation (``Industry.AI_ML.value == "AI/ML"``).
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

logger = logging.getLogger(__name__)


class Industry(str, Enum):
    """Industries a startup operates in or a mentor serves."""
    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    FINANCE = "Finance"
    AGRICULTURE = "Agriculture"
    E_COMMERCE = "E-Commerce"
    SAAS = "SaaS"
    AI_ML = "AI/ML"
    IOT = "IoT"
    CLEANTECH = "CleanTech"
    FOODTECH = "FoodTech"
    SOCIAL_IMPACT = "Social Impact"
    OTHER = "Other"


class Specialization(str, Enum):
    """Mentor specializations."""
    BUSINESS_STRATEGY = "Business Strategy"
    PRODUCT_DEVELOPMENT = "Product Development"
    MARKETING = "Marketing"
    SALES = "Sales"
    FUNDRAISING = "Fundraising"
    TECHNOLOGY = "Technology"
    OPERATIONS = "Operations"
    LEGAL = "Legal"
    FINANCE = "Finance"
    HR = "HR"
    DESIGN = "Design"
    GROWTH_HACKING = "Growth Hacking"


class Need(str, Enum):
    """What a startup is looking for."""
    CO_FOUNDER = "Co-Founder"
    MENTOR = "Mentor"
    FUNDING = "Funding"
    TALENT = "Talent"
    PARTNERSHIPS = "Partnerships"
    CUSTOMERS = "Customers"


class Stage(str, Enum):
    """Startup maturity stage."""
    IDEA = "Idea"
    MVP = "MVP"
    EARLY_TRACTION = "Early Traction"
    GROWTH = "Growth"
    SCALE = "Scale"


class AvailabilityStatus(str, Enum):
    """Mentor availability."""
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


class MenteeStatus(str, Enum):
    """State of a mentor ↔ startup relationship."""
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class ApprovalStatus(str, Enum):
    """Admin approval state of a startup or mentor profile."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


# Specializations that directly serve a startup need. Anything not listed
# falls back to the containment rule in the scorer.
SPECIALIZATION_NEEDS: dict[Specialization, Need] = {
    Specialization.FUNDRAISING: Need.FUNDING,
    Specialization.MARKETING: Need.CUSTOMERS,
    Specialization.HR: Need.TALENT,
    Specialization.BUSINESS_STRATEGY: Need.PARTNERSHIPS,
}


E = TypeVar("E", bound=Enum)


def coerce(enum_cls: type[E], value: object) -> E | None:
    """Parse ``value`` into ``enum_cls``.

    Accepts enum members and their string values, ignoring surrounding
    whitespace and case. Anything else yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return enum_cls(text)
    except ValueError:
        pass

    lowered = text.casefold()
    for member in enum_cls:
        if member.value.casefold() == lowered:
            return member

    logger.warning(f"Ignoring unknown {enum_cls.__name__} value: {text!r}")
    return None
