"""
Tests for snapshots.py and taxonomy.py - normalization of entity data.
"""

from types import SimpleNamespace

import pytest

from hub.snapshots import MentorSnapshot, StartupSnapshot
from hub.taxonomy import (
    SPECIALIZATION_NEEDS,
    AvailabilityStatus,
    Industry,
    MenteeStatus,
    Need,
    Specialization,
    coerce,
)


class TestCoerce:
    """Test enum coercion."""

    def test_exact_value(self):
        assert coerce(Industry, "AI/ML") is Industry.AI_ML

    def test_member_passthrough(self):
        assert coerce(Need, Need.FUNDING) is Need.FUNDING

    def test_case_and_whitespace_are_ignored(self):
        assert coerce(Industry, "  e-commerce ") is Industry.E_COMMERCE
        assert coerce(AvailabilityStatus, "BUSY") is AvailabilityStatus.BUSY

    @pytest.mark.parametrize("value", [None, "", "   ", "Space", 42])
    def test_unknown_values_yield_none(self, value):
        assert coerce(Industry, value) is None

    def test_specialization_need_map(self):
        assert SPECIALIZATION_NEEDS == {
            Specialization.FUNDRAISING: Need.FUNDING,
            Specialization.MARKETING: Need.CUSTOMERS,
            Specialization.HR: Need.TALENT,
            Specialization.BUSINESS_STRATEGY: Need.PARTNERSHIPS,
        }


class TestStartupSnapshot:
    """Test startup snapshot construction."""

    def test_missing_fields_default_to_empty(self):
        startup = StartupSnapshot.from_mapping({})
        assert startup.industry is None
        assert startup.tags == ()
        assert startup.looking_for == ()

    def test_none_collections_become_empty(self):
        startup = StartupSnapshot.from_mapping({"tags": None, "looking_for": None})
        assert startup.tags == ()
        assert startup.looking_for == ()

    def test_blank_and_duplicate_tags_are_dropped(self):
        startup = StartupSnapshot.from_mapping({"tags": ["AI", " ", "", None, "AI ", "IoT"]})
        assert startup.tags == ("AI", "IoT")

    def test_camel_case_looking_for(self):
        startup = StartupSnapshot.from_mapping({"lookingFor": ["Funding", "Mentorship", "talent"]})
        assert startup.looking_for == (Need.FUNDING, Need.TALENT)

    def test_from_record(self):
        record = SimpleNamespace(
            id=3,
            name="LearnBridge",
            tagline=None,
            industry=Industry.EDUCATION,
            stage="MVP",
            tags=["EdTech", "Mobile"],
            looking_for=["Partnerships"],
        )
        startup = StartupSnapshot.from_record(record)
        assert startup.id == 3
        assert startup.industry is Industry.EDUCATION
        assert startup.looking_for == (Need.PARTNERSHIPS,)

    def test_to_dict_uses_wire_values(self, example_startup):
        data = example_startup.to_dict()
        assert data["industry"] == "Agriculture"
        assert data["looking_for"] == ["Funding"]
        assert data["tags"] == ["AI", "IoT"]


class TestMentorSnapshot:
    """Test mentor snapshot construction."""

    def test_nested_platform_shape(self, example_mentor):
        assert example_mentor.industries == frozenset({Industry.AGRICULTURE})
        assert example_mentor.specializations == (Specialization.FUNDRAISING,)
        assert example_mentor.availability is AvailabilityStatus.AVAILABLE
        assert example_mentor.rating_average == 4.0
        assert example_mentor.mentees == ()

    def test_flat_keys(self):
        mentor = MentorSnapshot.from_mapping(
            {"availability_status": "busy", "rating_average": 3.5, "rating_count": 2}
        )
        assert mentor.availability is AvailabilityStatus.BUSY
        assert mentor.rating_average == 3.5
        assert mentor.rating_count == 2

    def test_missing_mentees_stay_unknown(self):
        assert MentorSnapshot.from_mapping({}).mentees is None
        assert MentorSnapshot.from_mapping({}).active_mentee_count == 0

    def test_active_mentee_count(self):
        mentor = MentorSnapshot.from_mapping(
            {
                "mentees": [
                    {"startup": 1, "status": "active"},
                    {"startup": 2, "status": "completed"},
                    {"startup": 3, "status": "paused"},
                    {"startup": 4, "status": "active"},
                ]
            }
        )
        assert len(mentor.mentees) == 4
        assert mentor.mentees[0].status is MenteeStatus.ACTIVE
        assert mentor.active_mentee_count == 2

    @pytest.mark.parametrize(
        "average,expected",
        [(None, 0.0), (7, 5.0), (-1, 0.0), ("abc", 0.0), (float("nan"), 0.0), ("4.5", 4.5)],
    )
    def test_rating_is_clamped(self, average, expected):
        mentor = MentorSnapshot.from_mapping({"ratings": {"average": average}})
        assert mentor.rating_average == expected

    @pytest.mark.parametrize(
        "count,expected",
        [(None, 0), ("n/a", 0), ("3.0", 3), (float("nan"), 0), (float("inf"), 0), (-2, 0), (7, 7)],
    )
    def test_malformed_rating_count_is_zeroed(self, count, expected):
        mentor = MentorSnapshot.from_mapping({"ratings": {"average": 4.5, "count": count}})
        assert mentor.rating_count == expected
        assert mentor.rating_average == 4.5

    def test_malformed_rating_count_from_record(self):
        mentor = MentorSnapshot.from_record(SimpleNamespace(rating_average=4.0, rating_count="n/a"))
        assert mentor.rating_count == 0

    def test_unknown_enum_values_are_dropped(self):
        mentor = MentorSnapshot.from_mapping(
            {
                "industries": ["E-commerce", "Space", None],
                "specializations": ["Marketing", "Astrology"],
                "availability": {"status": "on vacation"},
            }
        )
        assert mentor.industries == frozenset({Industry.E_COMMERCE})
        assert mentor.specializations == (Specialization.MARKETING,)
        assert mentor.availability is None

    def test_from_record_without_mentorships(self):
        record = SimpleNamespace(id=5, full_name="Sneha Patel", mentorships=None)
        mentor = MentorSnapshot.from_record(record)
        assert mentor.full_name == "Sneha Patel"
        assert mentor.mentees is None
        assert mentor.expertise == ()

    def test_from_record_with_mentorships(self):
        record = SimpleNamespace(
            id=5,
            full_name="Sneha Patel",
            availability_status=AvailabilityStatus.BUSY,
            rating_average=4.6,
            rating_count=8,
            mentorships=[
                SimpleNamespace(startup_id=1, status=MenteeStatus.ACTIVE),
                SimpleNamespace(startup_id=2, status="paused"),
            ],
        )
        mentor = MentorSnapshot.from_record(record)
        assert mentor.availability is AvailabilityStatus.BUSY
        assert mentor.active_mentee_count == 1
        assert mentor.mentees[1].status is MenteeStatus.PAUSED

    def test_snapshots_are_frozen(self, example_mentor):
        with pytest.raises(AttributeError):
            example_mentor.rating_average = 1.0

    def test_to_dict(self, example_mentor):
        data = example_mentor.to_dict()
        assert data["industries"] == ["Agriculture"]
        assert data["availability"] == "available"
        assert data["active_mentees"] == 0
