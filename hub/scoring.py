"""Startup ↔ mentor compatibility scoring with per-signal audit traces.

Six independent signals are summed, clamped to [0, 100] and rounded half-up:

    industry        30   startup industry is one the mentor serves
    expertise       25   mentor expertise overlapping startup tags
    specialization  20   mentor specializations serving startup needs
    availability    10   available 10, busy 3, otherwise 0
    rating          10   linear in the mentor's average rating (0..5)
    capacity         5   known roster with fewer than 3 active mentees

The scorer is pure and total: missing data contributes zero, nothing raises.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from hub.snapshots import MAX_RATING, MentorSnapshot, StartupSnapshot
from hub.taxonomy import SPECIALIZATION_NEEDS, AvailabilityStatus
from hub.terms import TermMatcher, substring_match

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


class Signal(str, Enum):
    """Scoring signals."""
    INDUSTRY = "industry"
    EXPERTISE = "expertise"
    SPECIALIZATION = "specialization"
    AVAILABILITY = "availability"
    RATING = "rating"
    CAPACITY = "capacity"


@dataclass(frozen=True)
class SignalWeights:
    """Maximum points per signal and the tier/threshold parameters."""
    industry: float = 30.0
    expertise: float = 25.0
    specialization: float = 20.0
    available: float = 10.0
    busy: float = 3.0
    rating: float = 10.0
    capacity: float = 5.0
    capacity_threshold: int = 3


DEFAULT_WEIGHTS = SignalWeights()


@dataclass
class SignalTrace:
    """Audit trace for a single signal evaluation."""
    signal: Signal
    points: float
    max_points: float
    reason: str


@dataclass
class ScoreBreakdown:
    """Per-signal traces and the resulting integer score."""
    score: int
    raw_total: float
    traces: list[SignalTrace] = field(default_factory=list)

    def points(self, signal: Signal) -> float:
        for trace in self.traces:
            if trace.signal is signal:
                return trace.points
        return 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


class CompatibilityScorer:
    """Scores how well one startup and one mentor fit.

    The function is the same whichever side is the anchor; it only differs in
    which fields it reads from each snapshot.
    """

    def __init__(
        self,
        weights: SignalWeights = DEFAULT_WEIGHTS,
        term_matcher: TermMatcher = substring_match,
    ):
        self.weights = weights
        self.term_matcher = term_matcher

    def score(self, startup: StartupSnapshot, mentor: MentorSnapshot) -> int:
        """Return the compatibility score in [0, 100]."""
        return self.explain(startup, mentor).score

    def explain(self, startup: StartupSnapshot, mentor: MentorSnapshot) -> ScoreBreakdown:
        """Evaluate every signal and return the traces with the final score."""
        traces = [
            self._eval_industry(startup, mentor),
            self._eval_expertise(startup, mentor),
            self._eval_specialization(startup, mentor),
            self._eval_availability(mentor),
            self._eval_rating(mentor),
            self._eval_capacity(mentor),
        ]
        raw_total = sum(t.points for t in traces)
        clamped = min(max(raw_total, MIN_SCORE), MAX_SCORE)
        return ScoreBreakdown(score=round_half_up(clamped), raw_total=raw_total, traces=traces)

    def _eval_industry(self, startup: StartupSnapshot, mentor: MentorSnapshot) -> SignalTrace:
        max_points = self.weights.industry
        if startup.industry is None:
            return SignalTrace(Signal.INDUSTRY, 0.0, max_points, "Startup has no industry")
        if startup.industry in mentor.industries:
            return SignalTrace(
                Signal.INDUSTRY,
                max_points,
                max_points,
                f"Mentor serves {startup.industry.value}",
            )
        return SignalTrace(
            Signal.INDUSTRY,
            0.0,
            max_points,
            f"Mentor does not serve {startup.industry.value}",
        )

    def _eval_expertise(self, startup: StartupSnapshot, mentor: MentorSnapshot) -> SignalTrace:
        max_points = self.weights.expertise
        matched = [
            skill
            for skill in mentor.expertise
            if any(self.term_matcher(skill, tag) for tag in startup.tags)
        ]
        tag_count = max(len(startup.tags), 1)
        points = min(len(matched) / tag_count * max_points, max_points)
        if not matched:
            reason = "No expertise overlaps startup tags"
        else:
            reason = f"{len(matched)} expertise term(s) over {len(startup.tags)} tag(s): {', '.join(matched)}"
        return SignalTrace(Signal.EXPERTISE, points, max_points, reason)

    def _eval_specialization(self, startup: StartupSnapshot, mentor: MentorSnapshot) -> SignalTrace:
        max_points = self.weights.specialization
        matched = [
            spec
            for spec in mentor.specializations
            if any(
                SPECIALIZATION_NEEDS.get(spec) is need
                or need.value.casefold() in spec.value.casefold()
                for need in startup.looking_for
            )
        ]
        need_count = max(len(startup.looking_for), 1)
        points = min(len(matched) / need_count * max_points, max_points)
        if not matched:
            reason = "No specialization serves the startup's needs"
        else:
            reason = (
                f"{len(matched)} specialization(s) over {len(startup.looking_for)} need(s): "
                f"{', '.join(s.value for s in matched)}"
            )
        return SignalTrace(Signal.SPECIALIZATION, points, max_points, reason)

    def _eval_availability(self, mentor: MentorSnapshot) -> SignalTrace:
        max_points = max(self.weights.available, self.weights.busy)
        if mentor.availability is AvailabilityStatus.AVAILABLE:
            points = self.weights.available
        elif mentor.availability is AvailabilityStatus.BUSY:
            points = self.weights.busy
        else:
            points = 0.0
        status = mentor.availability.value if mentor.availability else "unknown"
        return SignalTrace(Signal.AVAILABILITY, points, max_points, f"Availability: {status}")

    def _eval_rating(self, mentor: MentorSnapshot) -> SignalTrace:
        max_points = self.weights.rating
        points = mentor.rating_average / MAX_RATING * max_points
        return SignalTrace(
            Signal.RATING,
            points,
            max_points,
            f"Average rating {mentor.rating_average:g}/{MAX_RATING:g}",
        )

    def _eval_capacity(self, mentor: MentorSnapshot) -> SignalTrace:
        max_points = self.weights.capacity
        if mentor.mentees is None:
            return SignalTrace(Signal.CAPACITY, 0.0, max_points, "Mentee roster unknown")
        active = mentor.active_mentee_count
        threshold = self.weights.capacity_threshold
        if active < threshold:
            return SignalTrace(
                Signal.CAPACITY,
                max_points,
                max_points,
                f"{active} active mentee(s), below {threshold}",
            )
        return SignalTrace(
            Signal.CAPACITY,
            0.0,
            max_points,
            f"{active} active mentee(s), at capacity ({threshold})",
        )


default_scorer = CompatibilityScorer()


def calculate_match_score(startup: StartupSnapshot, mentor: MentorSnapshot) -> int:
    """Score a pair with the default weights and substring term matching."""
    return default_scorer.score(startup, mentor)
