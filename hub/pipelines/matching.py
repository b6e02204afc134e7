"""Match finder: rank the opposite side's candidate pool against an anchor.

Both entry points follow the same workflow:
1. Load the anchor (startup or mentor); unknown ids raise NotFound
2. Load the approved, active pool on the other side
3. Score every candidate against the anchor
4. Stable sort by score, descending, so ties keep fetch order
5. Truncate to ``limit``

Nothing is written back. Storage errors propagate unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from hub.config import settings
from hub.repository import EntityRepository
from hub.scoring import CompatibilityScorer, ScoreBreakdown
from hub.snapshots import MentorSnapshot, StartupSnapshot
from hub.terms import get_term_matcher

logger = logging.getLogger(__name__)

C = TypeVar("C", MentorSnapshot, StartupSnapshot)

DEFAULT_LIMIT = 10


class MatchmakingError(Exception):
    """Base class for matchmaking failures."""
    pass


class NotFound(MatchmakingError):
    """Raised when the anchor startup or mentor does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} {entity_id} not found")


@dataclass
class Match(Generic[C]):
    """One ranked candidate."""
    candidate: C
    score: int
    breakdown: ScoreBreakdown


def build_scorer() -> CompatibilityScorer:
    """Scorer configured from ``settings.matching``."""
    matcher = get_term_matcher(
        settings.matching.term_matcher,
        threshold=settings.matching.fuzzy_threshold,
    )
    return CompatibilityScorer(term_matcher=matcher)


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def rank_candidates(matches: Iterable[Match], limit: int) -> list[Match]:
    """Sort by score descending and keep the first ``limit``.

    ``sorted`` is stable (also with ``reverse=True``), so equal scores keep
    their input order.
    """
    _check_limit(limit)
    ranked = sorted(matches, key=lambda m: m.score, reverse=True)
    return ranked[:limit]


async def find_mentor_matches(
    repository: EntityRepository,
    startup_id: int,
    limit: int = DEFAULT_LIMIT,
    *,
    scorer: CompatibilityScorer | None = None,
) -> list[Match[MentorSnapshot]]:
    """Rank approved, active mentors for a startup.

    Args:
        repository: Storage collaborator
        startup_id: Anchor startup id
        limit: Maximum number of matches to return
        scorer: Scorer to use (default built from settings)

    Returns:
        Up to ``limit`` matches, best first

    Raises:
        NotFound: If the startup does not exist
        ValueError: If ``limit`` is negative
    """
    _check_limit(limit)
    scorer = scorer or build_scorer()

    startup = await repository.get_startup_by_id(startup_id)
    if startup is None:
        logger.warning(f"Mentor matching requested for unknown startup {startup_id}")
        raise NotFound("startup", startup_id)

    mentors = await repository.list_approved_active_mentors()
    logger.info(
        f"Scoring {len(mentors)} mentors for startup {startup_id} "
        f"(scoring {settings.matching.scoring_version})"
    )

    scored = []
    for mentor in mentors:
        breakdown = scorer.explain(startup, mentor)
        logger.debug(f"startup={startup_id} mentor={mentor.id} score={breakdown.score}")
        scored.append(Match(candidate=mentor, score=breakdown.score, breakdown=breakdown))

    matches = rank_candidates(scored, limit)
    logger.info(f"Returning {len(matches)} mentor matches for startup {startup_id}")
    return matches


async def find_startup_matches(
    repository: EntityRepository,
    mentor_id: int,
    limit: int = DEFAULT_LIMIT,
    *,
    scorer: CompatibilityScorer | None = None,
) -> list[Match[StartupSnapshot]]:
    """Rank approved, active startups for a mentor.

    Raises:
        NotFound: If the mentor does not exist
        ValueError: If ``limit`` is negative
    """
    _check_limit(limit)
    scorer = scorer or build_scorer()

    mentor = await repository.get_mentor_by_id(mentor_id)
    if mentor is None:
        logger.warning(f"Startup matching requested for unknown mentor {mentor_id}")
        raise NotFound("mentor", mentor_id)

    startups = await repository.list_approved_active_startups()
    logger.info(
        f"Scoring {len(startups)} startups for mentor {mentor_id} "
        f"(scoring {settings.matching.scoring_version})"
    )

    scored = []
    for startup in startups:
        breakdown = scorer.explain(startup, mentor)
        logger.debug(f"mentor={mentor_id} startup={startup.id} score={breakdown.score}")
        scored.append(Match(candidate=startup, score=breakdown.score, breakdown=breakdown))

    matches = rank_candidates(scored, limit)
    logger.info(f"Returning {len(matches)} startup matches for mentor {mentor_id}")
    return matches
