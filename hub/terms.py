"""Free-text term comparison used by the expertise/tag signal.

The default matcher is a case-insensitive substring test in either direction.
It is a heuristic ("AI" also matches "Cocktail") and the scoring weights are
calibrated against it. A rapidfuzz-backed matcher can be switched on through
``MATCHING_TERM_MATCHER=fuzzy``.
"""
from __future__ import annotations

import logging
from typing import Callable

from rapidfuzz import fuzz

logger = logging.getLogger(__name__)

TermMatcher = Callable[[str, str], bool]


def substring_match(a: str, b: str) -> bool:
    """True if either term contains the other, ignoring case. Blank terms never match."""
    a = a.strip().casefold()
    b = b.strip().casefold()
    if not a or not b:
        return False
    return a in b or b in a


def fuzzy_match(a: str, b: str, threshold: int = 85) -> bool:
    """Substring match, falling back to rapidfuzz partial ratio >= ``threshold``."""
    if substring_match(a, b):
        return True
    a = a.strip().casefold()
    b = b.strip().casefold()
    if not a or not b:
        return False
    return fuzz.partial_ratio(a, b) >= threshold


def get_term_matcher(kind: str = "substring", threshold: int = 85) -> TermMatcher:
    """Return the matcher named by ``kind``."""
    if kind == "substring":
        return substring_match
    if kind == "fuzzy":
        return lambda a, b: fuzzy_match(a, b, threshold)
    raise ValueError(f"Unknown term matcher: {kind!r}")
