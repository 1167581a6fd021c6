"""
RELEVANCE SCORER - Tiered scoring of plate candidates
=====================================================

Lower score = better match. Tiers are checked in order and the first one that
matches wins:

    0    exact code
    1    code prefix
    1.5  city/state prefix
    2    code substring
    2.5  city/state substring
    3+d  fuzzy (edit distance d <= max_distance)

Every fuzzy score is worse than every non-fuzzy score.
All inputs are expected to be normalized already (see normalizer.normalize).
"""

from typing import Callable, List, Optional, Tuple

from models import PlateRecord, ScoredCandidate
from normalizer import normalize
from similarity import edit_distance

SCORE_EXACT_CODE = 0.0
SCORE_CODE_PREFIX = 1.0
SCORE_PLACE_PREFIX = 1.5
SCORE_CODE_SUBSTRING = 2.0
SCORE_PLACE_SUBSTRING = 2.5
SCORE_FUZZY_BASE = 3.0


# =============================================================================
# TIERS
# =============================================================================

def is_exact_code(query: str, code: str, city: str, state: str) -> bool:
    return code == query


def is_code_prefix(query: str, code: str, city: str, state: str) -> bool:
    return code.startswith(query)


def is_place_prefix(query: str, code: str, city: str, state: str) -> bool:
    return city.startswith(query) or state.startswith(query)


def is_code_substring(query: str, code: str, city: str, state: str) -> bool:
    return query in code


def is_place_substring(query: str, code: str, city: str, state: str) -> bool:
    return query in city or query in state


TIERS: List[Tuple[float, Callable[[str, str, str, str], bool]]] = [
    (SCORE_EXACT_CODE, is_exact_code),
    (SCORE_CODE_PREFIX, is_code_prefix),
    (SCORE_PLACE_PREFIX, is_place_prefix),
    (SCORE_CODE_SUBSTRING, is_code_substring),
    (SCORE_PLACE_SUBSTRING, is_place_substring),
]


def fuzzy_distance(query: str, code: str, city: str, state: str) -> int:
    """Smallest edit distance between the query and any of the fields"""
    return min(
        edit_distance(query, code),
        edit_distance(query, city),
        edit_distance(query, state),
    )


# =============================================================================
# SCORING
# =============================================================================

def score_with_distance(
    query: str,
    code: str,
    city: str,
    state: str,
    max_distance: int,
) -> Tuple[Optional[float], Optional[int]]:
    """
    Score normalized fields against a normalized query.

    Returns:
        (score, distance); distance is only set for fuzzy hits,
        (None, None) when the candidate does not match at all
    """
    for tier_score, matches in TIERS:
        if matches(query, code, city, state):
            return tier_score, None

    if max_distance > 0:
        distance = fuzzy_distance(query, code, city, state)
        if distance <= max_distance:
            return SCORE_FUZZY_BASE + distance, distance

    return None, None


def score(query: str, code: str, city: str, state: str, max_distance: int) -> Optional[float]:
    """Relevance score of normalized fields, None for no-match"""
    return score_with_distance(query, code, city, state, max_distance)[0]


def score_record(query: str, record: PlateRecord, max_distance: int) -> Optional[ScoredCandidate]:
    """Normalize the record fields and score them; None when the record does not match"""
    value, distance = score_with_distance(
        query,
        normalize(record.code),
        normalize(record.city),
        normalize(record.state),
        max_distance,
    )
    if value is None:
        return None
    return ScoredCandidate(record=record, score=value, distance=distance)
