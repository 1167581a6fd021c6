"""
PLATE SEARCH SERVICE - Ranked search over the license-plate corpus
==================================================================

Deterministic service that:
- Normalizes the free-text query
- Picks the candidate fetch strategy from the query length
- Scores every candidate with the tiered relevance scorer
- Sorts and paginates the matches

No caching, no shared mutable state: one call, one result.
"""

import logging
from typing import List, Optional, Tuple

from unidecode import unidecode

from config import DEFAULT_LIMIT, MAX_LIMIT, PREFILTER_ENABLED
from db_adapter import PlateRepository
from models import PlateRecord, ScoredCandidate, SearchResult
from normalizer import TRANSLITERATION_DIGRAPHS, normalize
from relevance import score_record
from threshold_policy import max_distance

logger = logging.getLogger(__name__)

DIGRAPH_FIRST_LETTERS = {d[0] for d in TRANSLITERATION_DIGRAPHS}
DIGRAPH_SECOND_LETTERS = {d[1] for d in TRANSLITERATION_DIGRAPHS}


class InvalidPaginationError(ValueError):
    """page/limit rejected before a search is run"""
    pass


def resolve_pagination(page: Optional[int] = None, limit: Optional[int] = None) -> Tuple[int, int]:
    """
    Apply pagination defaults and validate them.

    Without page and limit every match is returned on a single page
    (limit = MAX_LIMIT); otherwise missing or zero values fall back to
    page 1 and DEFAULT_LIMIT.

    Raises:
        InvalidPaginationError: page < 1 or limit outside [1, MAX_LIMIT]
    """
    if page is None and limit is None:
        return 1, MAX_LIMIT

    page = 1 if page is None or page == 0 else page
    limit = DEFAULT_LIMIT if limit is None or limit == 0 else limit

    if page < 1:
        raise InvalidPaginationError("Page must be greater than 0")
    if limit < 1 or limit > MAX_LIMIT:
        raise InvalidPaginationError(f"Limit must be between 1 and {MAX_LIMIT}")
    return page, limit


def can_prefilter(query: str) -> bool:
    """
    True when raw case-insensitive containment gives the same candidates as
    containment on normalized fields.

    A raw umlaut or eszett only shows up as "ae"/"oe"/"ue"/"ss" after
    normalization, so the query must not contain one of those digraphs nor
    start or end in the middle of one. Whitespace and non-ASCII text also
    need the full corpus.
    """
    if not query.isascii() or " " in query:
        return False
    if query[0] in DIGRAPH_SECOND_LETTERS or query[-1] in DIGRAPH_FIRST_LETTERS:
        return False
    return not any(digraph in query for digraph in TRANSLITERATION_DIGRAPHS)


def collation_key(code: str) -> str:
    """Locale-style ordering key: umlauts sort with their base letter (GÖ before GP)"""
    return unidecode(code).casefold()


def sort_key(candidate: ScoredCandidate):
    code = candidate.record.code
    return (candidate.score, collation_key(code), code)


class PlateSearchService:
    """
    Ranked plate search.
    Single responsibility: turn (query, page, limit) into a SearchResult.
    """

    def __init__(self, repository: PlateRepository, prefilter: bool = PREFILTER_ENABLED):
        """
        Args:
            repository: Corpus access (fetch_all / fetch_containing)
            prefilter: Allow fetch_containing() for non-fuzzy queries
        """
        self.repository = repository
        self.prefilter = prefilter

    def search(self, raw_query: str, page: int, limit: int) -> SearchResult:
        """
        Main entry point. page >= 1 and 1 <= limit <= MAX_LIMIT are
        assumed (see resolve_pagination).

        Returns:
            SearchResult with the requested page of ranked matches
        """
        query = normalize(raw_query)
        if not query:
            logger.info("Empty query, nothing to search")
            return SearchResult(data=[], total=0, page=page, limit=limit)

        max_d = max_distance(len(query))
        ranked = self.rank(query, max_d)

        start = (page - 1) * limit
        data = [c.record for c in ranked[start:start + limit]]

        logger.info(f"Search '{query}' (max distance {max_d}): {len(ranked)} matches, "
                    f"page {page} returns {len(data)}")
        return SearchResult(data=data, total=len(ranked), page=page, limit=limit)

    def rank(self, query: str, max_d: int) -> List[ScoredCandidate]:
        """Every match for a normalized query, best first"""
        candidates = self._fetch_candidates(query, max_d)

        scored = []
        for record in candidates:
            candidate = score_record(query, record, max_d)
            if candidate is not None:
                scored.append(candidate)

        scored.sort(key=sort_key)
        if logger.isEnabledFor(logging.DEBUG):
            for c in scored[:10]:
                logger.debug(f"  {c.record.code}: score={c.score} distance={c.distance}")
        return scored

    # =========================================================================
    # CANDIDATES
    # =========================================================================

    def _fetch_candidates(self, query: str, max_d: int) -> List[PlateRecord]:
        """Fetch from the repository; failures are logged and re-raised as-is"""
        use_prefilter = max_d == 0 and self.prefilter and can_prefilter(query)
        strategy = "containing" if use_prefilter else "all"
        try:
            if use_prefilter:
                candidates = self.repository.fetch_containing(query)
            else:
                candidates = self.repository.fetch_all()
        except Exception as e:
            logger.error(f"Error fetching candidates ({strategy}) for '{query}': {e}")
            raise

        logger.debug(f"Fetched {len(candidates)} candidates ({strategy})")
        return candidates
