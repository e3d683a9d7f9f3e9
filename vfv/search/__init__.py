"""Search package exports.

Combines query parsing, the matching pass and the background coordinator in
one import surface.
"""

from __future__ import annotations

from .coordinator import (
    PENDING,
    SearchCoordinator,
    SearchFailed,
    SearchHandle,
    SearchOutcome,
    SearchPending,
    SearchReady,
    SearchTimeout,
)
from .engine import (
    MAX_QUERY_LENGTH,
    QueryTooLongError,
    SearchCancelled,
    SearchError,
    SearchResult,
    score_candidate,
    search_entries,
)
from .fuzzy import EXACT_MATCH_SCORE, fuzzy_score
from .query import SearchQuery, expand_home, parse_query
from .walker import MAX_WALK_DEPTH, Candidate, walk_candidates

__all__ = [
    "Candidate",
    "EXACT_MATCH_SCORE",
    "MAX_QUERY_LENGTH",
    "MAX_WALK_DEPTH",
    "PENDING",
    "QueryTooLongError",
    "SearchCancelled",
    "SearchCoordinator",
    "SearchError",
    "SearchFailed",
    "SearchHandle",
    "SearchOutcome",
    "SearchPending",
    "SearchQuery",
    "SearchReady",
    "SearchResult",
    "SearchTimeout",
    "expand_home",
    "fuzzy_score",
    "parse_query",
    "score_candidate",
    "search_entries",
    "walk_candidates",
]
