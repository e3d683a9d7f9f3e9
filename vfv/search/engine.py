"""One synchronous matching pass over the candidates below a base directory.

The coordinator runs this off the input thread; the CLI ``find`` command
runs it through the same coordinator so both share the matching policy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .fuzzy import EXACT_MATCH_SCORE, contains_folded, equals_folded, fuzzy_score
from .query import SearchQuery
from .walker import Candidate, walk_candidates

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 1000


class SearchError(Exception):
    """Base class for search failures surfaced to callers."""


class QueryTooLongError(SearchError):
    def __init__(self, length: int) -> None:
        super().__init__(f"Query too long ({length} > {MAX_QUERY_LENGTH} characters)")
        self.length = length


class SearchCancelled(SearchError):
    """Raised inside a worker whose handle was abandoned."""


@dataclass(frozen=True)
class SearchResult:
    path: Path
    display_path: str
    score: int
    is_dir: bool

    @property
    def name(self) -> str:
        return self.path.name


def score_candidate(query: SearchQuery, candidate: Candidate) -> int | None:
    """Apply the matching policy to one candidate.

    Exact queries compare names case-insensitively; a path-style exact query
    additionally requires the relative path to contain the query. Fuzzy
    path-style queries score the relative path but still require the name
    to contain the final query segment.
    """
    text = query.text
    if query.exact:
        if query.is_path_query:
            matched = contains_folded(candidate.display_path, text) and equals_folded(
                candidate.name, query.last_segment
            )
        else:
            matched = equals_folded(candidate.name, text)
        return EXACT_MATCH_SCORE if matched else None

    if query.is_path_query:
        score = fuzzy_score(text, candidate.display_path)
        if score is None:
            return None
        if not contains_folded(candidate.name, query.last_segment):
            return None
        return score
    return fuzzy_score(text, candidate.name)


def check_query_length(query: SearchQuery) -> None:
    if len(query.text) > MAX_QUERY_LENGTH:
        raise QueryTooLongError(len(query.text))


def search_entries(
    base_dir: Path,
    query: SearchQuery,
    result_cap: int,
    *,
    walker: Callable[..., Iterable[Candidate]] = walk_candidates,
    should_stop: Callable[[], bool] | None = None,
) -> list[SearchResult]:
    """Walk ``base_dir`` and return the best ``result_cap`` matches for ``query``.

    Raises ``QueryTooLongError`` before touching the filesystem when the query
    text is over ``MAX_QUERY_LENGTH``; raises ``SearchCancelled`` when
    ``should_stop`` turns true mid-walk.
    """
    check_query_length(query)
    if query.is_empty or result_cap <= 0:
        return []

    results: list[SearchResult] = []
    for candidate in walker(base_dir, should_stop=should_stop):
        if should_stop is not None and should_stop():
            raise SearchCancelled("search cancelled")
        if query.dirs_only and not candidate.is_dir:
            continue
        if not candidate.display_path:
            continue
        score = score_candidate(query, candidate)
        if score is None:
            continue
        results.append(
            SearchResult(
                path=candidate.path,
                display_path=candidate.display_path,
                score=score,
                is_dir=candidate.is_dir,
            )
        )

    if should_stop is not None and should_stop():
        raise SearchCancelled("search cancelled")

    results.sort(key=lambda result: result.score, reverse=True)
    logger.debug("query %r under %s matched %d entries", query.text, base_dir, len(results))
    return results[:result_cap]
