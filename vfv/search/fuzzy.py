from __future__ import annotations

# Exact-name matches all carry this score; fuzzy scores stay strictly below it.
EXACT_MATCH_SCORE = 1000
MAX_FUZZY_SCORE = EXACT_MATCH_SCORE - 1

_BOUNDARY_CHARS = "/_- ."


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` as an ordered-subsequence match of ``query``.

    Returns ``None`` when some query character cannot be found in order.
    Consecutive runs and word-boundary hits raise the score; gaps and long
    candidates lower it. Matching is case-insensitive. The result is clamped
    to ``[0, MAX_FUZZY_SCORE]``.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 16 + min(16, run * 4)
        else:
            run = 0
            score -= min(24, (idx - prev_idx - 1) * 2)
        if idx == 0 or candidate_folded[idx - 1] in _BOUNDARY_CHARS:
            score += 24
        prev_idx = idx

    if candidate_folded.startswith(query_folded):
        score += 32
    if candidate_folded == query_folded:
        score += 64
    score -= len(candidate_folded) // 5
    return max(0, min(MAX_FUZZY_SCORE, score))


def contains_folded(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def equals_folded(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()
