"""Subsequence matching used to filter streamed walker candidates."""

from __future__ import annotations

from pathlib import Path


def to_root_relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` against ``query`` as an ordered subsequence.

    Matching is smart-case: an all-lowercase query ignores case, any
    uppercase character makes the match case-sensitive. Returns ``None``
    when ``query`` is not a subsequence of ``candidate``.
    """
    if not query:
        return 0
    if query == query.lower():
        query_cmp = query.casefold()
        candidate_cmp = candidate.casefold()
    else:
        query_cmp = query
        candidate_cmp = candidate

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_cmp:
        idx = candidate_cmp.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_cmp[idx - 1] in "/_- .":
            score += 35
        prev_idx = idx

    score -= len(candidate_cmp) // 5
    return score


def fuzzy_matches(query: str, candidate: str) -> bool:
    return fuzzy_score(query, candidate) is not None


__all__ = ["fuzzy_matches", "fuzzy_score", "to_root_relative"]
