"""
Fuzzy — "Did you mean" suggestions for mistyped identifiers
"""

from typing import Iterable, List

from rapidfuzz import fuzz, process

MIN_SCORE = 60
MAX_SUGGESTIONS = 3


def suggest(query: str, candidates: Iterable[str], limit: int = MAX_SUGGESTIONS) -> List[str]:
    """
    Closest candidates to query, best first.

    Only candidates scoring at least MIN_SCORE (0-100) are returned.
    """
    choices = sorted(set(candidates))
    if not query or not choices:
        return []
    matches = process.extract(
        query, choices, scorer=fuzz.ratio, limit=limit, score_cutoff=MIN_SCORE
    )
    return [choice for choice, _score, _index in matches]
