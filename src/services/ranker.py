"""Ordering and competition ranking of scored schools.

Scores within ``SCORE_EPSILON`` of each other are treated as equal: they
are ordered by name and, when adjacent in the sorted list, share a rank.
The rank after a tie resumes at ``position + 1`` (1, 2, 2, 4, ...).
"""

from __future__ import annotations

from functools import cmp_to_key

from src.services.records import ScoredRecord

SCORE_EPSILON = 1e-5


def scores_tied(a: float, b: float) -> bool:
    return abs(a - b) < SCORE_EPSILON


def compare_scored(a: ScoredRecord, b: ScoredRecord) -> int:
    """Sort comparator: score descending, then name ascending on a tie."""
    if scores_tied(a.raw_score, b.raw_score):
        if a.name < b.name:
            return -1
        if a.name > b.name:
            return 1
        return 0
    return -1 if a.raw_score > b.raw_score else 1


def sort_scored(scored: list[ScoredRecord]) -> list[ScoredRecord]:
    return sorted(scored, key=cmp_to_key(compare_scored))


def assign_ranks(ordered: list[ScoredRecord]) -> list[ScoredRecord]:
    """Annotate an already-sorted list with competition ranks, in place.

    Each entry is compared with its immediate predecessor only; ties are
    never grouped across the whole list.
    """
    for index, entry in enumerate(ordered):
        if index > 0 and scores_tied(entry.raw_score, ordered[index - 1].raw_score):
            entry.rank = ordered[index - 1].rank
        else:
            entry.rank = index + 1
    return ordered


def rank_scored(scored: list[ScoredRecord]) -> list[ScoredRecord]:
    """Sort *scored* and assign ranks.  Returns a new list."""
    return assign_ranks(sort_scored(scored))
