"""Ranking pipeline for the medical school rankings page.

Provides weighted scoring of schools against user-defined attribute
weights, deterministic ordering with competition ranks, and name search
over an already-ranked list.  The whole pipeline is a pure function of a
dataset snapshot and a weight vector: nothing is kept between runs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from src.services.normaliser import NormalisationStats, compute_all_stats
from src.services.ranker import rank_scored
from src.services.records import SchoolRecord, ScoredRecord
from src.services.registry import DEFAULT_WEIGHTS, eligible_attributes
from src.services.scoring import score_dataset
from src.services.weights import validate_weights

SEARCH_FIELDS = ("canonical_name",)


# ---------------------------------------------------------------------------
# WeightedScorer
# ---------------------------------------------------------------------------


class WeightedScorer:
    """Scores and ranks schools using user-defined importance weights.

    Weights are percentages keyed by registry attribute.  Unlike a
    weighted average they are *not* rescaled: a vector totalling 50
    simply produces composite scores half as large.  Keys absent from
    the vector count as 0.
    """

    def __init__(self, weights: Mapping[str, float] | None = None) -> None:
        raw = weights if weights is not None else DEFAULT_WEIGHTS
        self._weights = validate_weights(raw)

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def stats(self, schools: Sequence[SchoolRecord]) -> dict[str, NormalisationStats]:
        """Min/max per eligible attribute over *schools*."""
        return compute_all_stats(schools, eligible_attributes())

    def score_schools(self, schools: Sequence[SchoolRecord]) -> list[ScoredRecord]:
        """Composite scores in input order, without ranks."""
        return score_dataset(schools, self._weights)

    def rank_schools(self, schools: Sequence[SchoolRecord]) -> list[ScoredRecord]:
        """Score and rank a list of schools (highest score first)."""
        return rank_scored(self.score_schools(schools))


def rank_dataset(schools: Sequence[SchoolRecord], weights: Mapping[str, float]) -> list[ScoredRecord]:
    """Convenience wrapper: ``WeightedScorer(weights).rank_schools(schools)``."""
    return WeightedScorer(weights).rank_schools(schools)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def filter_by_name(ranked: list[ScoredRecord], term: str | None) -> list[ScoredRecord]:
    """Case-insensitive substring search over display and canonical names.

    Applied after ranking, so the ranks of matching schools are unchanged.
    """
    if not term:
        return ranked
    needle = term.lower()
    result: list[ScoredRecord] = []
    for entry in ranked:
        haystacks = [entry.school.name] + [str(entry.school.extras.get(f) or "") for f in SEARCH_FIELDS]
        if any(needle in h.lower() for h in haystacks):
            result.append(entry)
    return result
