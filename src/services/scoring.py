"""Composite scoring: weighted sum of normalised attribute values.

Weights are percentages but are not required to sum to 100; the
composite is ``sum(normalised * weight / 100)`` with no clamping or
rounding.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from src.services.normaliser import NormalisationStats, compute_all_stats, normalise_value
from src.services.records import SchoolRecord, ScoredRecord
from src.services.registry import AttributeDefinition, eligible_attributes, get_attribute


def active_attributes(weights: Mapping[str, float]) -> list[AttributeDefinition]:
    """Return the eligible attributes that carry a non-zero weight.

    Every key in *weights* must be registered; display-only attributes are
    dropped even when weighted.
    """
    for key in weights:
        get_attribute(key)
    return [attr for attr in eligible_attributes() if weights.get(attr.key, 0)]


def composite_score(normalised: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted sum for a single school's normalised values."""
    total = 0.0
    for key, value in normalised.items():
        weight = weights.get(key, 0)
        if weight:
            total += value * (weight / 100)
    return total


def score_dataset(
    records: Sequence[SchoolRecord],
    weights: Mapping[str, float],
    stats: dict[str, NormalisationStats] | None = None,
) -> list[ScoredRecord]:
    """Score every record against *weights*, preserving input order.

    Attributes with zero weight are never normalised.
    """
    attrs = active_attributes(weights)
    if stats is None:
        stats = compute_all_stats(records, attrs)

    scored: list[ScoredRecord] = []
    for record in records:
        components = {a.key: normalise_value(record.attributes.get(a.key), stats[a.key], a.direction) for a in attrs}
        scored.append(
            ScoredRecord(
                school=record,
                raw_score=composite_score(components, weights),
                component_scores=components,
            )
        )
    return scored
