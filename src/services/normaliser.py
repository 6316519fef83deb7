"""Min/max normalisation of raw attribute values onto [0, 1].

Stats are computed over whichever effective dataset is being ranked and
are never cached between runs.  Missing or non-numeric values are an
expected condition: they are replaced by the worst-case extreme for the
attribute's direction, so a missing value always normalises to 0.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from src.services.records import SchoolRecord
from src.services.registry import AttributeDefinition, Direction, eligible_attributes


@dataclass(frozen=True)
class NormalisationStats:
    min: float
    max: float

    @property
    def degenerate(self) -> bool:
        return not self.max > self.min


# Used when no school has a present value for an attribute
EMPTY_STATS = NormalisationStats(min=0.0, max=1.0)


def is_present(value: Any) -> bool:
    """Return True if *value* is a usable finite number."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def present_values(records: Iterable[SchoolRecord], key: str) -> list[float]:
    return [float(v) for v in (r.attributes.get(key) for r in records) if is_present(v)]


def compute_stats(records: Sequence[SchoolRecord], key: str) -> NormalisationStats:
    """Exact min and max of the present values for *key*."""
    values = present_values(records, key)
    if not values:
        return EMPTY_STATS
    return NormalisationStats(min=min(values), max=max(values))


def compute_all_stats(
    records: Sequence[SchoolRecord],
    attributes: Iterable[AttributeDefinition] | None = None,
) -> dict[str, NormalisationStats]:
    attrs = eligible_attributes() if attributes is None else attributes
    return {attr.key: compute_stats(records, attr.key) for attr in attrs if attr.eligible}


def normalise_value(value: Any, stats: NormalisationStats, direction: Direction) -> float:
    """Map one raw value onto [0, 1] using *stats*.

    A missing value is substituted with ``max`` for inverse attributes and
    ``min`` for direct ones, which always yields 0.  A degenerate range
    (``max == min``) yields 0 regardless of direction.
    """
    if stats.degenerate:
        # Uniform attributes contribute nothing, not even after inversion
        return 0.0

    if is_present(value):
        raw = float(value)
    else:
        raw = stats.max if direction is Direction.INVERSE else stats.min

    normalised = (raw - stats.min) / (stats.max - stats.min)
    if direction is Direction.INVERSE:
        normalised = 1.0 - normalised
    return normalised


def normalise_dataset(
    records: Sequence[SchoolRecord],
    attributes: Iterable[AttributeDefinition] | None = None,
    stats: dict[str, NormalisationStats] | None = None,
) -> list[dict[str, float]]:
    """Return one ``{attribute key: normalised value}`` mapping per record.

    The result is index-aligned with *records*.
    """
    attrs = [a for a in (eligible_attributes() if attributes is None else attributes) if a.eligible]
    if stats is None:
        stats = compute_all_stats(records, attrs)
    return [{a.key: normalise_value(r.attributes.get(a.key), stats[a.key], a.direction) for a in attrs} for r in records]
