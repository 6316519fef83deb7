"""Weight vector helpers used at the edges of the ranking engine.

Weights are integer percentages keyed by registry attribute.  The engine
itself does not require them to total 100; only crowdsourced submissions
are held to that.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping

from src.services.registry import get_attribute

MIN_WEIGHT = 0
MAX_WEIGHT = 100
SUBMISSION_TOTAL = 100


class InvalidWeightsError(ValueError):
    """Raised when a weight vector is malformed or out of range."""


def parse_weights(weights_str: str | None) -> dict[str, float] | None:
    """Parse a ``key:value,key:value`` weight string into a dict.

    Example input: ``"Average GPA:30,Average MCAT:30,Tuition and Fees:40"``
    """
    if not weights_str:
        return None
    result: dict[str, float] = {}
    for pair in weights_str.split(","):
        pair = pair.strip()
        if ":" not in pair:
            continue
        key, _, val = pair.rpartition(":")
        try:
            result[key.strip()] = float(val.strip())
        except ValueError:
            continue
    return result or None


def validate_weights(weights: Mapping[str, object]) -> dict[str, float]:
    """Check every key is registered and every value is within [0, 100].

    Raises:
        UnknownAttributeError: For a key that is not in the registry.
        InvalidWeightsError: For a non-numeric or out-of-range value.
    """
    validated: dict[str, float] = {}
    for key, value in weights.items():
        get_attribute(key)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidWeightsError(f"Weight for {key!r} must be a number, got {value!r}")
        if not MIN_WEIGHT <= value <= MAX_WEIGHT:
            raise InvalidWeightsError(f"Weight for {key!r} must be between {MIN_WEIGHT} and {MAX_WEIGHT}, got {value}")
        validated[key] = value
    return validated


def total_weight(weights: Mapping[str, float]) -> float:
    return sum(weights.values())


def validate_submission_weights(weights: Mapping[str, object]) -> dict[str, float]:
    """Validate *weights* for crowdsourced submission: they must total exactly 100."""
    validated = validate_weights(weights)
    total = total_weight(validated)
    if total != SUBMISSION_TOTAL:
        raise InvalidWeightsError(f"Weights sum to {total:g}%. Must be {SUBMISSION_TOTAL}%.")
    return validated


def rescale_weights(weights: Mapping[str, float]) -> dict[str, float]:
    """Proportionally rescale *weights* to integer percentages totalling 100.

    The rounding remainder goes to the largest rescaled weight.  An all-zero
    vector is returned unchanged.
    """
    total = total_weight(weights)
    if total == 0:
        return dict(weights)

    rescaled = {key: round(value / total * SUBMISSION_TOTAL) for key, value in weights.items()}
    diff = SUBMISSION_TOTAL - sum(rescaled.values())
    if diff:
        largest = max(rescaled, key=lambda k: rescaled[k])
        rescaled[largest] += diff
    return rescaled


def zero_weights(weights: Mapping[str, float]) -> dict[str, float]:
    return {key: 0 for key in weights}
