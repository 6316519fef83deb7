"""Reduce crowdsourced weight submissions to one median weighting per group.

Groups are named predicates over submissions: ``"overall"`` accepts every
submission, and each distinct submitter role gets its own group.  Every
call recomputes from the complete submission set, since a median cannot
be maintained from running totals.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from src.services.normaliser import is_present
from src.services.registry import is_registered
from src.services.roles import OVERALL_ROLE, display_role

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WeightSubmission:
    """One submitted weight vector.  ``role`` may be ``None`` when unknown."""

    weights: dict[str, float]
    role: str | None = None


@dataclass(frozen=True)
class AggregateWeightVector:
    role: str
    weights: dict[str, float] = field(default_factory=dict)
    count: int = 0

    @property
    def display_role(self) -> str:
        return display_role(self.role, self.count)


@dataclass(frozen=True)
class GroupDefinition:
    name: str
    predicate: Callable[[WeightSubmission], bool]

    def members(self, submissions: Iterable[WeightSubmission]) -> list[WeightSubmission]:
        return [s for s in submissions if self.predicate(s)]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


def median(values: Sequence[float]) -> float:
    """Exact median: middle element, or mean of the two middle elements.

    Raises:
        ValueError: If *values* is empty.
    """
    if not values:
        raise ValueError("median() of an empty sequence")
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def median_weights(submissions: Iterable[WeightSubmission]) -> dict[str, float]:
    """Per-attribute median over the values actually submitted.

    A submission that omits a key contributes nothing for it (not zero);
    keys nobody submitted are absent from the result.
    """
    collected: dict[str, list[float]] = {}
    for submission in submissions:
        for key, value in submission.weights.items():
            if not is_present(value):
                continue
            collected.setdefault(key, []).append(value)
    return {key: median(values) for key, values in collected.items()}


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def _role_predicate(role: str) -> Callable[[WeightSubmission], bool]:
    return lambda s: s.role == role


def group_definitions(submissions: Sequence[WeightSubmission]) -> list[GroupDefinition]:
    """``overall`` first, then one group per distinct role sorted by name."""
    groups = [GroupDefinition(OVERALL_ROLE, lambda _s: True)]
    roles = sorted({s.role for s in submissions if s.role})
    for role in roles:
        if role == OVERALL_ROLE:
            logger.warning("Submitter role %r collides with the overall group; counted in overall only", role)
            continue
        groups.append(GroupDefinition(role, _role_predicate(role)))
    return groups


def sanitise_submission(submission: WeightSubmission) -> WeightSubmission:
    """Drop weight keys that are not in the attribute registry."""
    unknown = [k for k in submission.weights if not is_registered(k)]
    if not unknown:
        return submission
    logger.warning("Ignoring unknown attribute keys in submission: %s", ", ".join(sorted(unknown)))
    return WeightSubmission(
        weights={k: v for k, v in submission.weights.items() if is_registered(k)},
        role=submission.role,
    )


def aggregate_submissions(
    submissions: Iterable[WeightSubmission],
    groups: Sequence[GroupDefinition] | None = None,
) -> list[AggregateWeightVector]:
    """Compute one median weight vector per group.

    Groups with no members are omitted from the result.
    """
    clean = [sanitise_submission(s) for s in submissions]
    if groups is None:
        groups = group_definitions(clean)

    result: list[AggregateWeightVector] = []
    for group in groups:
        members = group.members(clean)
        if not members:
            continue
        result.append(AggregateWeightVector(role=group.name, weights=median_weights(members), count=len(members)))

    logger.debug("Aggregated %d submissions into %d groups", len(clean), len(result))
    return result


def find_aggregate(aggregates: Iterable[AggregateWeightVector], role: str) -> AggregateWeightVector | None:
    return next((a for a in aggregates if a.role == role), None)


# ---------------------------------------------------------------------------
# Last-write-wins holder for recomputed aggregates
# ---------------------------------------------------------------------------


class LatestAggregates:
    """Keeps the result of the most recently *started* recompute.

    Callers take a ticket with :meth:`begin` before recomputing and hand it
    back with :meth:`publish`.  A result whose ticket is older than one
    already published is stale and is discarded.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_ticket = 0
        self._published_ticket = -1
        self._current: list[AggregateWeightVector] | None = None

    def begin(self) -> int:
        with self._lock:
            ticket = self._next_ticket
            self._next_ticket += 1
            return ticket

    def publish(self, ticket: int, aggregates: list[AggregateWeightVector]) -> bool:
        with self._lock:
            if ticket < self._published_ticket:
                logger.warning("Discarding stale aggregate recompute (ticket %d < %d)", ticket, self._published_ticket)
                return False
            self._published_ticket = ticket
            self._current = aggregates
            return True

    def current(self) -> list[AggregateWeightVector] | None:
        with self._lock:
            return self._current
