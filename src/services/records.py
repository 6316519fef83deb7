"""Data containers shared by the ranking pipeline stages.

Kept free of any I/O so that the normaliser, scorer and ranker can be
used on records built from CSV rows, API payloads or test fixtures alike.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SchoolRecord:
    """One institution and its raw attribute values.

    ``attributes`` maps registry keys to a number or ``None`` (missing).
    ``variants`` holds alternative figures (e.g. in-state vs out-of-state
    cost) that are substituted into ``attributes`` upstream of ranking.
    ``extras`` carries any other dataset columns verbatim for display.
    """

    id: str
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    variants: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass
class ScoredRecord:
    """A school together with its composite score and competition rank."""

    school: SchoolRecord
    raw_score: float
    rank: int = 0
    component_scores: dict[str, float] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.school.name
