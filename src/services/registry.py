"""Attribute registry for the medical school ranking engine.

Single source of truth for every rankable attribute: its dataset key,
display label, direction (higher-is-better vs lower-is-better) and
whether it takes part in scoring at all.  Categories exist for display
only and have no effect on computation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class Direction(str, enum.Enum):
    DIRECT = "direct"  # higher raw value is better
    INVERSE = "inverse"  # lower raw value is better (cost, debt)


class UnknownAttributeError(KeyError):
    """Raised when an attribute key is not defined in the registry."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown attribute: {key!r}")

    def __str__(self) -> str:
        return f"Unknown attribute: {self.key!r}"


@dataclass(frozen=True)
class AttributeDefinition:
    key: str
    label: str
    direction: Direction
    eligible: bool = True
    tooltip: str = ""


@dataclass(frozen=True)
class AttributeCategory:
    name: str
    attributes: tuple[AttributeDefinition, ...]


# ---------------------------------------------------------------------------
# Registry contents
# ---------------------------------------------------------------------------

CATEGORIES: tuple[AttributeCategory, ...] = (
    AttributeCategory(
        "Academics",
        (
            AttributeDefinition("Average GPA", "GPA", Direction.DIRECT, tooltip="Average Undergraduate GPA"),
            AttributeDefinition("Average MCAT", "MCAT", Direction.DIRECT, tooltip="Average MCAT score"),
        ),
    ),
    AttributeCategory(
        "Research",
        (
            AttributeDefinition(
                "NIH Research Funding",
                "Total NIH Funding",
                Direction.DIRECT,
                tooltip="Total Institutional NIH Funding",
            ),
            AttributeDefinition(
                "NIH Research Funding per Faculty",
                "NIH / Faculty",
                Direction.DIRECT,
                tooltip="NIH Funding per Faculty Member",
            ),
        ),
    ),
    AttributeCategory(
        "Finances",
        (
            AttributeDefinition(
                "Average Graduate Indebtedness",
                "Avg Debt",
                Direction.INVERSE,
                tooltip="Average Debt of Graduates",
            ),
            AttributeDefinition(
                "Total Cost of Attendance",
                "Total Cost",
                Direction.INVERSE,
                tooltip="Annual Cost of Attendance",
            ),
            AttributeDefinition("Tuition and Fees", "Tuition + Fees", Direction.INVERSE, tooltip="Tuition and Fees"),
        ),
    ),
    AttributeCategory(
        "Clinical Quality",
        (
            AttributeDefinition(
                "#n_ranked_specialties",
                "Ranked Specialties",
                Direction.DIRECT,
                tooltip="Nationally Ranked Specialties by US News & World Report",
            ),
            AttributeDefinition(
                "#n_top10_specialties",
                "Top 10 Specialties",
                Direction.DIRECT,
                tooltip="Top 10 Ranked Specialties by US News & World Report",
            ),
        ),
    ),
    AttributeCategory(
        "Student Body",
        (
            AttributeDefinition(
                "URM%",
                "% URM",
                Direction.DIRECT,
                tooltip="Underrepresented in Medicine % (Non white/asian)",
            ),
            AttributeDefinition(
                "Class Size",
                "Class Size",
                Direction.DIRECT,
                eligible=False,
                tooltip="Number of Students",
            ),
        ),
    ),
)

REGISTRY: tuple[AttributeDefinition, ...] = tuple(attr for cat in CATEGORIES for attr in cat.attributes)

_BY_KEY: dict[str, AttributeDefinition] = {attr.key: attr for attr in REGISTRY}

DEFAULT_WEIGHTS: dict[str, int] = {
    "Average GPA": 20,
    "Average MCAT": 20,
    "NIH Research Funding": 15,
    "NIH Research Funding per Faculty": 10,
    "Average Graduate Indebtedness": 10,
    "Total Cost of Attendance": 10,
    "Tuition and Fees": 5,
    "#n_ranked_specialties": 5,
    "#n_top10_specialties": 5,
    "URM%": 0,
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def all_attributes() -> tuple[AttributeDefinition, ...]:
    """Return every registered attribute, in display order."""
    return REGISTRY


def eligible_attributes() -> tuple[AttributeDefinition, ...]:
    """Return only the attributes that take part in scoring."""
    return tuple(attr for attr in REGISTRY if attr.eligible)


def categories() -> tuple[AttributeCategory, ...]:
    return CATEGORIES


def is_registered(key: str) -> bool:
    return key in _BY_KEY


def get_attribute(key: str) -> AttributeDefinition:
    """Return the definition for *key*.

    Raises:
        UnknownAttributeError: If *key* is not a registered attribute.
    """
    try:
        return _BY_KEY[key]
    except KeyError:
        raise UnknownAttributeError(key) from None
