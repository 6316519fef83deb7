"""Pydantic schemas for the rankings and attribute registry endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class AttributeResponse(BaseModel):
    key: str
    label: str
    direction: str
    eligible: bool
    tooltip: str = ""


class AttributeCategoryResponse(BaseModel):
    """A display grouping of attributes.  Has no effect on scoring."""

    name: str
    attributes: list[AttributeResponse]


class AttributeRegistryResponse(BaseModel):
    categories: list[AttributeCategoryResponse]
    default_weights: dict[str, float]


class RankedSchoolResponse(BaseModel):
    """A school with its composite score and competition rank."""

    rank: int
    id: str
    name: str
    score: float
    attributes: dict[str, float | None]
    component_scores: dict[str, float]


class RankingsResponse(BaseModel):
    """Response for the rankings endpoint: ordered list of schools."""

    schools: list[RankedSchoolResponse]
    weights_used: dict[str, float]
    total_weight: float
    cost_view: str
