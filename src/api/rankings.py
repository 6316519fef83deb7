"""Rankings API endpoints.

Runs the ranking pipeline over the loaded dataset for a caller-supplied
weight vector and cost view, and exposes the attribute registry so that
clients can build their weight sliders.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from src.config import get_settings
from src.schemas.rankings import (
    AttributeCategoryResponse,
    AttributeRegistryResponse,
    AttributeResponse,
    RankedSchoolResponse,
    RankingsResponse,
)
from src.services.dataset import CostView, apply_cost_view, load_dataset
from src.services.decision import WeightedScorer, filter_by_name
from src.services.export import rankings_to_csv
from src.services.records import SchoolRecord, ScoredRecord
from src.services.registry import DEFAULT_WEIGHTS, UnknownAttributeError, categories
from src.services.weights import InvalidWeightsError, parse_weights, total_weight

router = APIRouter(tags=["rankings"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


@lru_cache
def get_dataset() -> list[SchoolRecord]:
    """Load the configured dataset once per process."""
    settings = get_settings()
    return load_dataset(settings.DATASET_PATH, name_column=settings.DATASET_NAME_COLUMN)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_scorer(weights: str | None) -> WeightedScorer:
    parsed = parse_weights(weights)
    try:
        return WeightedScorer(parsed if parsed is not None else DEFAULT_WEIGHTS)
    except (UnknownAttributeError, InvalidWeightsError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _resolve_cost_view(cost_view: str | None) -> CostView:
    value = cost_view or get_settings().DEFAULT_COST_VIEW
    try:
        return CostView(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown cost_view {value!r}. Supported values: 'in_state', 'out_of_state'.",
        ) from exc


def _rank(dataset: list[SchoolRecord], scorer: WeightedScorer, view: CostView) -> list[ScoredRecord]:
    return scorer.rank_schools(apply_cost_view(dataset, view))


def _ranked_to_response(entry: ScoredRecord) -> RankedSchoolResponse:
    return RankedSchoolResponse(
        rank=entry.rank,
        id=entry.school.id,
        name=entry.name,
        score=entry.raw_score,
        attributes=dict(entry.school.attributes),
        component_scores=dict(entry.component_scores),
    )


WeightsQuery = Annotated[
    str | None,
    Query(
        description="Comma-separated key:value weights (e.g. 'Average GPA:50,Average MCAT:50'). "
        "Omit to use the default weights.",
    ),
]
CostViewQuery = Annotated[
    str | None,
    Query(description="Which cost figures to rank on: 'in_state' or 'out_of_state'"),
]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/api/attributes", response_model=AttributeRegistryResponse)
async def list_attributes() -> AttributeRegistryResponse:
    """Return the attribute registry grouped by display category."""
    return AttributeRegistryResponse(
        categories=[
            AttributeCategoryResponse(
                name=cat.name,
                attributes=[
                    AttributeResponse(
                        key=a.key,
                        label=a.label,
                        direction=a.direction.value,
                        eligible=a.eligible,
                        tooltip=a.tooltip,
                    )
                    for a in cat.attributes
                ],
            )
            for cat in categories()
        ],
        default_weights=dict(DEFAULT_WEIGHTS),
    )


@router.get("/api/rankings", response_model=RankingsResponse)
async def get_rankings(
    weights: WeightsQuery = None,
    cost_view: CostViewQuery = None,
    search: Annotated[str | None, Query(description="Case-insensitive name search")] = None,
    dataset: list[SchoolRecord] = Depends(get_dataset),
) -> RankingsResponse:
    """Rank every school in the dataset by weighted composite score."""
    scorer = _build_scorer(weights)
    view = _resolve_cost_view(cost_view)
    ranked = filter_by_name(_rank(dataset, scorer, view), search)

    return RankingsResponse(
        schools=[_ranked_to_response(s) for s in ranked],
        weights_used=scorer.weights,
        total_weight=total_weight(scorer.weights),
        cost_view=view.value,
    )


@router.get("/api/rankings/export.csv")
async def export_rankings_csv(
    weights: WeightsQuery = None,
    cost_view: CostViewQuery = None,
    dataset: list[SchoolRecord] = Depends(get_dataset),
) -> Response:
    """Export the full ranking as a downloadable CSV file."""
    scorer = _build_scorer(weights)
    view = _resolve_cost_view(cost_view)
    ranked = _rank(dataset, scorer, view)

    return Response(
        content=rankings_to_csv(ranked),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=med-school-rankings.csv"},
    )
