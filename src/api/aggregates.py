"""Crowdsourced weight submission and aggregate endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.db.base import SubmissionInput, SubmissionRepository
from src.db.factory import get_submission_repository
from src.schemas.submissions import AggregateResponse, SubmissionRequest, SubmissionResponse
from src.services.aggregation import (
    AggregateWeightVector,
    LatestAggregates,
    aggregate_submissions,
    find_aggregate,
)
from src.services.registry import UnknownAttributeError
from src.services.roles import OVERALL_ROLE, ROLE_DB_TO_UI, is_known_role
from src.services.weights import InvalidWeightsError, validate_submission_weights

router = APIRouter(tags=["aggregates"])

_latest = LatestAggregates()


def get_latest_aggregates() -> LatestAggregates:
    return _latest


async def _recompute(repo: SubmissionRepository, latest: LatestAggregates) -> list[AggregateWeightVector]:
    """Recompute every aggregate from the full submission set and publish it."""
    ticket = latest.begin()
    aggregates = aggregate_submissions(await repo.list_submissions(verified_only=True))
    if not latest.publish(ticket, aggregates):
        # A newer recompute already landed; serve that one instead
        return latest.current() or aggregates
    return aggregates


def _aggregate_to_response(agg: AggregateWeightVector) -> AggregateResponse:
    return AggregateResponse(role=agg.role, display_role=agg.display_role, weights=dict(agg.weights), count=agg.count)


@router.get("/api/aggregates", response_model=list[AggregateResponse])
async def list_aggregates(
    repo: SubmissionRepository = Depends(get_submission_repository),
    latest: LatestAggregates = Depends(get_latest_aggregates),
) -> list[AggregateResponse]:
    """Median weights for all submissions (``overall``) and for each role.

    Recomputed from the store on every request, so rows written or verified
    outside this process are always reflected.
    """
    aggregates = await _recompute(repo, latest)
    return [_aggregate_to_response(a) for a in aggregates]


@router.post("/api/submissions", response_model=SubmissionResponse, status_code=201)
async def create_submission(
    request: SubmissionRequest,
    repo: SubmissionRepository = Depends(get_submission_repository),
    latest: LatestAggregates = Depends(get_latest_aggregates),
) -> SubmissionResponse:
    """Store a weight submission and refresh the aggregates.

    Weights must use registered attribute keys and total exactly 100.
    """
    if not is_known_role(request.role):
        raise HTTPException(
            status_code=400,
            detail=f"Unknown role {request.role!r}. Supported values: {', '.join(sorted(ROLE_DB_TO_UI))}.",
        )
    try:
        weights = validate_submission_weights(request.weights)
    except (UnknownAttributeError, InvalidWeightsError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    await repo.upsert_submission(
        SubmissionInput(
            email=request.email,
            weights=weights,
            role=request.role,
            mcat=request.mcat,
            gpa=request.gpa,
            verified=request.verified,
        )
    )
    aggregates = await _recompute(repo, latest)
    overall = find_aggregate(aggregates, OVERALL_ROLE)
    return SubmissionResponse(status="ok", count=overall.count if overall else 0)
