from __future__ import annotations

from fastapi import APIRouter

from src.services.registry import eligible_attributes

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check() -> dict[str, str | int]:
    """Readiness probe.  Does not touch the dataset or the submission store."""
    return {"status": "ok", "rankable_attributes": len(eligible_attributes())}
