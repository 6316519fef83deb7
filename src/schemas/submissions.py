"""Pydantic schemas for weight submissions and their aggregates."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubmissionRequest(BaseModel):
    """A crowdsourced weight vector.  Identity verification happens upstream."""

    email: str = Field(min_length=3, max_length=255)
    role: str
    weights: dict[str, int]
    mcat: float | None = Field(default=None, ge=472, le=528)
    gpa: float | None = Field(default=None, ge=0.0, le=4.0)
    verified: bool = False  # set by the upstream verification flow


class SubmissionResponse(BaseModel):
    status: str
    count: int


class AggregateResponse(BaseModel):
    """Median weight vector for one submitter group."""

    role: str
    display_role: str
    weights: dict[str, float]
    count: int
