from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from src.services.aggregation import WeightSubmission


@dataclass
class SubmissionInput:
    """A weight submission as received from the submit form."""

    email: str
    weights: dict[str, float] = field(default_factory=dict)
    role: str | None = None
    mcat: float | None = None
    gpa: float | None = None
    verified: bool = False


class SubmissionRepository(ABC):
    """Abstract interface for crowdsourced weight submission storage."""

    @abstractmethod
    async def init_db(self) -> None:
        """Create tables if they do not already exist."""
        ...

    @abstractmethod
    async def upsert_submission(self, submission: SubmissionInput) -> None:
        """Store *submission*, replacing any earlier one from the same email."""
        ...

    @abstractmethod
    async def list_submissions(self, verified_only: bool = True) -> list[WeightSubmission]:
        """Return stored submissions in no particular order."""
        ...

    @abstractmethod
    async def count_submissions(self, verified_only: bool = True) -> int:
        ...
