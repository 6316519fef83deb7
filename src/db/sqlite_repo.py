from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.db.base import SubmissionInput, SubmissionRepository
from src.db.models import Base, Submission
from src.services.aggregation import WeightSubmission

logger = logging.getLogger(__name__)


class SQLiteSubmissionRepository(SubmissionRepository):
    """SQLite-backed implementation of :class:`SubmissionRepository`.

    Uses *aiosqlite* via SQLAlchemy's async engine.
    """

    def __init__(self, sqlite_path: str = "./data/submissions.db") -> None:
        url = f"sqlite+aiosqlite:///{sqlite_path}"
        self._engine = create_async_engine(url, echo=False)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self._engine, expire_on_commit=False
        )

    @property
    def engine(self) -> AsyncEngine:
        """Expose the underlying async engine."""
        return self._engine

    async def init_db(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def upsert_submission(self, submission: SubmissionInput) -> None:
        async with self._session_factory() as session:
            result = await session.execute(select(Submission).where(Submission.email == submission.email))
            existing = result.scalars().first()
            if existing is None:
                session.add(
                    Submission(
                        email=submission.email,
                        role=submission.role,
                        mcat=submission.mcat,
                        gpa=submission.gpa,
                        weights=dict(submission.weights),
                        verified=submission.verified,
                    )
                )
                logger.info("Stored new submission (role=%r)", submission.role)
            else:
                existing.role = submission.role
                existing.mcat = submission.mcat
                existing.gpa = submission.gpa
                existing.weights = dict(submission.weights)
                existing.verified = submission.verified
                logger.info("Replaced submission id=%d (role=%r)", existing.id, submission.role)
            await session.commit()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_submissions(self, verified_only: bool = True) -> list[WeightSubmission]:
        stmt = select(Submission.role, Submission.weights)
        if verified_only:
            stmt = stmt.where(Submission.verified.is_(True))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [WeightSubmission(weights=dict(weights or {}), role=role) for role, weights in result.all()]

    async def count_submissions(self, verified_only: bool = True) -> int:
        stmt = select(func.count(Submission.id))
        if verified_only:
            stmt = stmt.where(Submission.verified.is_(True))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())
