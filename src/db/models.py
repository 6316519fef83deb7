from __future__ import annotations

import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Async-compatible declarative base for all ORM models."""


class Submission(Base):
    """A crowdsourced weight vector.  One row per email; resubmitting replaces it."""

    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)  # see src.services.roles
    mcat: Mapped[float | None] = mapped_column(Float, nullable=True)
    gpa: Mapped[float | None] = mapped_column(Float, nullable=True)
    weights: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<Submission(id={self.id}, role={self.role!r}, verified={self.verified})>"
