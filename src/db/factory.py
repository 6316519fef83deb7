from __future__ import annotations

from functools import lru_cache

from src.config import get_settings
from src.db.base import SubmissionRepository
from src.db.sqlite_repo import SQLiteSubmissionRepository


@lru_cache
def get_submission_repository() -> SubmissionRepository:
    """Return the appropriate :class:`SubmissionRepository` implementation.

    The backend is selected by the ``DB_BACKEND`` setting:

    * ``"sqlite"`` (default) -- uses :class:`SQLiteSubmissionRepository`
    * ``"postgres"``         -- reserved for a hosted submission store

    Raises:
        NotImplementedError: If the requested backend is not yet implemented.
    """
    settings = get_settings()
    backend = settings.DB_BACKEND.lower()

    if backend == "sqlite":
        return SQLiteSubmissionRepository(settings.SQLITE_PATH)

    if backend == "postgres":
        raise NotImplementedError(
            "PostgreSQL backend is not yet implemented. "
            "Set DB_BACKEND=sqlite or omit the variable to use the default SQLite backend."
        )

    raise ValueError(f"Unknown DB_BACKEND: {backend!r}. Supported values: 'sqlite', 'postgres'.")
