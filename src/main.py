from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.aggregates import router as aggregates_router
from src.api.health import router as health_router
from src.api.rankings import router as rankings_router
from src.config import get_settings
from src.db.factory import get_submission_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Ensure the data directory and submission tables exist on startup."""
    settings = get_settings()
    if settings.DB_BACKEND.lower() == "sqlite":
        Path(settings.SQLITE_PATH).parent.mkdir(parents=True, exist_ok=True)

    repo = application.dependency_overrides.get(get_submission_repository, get_submission_repository)()
    await repo.init_db()
    logger.info("Submission store ready (%s)", settings.DB_BACKEND)

    yield


app = FastAPI(
    title="Med School Rankings API",
    description="Custom medical school rankings from user-weighted attributes",
    version="0.1.0",
    lifespan=lifespan,
)

_settings = get_settings()
_cors_origins = [o.strip() for o in _settings.CORS_ORIGINS.split(",") if o.strip()] if _settings.CORS_ORIGINS else []
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health_router)
app.include_router(rankings_router)
app.include_router(aggregates_router)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=True)
