"""Shared pytest fixtures for the med-school-rankings test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.api.aggregates import get_latest_aggregates
from src.api.rankings import get_dataset
from src.db.base import SubmissionRepository
from src.db.factory import get_submission_repository
from src.db.models import Base, Submission
from src.db.sqlite_repo import SQLiteSubmissionRepository
from src.main import app
from src.services.aggregation import LatestAggregates
from src.services.dataset import load_dataset
from src.services.records import SchoolRecord

# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------

DATASET_CSV = """\
AAMC_Institution,canonical_name,Average GPA,Average MCAT,NIH Research Funding,NIH Research Funding per Faculty,\
Average Graduate Indebtedness,Total Cost of Attendance,Tuition and Fees,#n_ranked_specialties,#n_top10_specialties,\
URM%,Class Size,Tuition and Fees (In-State),Tuition and Fees (Out-of-State),State
Harbor University School of Medicine,harbor,3.92,519,"$610,000,000","$410,000","$205,000","$98,000","$66,000",12,5,18.5%,165,,,MA
Lakeside College of Medicine,lakeside,3.80,515,"$150,000,000","$120,000","$180,000","$82,000","$41,000",6,1,22.0%,120,"$38,000","$70,000",MI
Prairie State Medical School,prairie,3.71,510,"$40,000,000","$60,000","$150,000","$70,000","$30,000",2,0,,140,"$30,000","$58,000",KS
Summit Medical College,summit,3.85,,"$220,000,000",n/a,"$230,000","$105,000","$72,000",8,2,15.0%,100,,,CO
"""


def _create_test_submissions() -> list[Submission]:
    """Verified submissions across three roles, plus one unverified outlier."""
    return [
        Submission(
            email="a@example.edu",
            role="med_student",
            weights={"Average GPA": 10, "Average MCAT": 90},
            verified=True,
        ),
        Submission(
            email="b@example.edu",
            role="med_student",
            weights={"Average GPA": 20, "Average MCAT": 80},
            verified=True,
        ),
        Submission(
            email="c@example.edu",
            role="med_student",
            weights={"Average GPA": 90, "Average MCAT": 10},
            verified=True,
        ),
        Submission(
            email="d@example.edu",
            role="faculty",
            weights={"NIH Research Funding": 100},
            verified=True,
        ),
        Submission(
            email="e@example.edu",
            role="physician",
            weights={"Average GPA": 100},
            verified=False,
        ),
    ]


def make_school(name: str, **attributes: float | None) -> SchoolRecord:
    """Build a record whose attribute keys are given by keyword (see ATTR_KEYWORDS)."""
    return SchoolRecord(id=name, name=name, attributes={ATTR_KEYWORDS[k]: v for k, v in attributes.items()})


ATTR_KEYWORDS = {
    "gpa": "Average GPA",
    "mcat": "Average MCAT",
    "nih": "NIH Research Funding",
    "debt": "Average Graduate Indebtedness",
    "cost": "Total Cost of Attendance",
    "tuition": "Tuition and Fees",
    "urm": "URM%",
    "class_size": "Class Size",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def school_factory():
    """Return :func:`make_school` so tests can build records tersely."""
    return make_school


@pytest.fixture()
def dataset_path(tmp_path) -> str:
    """Write the test dataset CSV and return its path."""
    path = tmp_path / "schools.csv"
    path.write_text(DATASET_CSV, encoding="utf-8")
    return str(path)


@pytest.fixture()
def dataset(dataset_path) -> list[SchoolRecord]:
    return load_dataset(dataset_path)


@pytest.fixture()
def db_path(tmp_path) -> str:
    """Create a temporary SQLite database seeded with submissions and return its path."""
    path = str(tmp_path / "test_submissions.db")
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)

    with Session(sync_engine) as session:
        session.add_all(_create_test_submissions())
        session.commit()

    sync_engine.dispose()
    return path


@pytest.fixture()
def test_repo(db_path) -> SQLiteSubmissionRepository:
    """Return an async :class:`SQLiteSubmissionRepository` backed by the test database."""
    return SQLiteSubmissionRepository(db_path)


@pytest.fixture()
def test_client(db_path, dataset) -> TestClient:
    """Return a FastAPI ``TestClient`` wired to the test database and dataset."""
    repo = SQLiteSubmissionRepository(db_path)
    latest = LatestAggregates()

    def _override_repo() -> SubmissionRepository:
        return repo

    app.dependency_overrides[get_submission_repository] = _override_repo
    app.dependency_overrides[get_dataset] = lambda: dataset
    app.dependency_overrides[get_latest_aggregates] = lambda: latest

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
