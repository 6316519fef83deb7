"""Submitter roles: storage codes and their display labels."""

from __future__ import annotations

ROLE_UI_TO_DB: dict[str, str] = {
    "Current US medical student": "med_student",
    "Prospective US medical student enrolled in 4-year degree program": "pre_med_4yr",
    "Student (other)": "other_student",
    "Medical school faculty member": "faculty",
    "Physician (resident, attending, etc)": "physician",
}

ROLE_DB_TO_UI: dict[str, str] = {db: ui for ui, db in ROLE_UI_TO_DB.items()}

OVERALL_ROLE = "overall"


def is_known_role(code: str) -> bool:
    return code in ROLE_DB_TO_UI


def role_label(code: str) -> str:
    """Return the display label for a role code, or the code itself if unmapped."""
    return ROLE_DB_TO_UI.get(code, code)


def display_role(code: str, count: int) -> str:
    """Label shown next to an aggregate, e.g. ``"All (12)"``."""
    if code == OVERALL_ROLE:
        return f"All ({count})"
    return f"{role_label(code)} ({count})"
