"""Load the medical school dataset and derive cost-view variants.

The CSV is read with every column as text; numeric attribute columns are
then coerced here, stripping currency and percent formatting, so that the
ranking engine only ever sees numbers or ``None``.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import polars as pl

from src.services.records import SchoolRecord
from src.services.registry import is_registered

logger = logging.getLogger(__name__)

DEFAULT_NAME_COLUMN = "AAMC_Institution"
ID_COLUMN = "canonical_name"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


class CostView(str, enum.Enum):
    IN_STATE = "in_state"
    OUT_OF_STATE = "out_of_state"


# attribute key -> {view: variant column}
COST_VARIANTS: dict[str, dict[CostView, str]] = {
    "Tuition and Fees": {
        CostView.IN_STATE: "Tuition and Fees (In-State)",
        CostView.OUT_OF_STATE: "Tuition and Fees (Out-of-State)",
    },
    "Total Cost of Attendance": {
        CostView.IN_STATE: "Total Cost of Attendance (In-State)",
        CostView.OUT_OF_STATE: "Total Cost of Attendance (Out-of-State)",
    },
}

_VARIANT_COLUMNS = {col for views in COST_VARIANTS.values() for col in views.values()}


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def coerce_number(value: Any) -> float | None:
    """Coerce a raw cell to a float, or ``None`` if it is missing or unparseable.

    Currency and percent formatting is stripped: ``"$12,500"`` becomes
    ``12500.0`` and ``"14.2%"`` becomes ``14.2``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _NON_NUMERIC.sub("", str(value))
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def record_from_row(row: Mapping[str, Any], name_column: str = DEFAULT_NAME_COLUMN) -> SchoolRecord:
    """Split a flat dataset row into attributes, cost variants and extras."""
    name = str(row.get(name_column) or "").strip()
    attributes: dict[str, float | None] = {}
    variants: dict[str, float | None] = {}
    extras: dict[str, Any] = {}
    for column, value in row.items():
        if column == name_column:
            continue
        if is_registered(column):
            attributes[column] = coerce_number(value)
        elif column in _VARIANT_COLUMNS:
            variants[column] = coerce_number(value)
        else:
            extras[column] = value
    record_id = str(extras.get(ID_COLUMN) or name)
    return SchoolRecord(id=record_id, name=name, attributes=attributes, variants=variants, extras=extras)


def load_dataset(path: Path | str, name_column: str = DEFAULT_NAME_COLUMN) -> list[SchoolRecord]:
    """Read the school dataset CSV into records, preserving file order.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise FileNotFoundError(f"Dataset not found: {csv_path}")

    df = pl.read_csv(csv_path, infer_schema_length=0)
    if name_column not in df.columns:
        logger.warning("Dataset %s has no %r column; school names will be empty", csv_path, name_column)

    records = [record_from_row(row, name_column) for row in df.iter_rows(named=True)]
    logger.info("Loaded %d schools from %s", len(records), csv_path)
    return records


# ---------------------------------------------------------------------------
# Cost views
# ---------------------------------------------------------------------------


def apply_cost_view(records: Iterable[SchoolRecord], view: CostView | str) -> list[SchoolRecord]:
    """Return new records with cost attributes taken from the chosen view.

    A present variant value replaces the base attribute; when a record has
    no usable variant figure the base value is kept.  Input records are not
    modified.
    """
    view = CostView(view)
    result: list[SchoolRecord] = []
    for record in records:
        attributes = dict(record.attributes)
        for key, columns in COST_VARIANTS.items():
            value = record.variants.get(columns[view])
            if value is not None:
                attributes[key] = value
        result.append(replace(record, attributes=attributes))
    return result
