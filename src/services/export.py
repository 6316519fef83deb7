"""Export helpers for ranked output and weight vectors."""

from __future__ import annotations

import json
from collections.abc import Mapping

import polars as pl

from src.services.records import ScoredRecord
from src.services.registry import all_attributes


def rankings_frame(ranked: list[ScoredRecord]) -> pl.DataFrame:
    """Tabulate ranked schools: rank, name, score, then every registry attribute."""
    attrs = all_attributes()
    columns: dict[str, list] = {"Rank": [], "Institution": [], "Score": []}
    for attr in attrs:
        columns[attr.label] = []

    for entry in ranked:
        columns["Rank"].append(entry.rank)
        columns["Institution"].append(entry.name)
        columns["Score"].append(entry.raw_score)
        for attr in attrs:
            value = entry.school.attributes.get(attr.key)
            columns[attr.label].append(float(value) if value is not None else None)

    schema = {"Rank": pl.Int64, "Institution": pl.Utf8, "Score": pl.Float64}
    schema.update({attr.label: pl.Float64 for attr in attrs})
    return pl.DataFrame(columns, schema=schema)


def rankings_to_csv(ranked: list[ScoredRecord]) -> str:
    """Render ranked schools as CSV text; missing values become empty cells."""
    return rankings_frame(ranked).write_csv()


def weights_to_json(weights: Mapping[str, float]) -> str:
    return json.dumps(dict(weights), indent=2)
