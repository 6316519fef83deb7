"""Tests for dataset loading, numeric coercion and cost views."""

from __future__ import annotations

import math

import pytest

from src.services.dataset import CostView, apply_cost_view, coerce_number, load_dataset, record_from_row


class TestCoerceNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$12,500", 12500.0),
            ("14.2%", 14.2),
            ("3.85", 3.85),
            ("-4", -4.0),
            (519, 519.0),
            (3.5, 3.5),
        ],
    )
    def test_parses(self, raw, expected):
        assert coerce_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", "-", "1.2.3", math.nan, math.inf, True])
    def test_missing(self, raw):
        assert coerce_number(raw) is None


class TestRecordFromRow:
    def test_splits_columns(self):
        record = record_from_row(
            {
                "AAMC_Institution": "Harbor University",
                "canonical_name": "harbor",
                "Average GPA": "3.9",
                "Tuition and Fees (In-State)": "$40,000",
                "State": "MA",
            }
        )
        assert record.name == "Harbor University"
        assert record.id == "harbor"
        assert record.attributes == {"Average GPA": 3.9}
        assert record.variants == {"Tuition and Fees (In-State)": 40000.0}
        assert record.extras == {"canonical_name": "harbor", "State": "MA"}

    def test_id_falls_back_to_name(self):
        record = record_from_row({"AAMC_Institution": "Nameless"})
        assert record.id == "Nameless"

    def test_custom_name_column(self):
        record = record_from_row({"School": "Harbor", "AAMC_Institution": "ignored"}, name_column="School")
        assert record.name == "Harbor"
        assert record.extras["AAMC_Institution"] == "ignored"


class TestLoadDataset:
    def test_loads_in_file_order(self, dataset):
        assert [r.name for r in dataset] == [
            "Harbor University School of Medicine",
            "Lakeside College of Medicine",
            "Prairie State Medical School",
            "Summit Medical College",
        ]

    def test_coerces_formatted_values(self, dataset):
        harbor = dataset[0]
        assert harbor.attributes["NIH Research Funding"] == 610_000_000.0
        assert harbor.attributes["URM%"] == 18.5
        assert harbor.attributes["Class Size"] == 165.0

    def test_blank_and_unparseable_become_missing(self, dataset):
        summit = dataset[3]
        assert summit.attributes["Average MCAT"] is None
        assert summit.attributes["NIH Research Funding per Faculty"] is None
        assert dataset[2].attributes["URM%"] is None

    def test_extras_kept(self, dataset):
        assert dataset[1].extras["State"] == "MI"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.csv")


class TestApplyCostView:
    def test_substitutes_present_variants(self, dataset):
        in_state = apply_cost_view(dataset, CostView.IN_STATE)
        out_of_state = apply_cost_view(dataset, "out_of_state")
        assert in_state[1].attributes["Tuition and Fees"] == 38_000.0
        assert out_of_state[1].attributes["Tuition and Fees"] == 70_000.0

    def test_keeps_base_value_without_variant(self, dataset):
        in_state = apply_cost_view(dataset, CostView.IN_STATE)
        assert in_state[0].attributes["Tuition and Fees"] == 66_000.0
        assert in_state[0].attributes["Total Cost of Attendance"] == 98_000.0

    def test_does_not_mutate_input(self, dataset):
        apply_cost_view(dataset, CostView.OUT_OF_STATE)
        assert dataset[1].attributes["Tuition and Fees"] == 41_000.0

    def test_unknown_view(self, dataset):
        with pytest.raises(ValueError):
            apply_cost_view(dataset, "intergalactic")
