"""Tests for min/max normalisation and the missing-value policy."""

from __future__ import annotations

import math

import pytest

from src.services.normaliser import (
    EMPTY_STATS,
    NormalisationStats,
    compute_all_stats,
    compute_stats,
    is_present,
    normalise_dataset,
    normalise_value,
)
from src.services.registry import Direction, get_attribute


class TestIsPresent:
    @pytest.mark.parametrize("value", [0, 3, 3.5, -1.25])
    def test_numbers_are_present(self, value):
        assert is_present(value)

    @pytest.mark.parametrize("value", [None, math.nan, math.inf, "3.5", "", True, False])
    def test_missing_or_invalid(self, value):
        assert not is_present(value)


class TestComputeStats:
    def test_min_max_over_present_values(self, school_factory):
        records = [
            school_factory("A", gpa=3.5),
            school_factory("B", gpa=3.8),
            school_factory("C", gpa=None),
        ]
        assert compute_stats(records, "Average GPA") == NormalisationStats(min=3.5, max=3.8)

    def test_non_numeric_values_are_skipped(self, school_factory):
        records = [school_factory("A", mcat=510), school_factory("B", mcat="n/a"), school_factory("C", mcat=520)]
        assert compute_stats(records, "Average MCAT") == NormalisationStats(min=510.0, max=520.0)

    def test_no_present_values_gives_synthetic_range(self, school_factory):
        records = [school_factory("A", gpa=None), school_factory("B")]
        assert compute_stats(records, "Average GPA") == EMPTY_STATS == NormalisationStats(min=0.0, max=1.0)

    def test_empty_dataset(self):
        assert compute_stats([], "Average GPA") == EMPTY_STATS

    def test_all_stats_excludes_display_only(self, school_factory):
        records = [school_factory("A", class_size=100, gpa=3.6)]
        stats = compute_all_stats(records)
        assert "Class Size" not in stats
        assert stats["Average GPA"] == NormalisationStats(min=3.6, max=3.6)


class TestNormaliseValue:
    stats = NormalisationStats(min=10.0, max=20.0)

    def test_direct_scaling(self):
        assert normalise_value(10, self.stats, Direction.DIRECT) == 0.0
        assert normalise_value(15, self.stats, Direction.DIRECT) == pytest.approx(0.5)
        assert normalise_value(20, self.stats, Direction.DIRECT) == 1.0

    def test_inverse_scaling(self):
        assert normalise_value(10, self.stats, Direction.INVERSE) == 1.0
        assert normalise_value(12.5, self.stats, Direction.INVERSE) == pytest.approx(0.75)
        assert normalise_value(20, self.stats, Direction.INVERSE) == 0.0

    def test_missing_is_worst_case_for_both_directions(self):
        assert normalise_value(None, self.stats, Direction.DIRECT) == 0.0
        assert normalise_value(None, self.stats, Direction.INVERSE) == 0.0
        assert normalise_value("bad", self.stats, Direction.INVERSE) == 0.0

    @pytest.mark.parametrize("direction", [Direction.DIRECT, Direction.INVERSE])
    def test_degenerate_range_is_zero(self, direction):
        stats = NormalisationStats(min=7.0, max=7.0)
        assert normalise_value(7, stats, direction) == 0.0
        assert normalise_value(None, stats, direction) == 0.0

    @pytest.mark.parametrize("direction", [Direction.DIRECT, Direction.INVERSE])
    def test_synthetic_stats_yield_zero_for_missing(self, direction):
        assert normalise_value(None, EMPTY_STATS, direction) == 0.0


class TestNormaliseDataset:
    def test_bounds(self, dataset):
        for row in normalise_dataset(dataset):
            for value in row.values():
                assert 0.0 <= value <= 1.0

    @pytest.mark.parametrize("key", ["Average GPA", "Tuition and Fees"])
    def test_uniform_attribute_is_zero_everywhere(self, school_factory, key):
        attr = "gpa" if key == "Average GPA" else "tuition"
        records = [school_factory(n, **{attr: 5.0}) for n in ("A", "B", "C")]
        rows = normalise_dataset(records, [get_attribute(key)])
        assert [r[key] for r in rows] == [0.0, 0.0, 0.0]

    def test_direct_is_monotonic(self, school_factory):
        records = [school_factory(str(v), mcat=v) for v in (500, 505, 511, 528)]
        values = [r["Average MCAT"] for r in normalise_dataset(records, [get_attribute("Average MCAT")])]
        assert values == sorted(values)

    def test_inverse_is_monotonic_non_increasing(self, school_factory):
        records = [school_factory(str(v), debt=v) for v in (90_000, 120_000, 150_000, 300_000)]
        values = [r["Average Graduate Indebtedness"] for r in normalise_dataset(records)]
        assert values == sorted(values, reverse=True)

    def test_missing_direct_matches_dataset_minimum(self, school_factory):
        records = [school_factory("A", gpa=3.5), school_factory("B", gpa=3.8), school_factory("C", gpa=None)]
        rows = normalise_dataset(records)
        assert rows[2]["Average GPA"] == rows[0]["Average GPA"] == 0.0
        assert rows[1]["Average GPA"] == 1.0

    def test_missing_inverse_matches_dataset_maximum(self, school_factory):
        records = [school_factory("A", debt=100_000), school_factory("B", debt=200_000), school_factory("C")]
        rows = normalise_dataset(records)
        key = "Average Graduate Indebtedness"
        assert rows[2][key] == rows[1][key] == 0.0
        assert rows[0][key] == 1.0

    def test_display_only_not_normalised(self, school_factory):
        rows = normalise_dataset([school_factory("A", class_size=100)])
        assert "Class Size" not in rows[0]
