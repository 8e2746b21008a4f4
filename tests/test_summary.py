"""Tests for summary, category rollup, and variance insights."""

import pytest

from budget_diff.comparison import (
    VersionSnapshot,
    reconcile,
    rollup_by_category,
    summarize,
    variance_insights,
)

from conftest import item


class TestSummarize:
    def test_totals(self, mixed_diffs):
        s = summarize(mixed_diffs)
        assert s.v1_total == pytest.approx(2000.0)
        assert s.v2_total == pytest.approx(2150.0)
        assert s.total_change == pytest.approx(150.0)
        assert s.change_percent == pytest.approx(7.5)

    def test_totals_match_line_sums(self, mixed_diffs):
        s = summarize(mixed_diffs)
        assert s.v1_total == pytest.approx(sum(d.v1_amount or 0 for d in mixed_diffs))
        assert s.v2_total == pytest.approx(sum(d.v2_amount or 0 for d in mixed_diffs))

    def test_counts(self, mixed_diffs):
        s = summarize(mixed_diffs)
        assert s.counts_by_status == {
            "added": 1,
            "removed": 1,
            "changed": 2,
            "unchanged": 1,
            "increased": 1,
            "decreased": 1,
        }
        assert s.count("changed") == 2
        assert s.line_count == 5
        assert s.changed_ratio == pytest.approx(0.8)

    def test_empty(self):
        s = summarize([])
        assert s.v1_total == 0.0
        assert s.change_percent == 0.0
        assert s.changed_ratio == 0.0
        assert all(v == 0 for v in s.counts_by_status.values())

    def test_growth_from_empty_version(self):
        diffs = reconcile(VersionSnapshot(1, []), VersionSnapshot(2, [item("a", 10.0)]))
        assert summarize(diffs).change_percent == 100.0


class TestRollupByCategory:
    def test_offsetting_changes_net_to_zero(self):
        v1 = VersionSnapshot(1, [item("a", 100.0), item("b", 200.0)])
        v2 = VersionSnapshot(2, [item("a", 150.0), item("b", 150.0)])
        rollups = rollup_by_category(reconcile(v1, v2))

        assert len(rollups) == 1
        r = rollups[0]
        assert r.category == "X"
        assert r.v1_total == 300.0
        assert r.v2_total == 300.0
        assert r.change == 0.0
        assert r.change_percent == 0.0

    def test_first_occurrence_order(self, mixed_diffs):
        assert [r.category for r in rollup_by_category(mixed_diffs)] == [
            "Structure", "Electrical", "Admin",
        ]

    def test_per_category_totals(self, mixed_diffs):
        by_cat = {r.category: r for r in rollup_by_category(mixed_diffs)}
        assert by_cat["Structure"].v1_total == 1500.0
        assert by_cat["Structure"].v2_total == 1600.0
        assert by_cat["Electrical"].change == 250.0
        assert by_cat["Admin"].v2_total == 0.0
        assert by_cat["Admin"].change_percent == pytest.approx(-100.0)

    def test_deterministic(self, mixed_diffs):
        assert rollup_by_category(mixed_diffs) == rollup_by_category(mixed_diffs)


class TestVarianceInsights:
    def test_top_movers(self, mixed_diffs):
        insights = variance_insights(mixed_diffs, top_n=3)
        assert [d.identity for d in insights.top_increases] == ["lighting", "steel"]
        assert [d.identity for d in insights.top_decreases] == ["permits", "concrete"]
        assert insights.largest_increase.identity == "lighting"
        assert insights.largest_decrease.identity == "permits"

    def test_top_n_limits(self, mixed_diffs):
        insights = variance_insights(mixed_diffs, top_n=1)
        assert len(insights.top_increases) == 1
        assert len(insights.top_decreases) == 1

    def test_largest_percent_first_on_tie(self, mixed_diffs):
        # permits (-100%) and lighting (+100%) tie; permits comes first
        insights = variance_insights(mixed_diffs)
        assert insights.largest_percent.identity == "permits"

    def test_no_changes(self):
        diffs = reconcile(VersionSnapshot(1, [item("a", 1.0)]), VersionSnapshot(2, [item("a", 1.0)]))
        insights = variance_insights(diffs)
        assert insights.top_increases == ()
        assert insights.largest_percent is None
        assert insights.largest_increase is None

    def test_negative_top_n(self, mixed_diffs):
        with pytest.raises(ValueError):
            variance_insights(mixed_diffs, top_n=-1)
