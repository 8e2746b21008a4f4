"""Tests for the comparison report pipeline."""

from budget_diff.comparison import BASELINE, ComparisonCache, VersionSnapshot, ViewOptions, build_report
from budget_diff.config import ComparisonConfig

from conftest import item


class TestBuildReport:
    def test_all_views_share_one_diff_set(self, mixed_snapshots):
        report = build_report(*mixed_snapshots)
        assert len(report.diffs) == 5
        assert report.summary.line_count == 5
        assert [r.category for r in report.rollups] == report.categories
        assert report.rows == sorted(report.rows, key=lambda d: d.display_name.casefold())

    def test_options_drive_rows(self, mixed_snapshots):
        options = ViewOptions(view_mode="removed")
        report = build_report(*mixed_snapshots, options=options)
        assert [d.identity for d in report.rows] == ["permits"]
        # Summary still covers every line
        assert report.summary.line_count == 5

    def test_options_from_config(self):
        config = ComparisonConfig(view_mode="changed", sort_field="change", sort_direction="desc")
        options = ViewOptions.from_config(config, search_term="steel", category=None)
        assert options.view_mode == "changed"
        assert options.sort_direction == "desc"
        assert options.search_term == "steel"
        assert options.category == "all"

    def test_config_top_n(self, mixed_snapshots):
        report = build_report(*mixed_snapshots, config=ComparisonConfig(insight_top_n=1))
        assert len(report.insights.top_increases) == 1

    def test_labels(self):
        report = build_report(VersionSnapshot(BASELINE, []), VersionSnapshot(4, []))
        assert report.v1_label == "Baseline"
        assert report.v2_label == "Version 4"

    def test_significant_percent_change(self, mixed_snapshots):
        assert build_report(*mixed_snapshots).has_significant_percent_change

        v1 = VersionSnapshot(1, [item("a", 100.0)])
        v2 = VersionSnapshot(2, [item("a", 105.0)])
        assert not build_report(v1, v2).has_significant_percent_change

    def test_cache_reuses_diff_set_and_rows(self, mixed_snapshots):
        cache = ComparisonCache.from_config(ComparisonConfig(cache_size=4))
        first = build_report(*mixed_snapshots, cache=cache)
        second = build_report(*mixed_snapshots, cache=cache)
        assert second.diffs is first.diffs
        assert second.rows == first.rows
        assert cache.hits == 2
        assert cache.misses == 2
