"""Tests for CSV export of comparison rows."""

import csv
import io

import pytest

from budget_diff.comparison import VersionSnapshot, project, reconcile
from budget_diff.formatters import VersionLabels, to_csv
from budget_diff.formatters.csv_formatter import format_amount

from conftest import item

LABELS = VersionLabels(v1="Version 1", v2="Version 2")


def parse(text):
    return list(csv.reader(io.StringIO(text)))


def parse_amount(text):
    return None if text == "" else float(text)


class TestFormatAmount:
    @pytest.mark.parametrize(
        "value, expected",
        [(None, ""), (0.0, "0"), (100.0, "100"), (-50.0, "-50"), (99.5, "99.5"), (0.1, "0.1")],
    )
    def test_plain_numbers(self, value, expected):
        assert format_amount(value) == expected


class TestToCsv:
    def test_header(self, scenario_one_diffs):
        header = parse(to_csv(scenario_one_diffs, LABELS))[0]
        assert header == [
            "Cost Line", "Category", "Version 1", "Version 2", "Change", "Change %", "Status",
        ]

    def test_rows(self, scenario_one_diffs):
        rows = parse(to_csv(scenario_one_diffs, LABELS))[1:]
        assert rows == [
            ["a", "X", "100", "150", "50", "+50.0%", "changed"],
            ["b", "Y", "", "50", "50", "+100.0%", "added"],
        ]

    def test_removed_row(self):
        diffs = reconcile(VersionSnapshot(1, [item("a", 100.0)]), VersionSnapshot(2, []))
        row = parse(to_csv(diffs, LABELS))[1]
        assert row == ["a", "X", "100", "", "-100", "-100.0%", "removed"]

    def test_delimiter_in_field_is_quoted(self):
        diffs = reconcile(
            VersionSnapshot(1, [item("a", 1.0, "Steel, rebar", "Structure")]),
            VersionSnapshot(2, []),
        )
        text = to_csv(diffs, LABELS)
        assert '"Steel, rebar"' in text
        assert parse(text)[1][0] == "Steel, rebar"

    def test_empty_rows_gives_header_only(self):
        assert len(parse(to_csv([], LABELS))) == 1

    def test_totals_row(self, mixed_diffs):
        rows = parse(to_csv(mixed_diffs, LABELS, include_totals=True))
        assert rows[-1] == ["TOTAL", "", "2000", "2150", "150", "+7.5%", ""]

    def test_labels_for_baseline(self):
        labels = VersionLabels.for_versions("baseline", 3)
        assert labels == VersionLabels(v1="Baseline", v2="Version 3")


class TestRoundTrip:
    def test_lossless_columns(self, mixed_diffs):
        rows = project(mixed_diffs, view_mode="all", sort_field="change", sort_direction="desc")
        parsed = parse(to_csv(rows, LABELS))[1:]

        assert len(parsed) == len(rows)
        for diff, record in zip(rows, parsed):
            assert record[0] == diff.display_name
            assert parse_amount(record[2]) == diff.v1_amount
            assert parse_amount(record[3]) == diff.v2_amount
            assert record[6] == diff.status.value

    def test_fractional_amounts_survive(self):
        diffs = reconcile(
            VersionSnapshot(1, [item("a", 1234.56)]),
            VersionSnapshot(2, [item("a", 0.1 + 0.2)]),
        )
        record = parse(to_csv(diffs, LABELS))[1]
        assert float(record[2]) == 1234.56
        assert float(record[3]) == 0.1 + 0.2
