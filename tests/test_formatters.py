"""Tests for the formatters package."""

import json

import pytest
from rich.console import Console

from budget_diff.comparison import ViewOptions, build_report
from budget_diff.formatters import (
    CsvFormatter,
    JsonFormatter,
    RichFormatter,
    get_formatter,
)


@pytest.fixture
def report(mixed_snapshots):
    return build_report(*mixed_snapshots)


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("rich"), RichFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("csv"), CsvFormatter)

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestCsvFormatter:
    def test_uses_version_labels(self, report):
        header = CsvFormatter().format(report).splitlines()[0]
        assert header == "Cost Line,Category,Version 1,Version 2,Change,Change %,Status"

    def test_totals(self, report):
        text = CsvFormatter(include_totals=True).format(report)
        assert text.splitlines()[-1].startswith("TOTAL,")

    def test_render_prints(self, report, capsys):
        CsvFormatter().render(report)
        assert capsys.readouterr().out.startswith("Cost Line,")


class TestJsonFormatter:
    def test_structure(self, report):
        data = json.loads(JsonFormatter().format(report))
        assert data["v1"] == "Version 1"
        assert data["summary"]["counts_by_status"]["added"] == 1
        assert [c["category"] for c in data["categories"]] == ["Structure", "Electrical", "Admin"]
        assert len(data["rows"]) == 5
        assert data["insights"]["largest_percent"] == "permits"

    def test_row_fields(self, report):
        rows = {r["identity"]: r for r in json.loads(JsonFormatter().format(report))["rows"]}
        assert rows["lighting"]["v1_amount"] is None
        assert rows["lighting"]["status"] == "added"
        assert rows["steel"]["status_label"] == "increased"


class TestRichFormatter:
    def test_renders_sections(self, report):
        console = Console(record=True, width=140)
        RichFormatter(console=console).render(report)
        text = console.export_text()
        assert "Version Comparison" in text
        assert "By Category" in text
        assert "Steel" in text
        assert "Top increases" in text
        assert "Notable:" in text

    def test_empty_view(self, mixed_snapshots):
        report = build_report(*mixed_snapshots, options=ViewOptions(search_term="zzz"))
        console = Console(record=True, width=140)
        RichFormatter(console=console).render(report)
        assert "No line items match" in console.export_text()

    def test_format_returns_text(self, report):
        text = RichFormatter(console=Console(width=140)).format(report)
        assert "Line Items (5 of 5)" in text
