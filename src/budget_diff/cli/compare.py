"""Compare command — diff two version snapshot files."""

from pathlib import Path
from typing import Optional

import typer

from ..comparison import ComparisonCache, ViewOptions, build_report
from ..config import SORT_FIELDS, VIEW_MODES
from ..exceptions import BudgetDiffError
from ..formatters import get_formatter
from ..formatters.csv_formatter import CsvFormatter
from ..logging_config import setup_logging
from ..sources import load_snapshot
from . import app
from ._common import console, err_console, resolve_config


@app.command()
def compare(
    v1_file: Path = typer.Argument(
        ...,
        help="Snapshot JSON for version 1",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    v2_file: Path = typer.Argument(
        ...,
        help="Snapshot JSON for version 2",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    v1_version: Optional[str] = typer.Option(
        None, "--v1-version",
        help="Version id for V1_FILE (integer or 'baseline'); defaults to the file's",
    ),
    v2_version: Optional[str] = typer.Option(
        None, "--v2-version",
        help="Version id for V2_FILE (integer or 'baseline'); defaults to the file's",
    ),
    view: Optional[str] = typer.Option(
        None, "--view", "-m",
        help=f"View mode: {', '.join(VIEW_MODES)}",
    ),
    category: str = typer.Option(
        "all", "--category", "-k",
        help="Only show this category",
    ),
    search: str = typer.Option(
        "", "--search", "-s",
        help="Case-insensitive match on cost line or category",
    ),
    sort: Optional[str] = typer.Option(
        None, "--sort",
        help=f"Sort field: {', '.join(SORT_FIELDS)}",
    ),
    desc: bool = typer.Option(
        False, "--desc",
        help="Sort descending",
    ),
    output_format: str = typer.Option(
        "rich", "--format", "-f",
        help="Output format: rich, json, csv",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write output to this file instead of stdout",
    ),
    totals: bool = typer.Option(
        False, "--totals",
        help="Append a TOTAL row to CSV output",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file (TOML)",
        exists=True, file_okay=True, dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only log errors",
    ),
) -> None:
    """Compare two versions of a project's cost line items.

    [bold cyan]Examples:[/bold cyan]

      budget-diff compare v0.json v2.json

      budget-diff compare v1.json v2.json --view changed --sort change --desc

      budget-diff compare v1.json v2.json --format csv --totals -o diff.csv
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            view_mode=view,
            sort_field=sort,
            descending=desc,
            include_totals=totals,
            verbose=verbose,
            quiet=quiet,
        )
        v1 = load_snapshot(v1_file, version=v1_version)
        v2 = load_snapshot(v2_file, version=v2_version)

        options = ViewOptions.from_config(settings, category=category, search_term=search)
        cache = ComparisonCache.from_config(settings)
        report = build_report(v1, v2, options=options, config=settings, cache=cache)

        if output_format == "csv":
            formatter = CsvFormatter(include_totals=settings.include_totals)
        elif output_format == "rich" and output is None:
            formatter = get_formatter("rich", console=console)
        else:
            formatter = get_formatter(output_format)

        if output is None:
            formatter.render(report)
        else:
            output.write_text(formatter.format(report), encoding="utf-8")
            err_console.print(f"[green]Wrote {len(report.rows)} rows to {output}[/green]")

    except BudgetDiffError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        # Unknown --format
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error in compare")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
