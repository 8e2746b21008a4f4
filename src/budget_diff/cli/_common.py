"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ComparisonConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    view_mode: Optional[str] = None,
    sort_field: Optional[str] = None,
    descending: bool = False,
    include_totals: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> ComparisonConfig:
    """Build configuration from CLI options."""
    overrides = {
        "view_mode": view_mode,
        "sort_field": sort_field,
        "verbose": verbose,
        "quiet": quiet,
    }
    if descending:
        overrides["sort_direction"] = "desc"
    if include_totals:
        overrides["include_totals"] = True
    return load_config(config_file=config, **overrides)
