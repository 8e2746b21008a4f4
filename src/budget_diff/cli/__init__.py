"""CLI entry point — registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="budget-diff",
    help="Budget Diff - compare cost line items between budget and forecast versions",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"budget-diff {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Compare cost line items between two versions."""


# Import subcommands to register them
from .compare import compare as _compare  # noqa: F401, E402


def main() -> None:
    app()
