"""Output formatters for comparison reports."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter, VersionLabels, to_csv
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str, **kwargs) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "csv"
        **kwargs: Passed to the formatter constructor

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "rich": RichFormatter,
        "json": JsonFormatter,
        "csv": CsvFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls(**kwargs)


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "JsonFormatter",
    "RichFormatter",
    "VersionLabels",
    "get_formatter",
    "to_csv",
]
