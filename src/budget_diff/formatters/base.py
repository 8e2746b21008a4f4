"""Base formatter interface for comparison report rendering."""

from abc import ABC, abstractmethod

from ..comparison.report import ComparisonReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: ComparisonReport) -> None:
        """Render the report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, report: ComparisonReport) -> str:
        """Return formatted string representation of the report."""
