"""Root of the Budget Diff error tree.

Every error raised on purpose by this package derives from
``BudgetDiffError`` so the CLI can report it as a one-line message and
exit 1. Unexpected failures are left as ordinary exceptions.
"""

from typing import Any, Mapping, Optional


class BudgetDiffError(Exception):
    """An error a user or caller can act on.

    ``context`` names what the error is about (the snapshot file, the
    record position, the offending option). Values are kept as text so the
    error renders the same in a terminal and in a log file.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    @property
    def context(self) -> str:
        return ", ".join(f"{key}={value}" for key, value in self.details.items())

    def __str__(self) -> str:
        context = self.context
        return f"{self.message} ({context})" if context else self.message
