"""Exception hierarchy for Budget Diff."""

from .base import BudgetDiffError
from .comparison import (
    InputContractError,
    InvalidViewError,
    MissingSnapshotError,
    SnapshotFormatError,
)
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "BudgetDiffError",
    "ConfigurationError",
    "InvalidConfigError",
    "InputContractError",
    "MissingSnapshotError",
    "InvalidViewError",
    "SnapshotFormatError",
]
