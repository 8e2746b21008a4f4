"""Comparison exceptions: caller contract violations and malformed source data.

The comparison core is total over well-formed snapshots. These errors only
surface for programmer mistakes (a missing snapshot, an unknown view mode)
or for raw records the data-layer adapter cannot normalize.
"""

from pathlib import Path
from typing import Any, Iterable, Optional

from .base import BudgetDiffError


class InputContractError(BudgetDiffError):
    """Base class for caller contract violations."""

    pass


class MissingSnapshotError(InputContractError, TypeError):
    """Raised when ``None`` is passed where a snapshot is required."""

    def __init__(self, side: str):
        super().__init__(
            f"A snapshot is required for {side}, got None",
            details={"side": side},
        )
        self.side = side


class InvalidViewError(InputContractError, ValueError):
    """Raised when a view parameter is not one of the known values."""

    def __init__(self, parameter: str, value: Any, allowed: Iterable[str]):
        allowed_list = list(allowed)
        super().__init__(
            f"Unknown {parameter}: {value!r}",
            details={"parameter": parameter, "allowed": ", ".join(allowed_list)},
        )
        self.parameter = parameter
        self.value = value
        self.allowed = allowed_list


class SnapshotFormatError(BudgetDiffError):
    """Raised when raw version records cannot be normalized into line items."""

    def __init__(self, reason: str, source: Optional[Path] = None, record: Optional[int] = None):
        details = {"reason": reason}
        if source is not None:
            details["source"] = str(source)
        if record is not None:
            details["record"] = str(record)

        super().__init__(f"Malformed snapshot data: {reason}", details=details)
        self.reason = reason
        self.source = source
        self.record = record
