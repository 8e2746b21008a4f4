"""Percentage and ratio helpers that never produce NaN or Infinity.

Every helper here is total over real numbers and ``None``. Consumers
(tables, charts, CSV export) can render the results without guarding
against division by zero.

Percent change policy:
    from is None or 0, to is None or 0  ->    0
    from is None or 0, to is non-zero   ->  100  (appeared from nothing)
    otherwise                           ->  ((to or 0) - from) / from * 100

The 100% cap for growth from zero is a fixed rule, not a numerical
accident: a line that appears from nothing reads as a full increase.
"""

import math
from numbers import Real
from typing import Any, Iterable, Optional

import numpy as np

# Growth from zero (or from an absent value) is reported as a full increase.
APPEARED_PERCENT = 100.0


class SafeMath:
    """Finite-valued arithmetic for comparison figures."""

    @staticmethod
    def percent_change(from_value: Optional[float], to_value: Optional[float]) -> float:
        """Percentage change from ``from_value`` to ``to_value``.

        Args:
            from_value: Starting amount, ``None`` when absent.
            to_value: Ending amount, ``None`` when absent.

        Returns:
            A finite percentage. See the module docstring for the policy
            around zero and absent operands.
        """
        if not from_value:
            if not to_value:
                return 0.0
            return APPEARED_PERCENT

        result = ((to_value or 0.0) - from_value) / from_value * 100.0
        if not math.isfinite(result):
            return 0.0
        return float(result)

    @staticmethod
    def safe_divide(numerator: float, denominator: float) -> float:
        """Divide, returning 0 for a zero denominator or a non-finite result."""
        if denominator == 0:
            return 0.0
        result = numerator / denominator
        if not math.isfinite(result):
            return 0.0
        return float(result)

    @staticmethod
    def is_valid_number(value: Any) -> bool:
        """True for finite real numbers. Booleans are not amounts."""
        if isinstance(value, bool) or not isinstance(value, Real):
            return False
        return math.isfinite(value)

    @staticmethod
    def safe_sum(values: Iterable[Optional[float]]) -> float:
        """Sum the finite members of ``values``.

        ``None``, NaN and infinite members contribute nothing.
        """
        arr = np.fromiter(
            (v for v in values if SafeMath.is_valid_number(v)),
            dtype=np.float64,
        )
        if arr.size == 0:
            return 0.0
        total = float(arr.sum())
        return total if math.isfinite(total) else 0.0

    @staticmethod
    def format_percent(value: Optional[float]) -> str:
        """Render a signed one-decimal percentage, e.g. ``+50.0%``."""
        if not SafeMath.is_valid_number(value):
            return "0.0%"
        rounded = round(float(value), 1)
        if rounded == 0:
            return "0.0%"
        sign = "+" if rounded > 0 else ""
        return f"{sign}{rounded:.1f}%"
