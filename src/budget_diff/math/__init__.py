"""Mathematical utilities for version comparison."""

from .safe import APPEARED_PERCENT, SafeMath

__all__ = [
    "APPEARED_PERCENT",
    "SafeMath",
]
