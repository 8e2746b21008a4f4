"""Configuration loading and management for Budget Diff.

Configuration sources are merged in priority order:
    1. Defaults (defined in ComparisonConfig)
    2. Global config (~/.budget-diff.toml)
    3. Project config (./budget-diff.toml)
    4. Explicit config file
    5. Environment variables (BUDGET_DIFF_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(view_mode="changed", insight_top_n=5)
    >>> config.view_mode
    'changed'
    >>> config.insight_top_n
    5
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

VIEW_MODES = ("all", "changed", "added", "removed", "increased", "decreased")
SORT_FIELDS = ("display_name", "category", "v1_amount", "v2_amount", "change")
SORT_DIRECTIONS = ("asc", "desc")
METADATA_PREFERENCES = ("v2", "v1")
VERBOSITIES = ("quiet", "normal", "verbose")

ENV_PREFIX = "BUDGET_DIFF_"
CONFIG_FILENAME = "budget-diff.toml"


@dataclass(frozen=True)
class ComparisonConfig:
    """Configuration for comparison views and exports.

    Attributes:
        Default table view:
            view_mode: Initial status filter (all/changed/added/removed/increased/decreased)
            sort_field: Initial sort column
            sort_direction: asc or desc

        Reconciliation:
            metadata_preference: Which version's name/category wins for a
                line present in both with different metadata ("v2" or "v1")

        Insights:
            insight_top_n: Number of top increases/decreases to report
            significant_change_percent: Largest-percent mover above this is flagged

        Performance:
            cache_size: Maximum memoized comparisons

        Export:
            include_totals: Append a TOTAL row to CSV exports

        Output control:
            verbosity: Logging verbosity level
    """

    view_mode: str = "all"
    sort_field: str = "display_name"
    sort_direction: str = "asc"

    metadata_preference: str = "v2"

    insight_top_n: int = 3
    significant_change_percent: float = 20.0

    cache_size: int = 32

    include_totals: bool = False

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        choices = {
            "view_mode": VIEW_MODES,
            "sort_field": SORT_FIELDS,
            "sort_direction": SORT_DIRECTIONS,
            "metadata_preference": METADATA_PREFERENCES,
            "verbosity": VERBOSITIES,
        }
        for field_name, allowed in choices.items():
            value = getattr(self, field_name)
            if value not in allowed:
                raise ValueError(f"{field_name} must be one of {', '.join(allowed)}, got {value!r}")

        if self.insight_top_n < 0:
            raise ValueError("insight_top_n must be non-negative")
        if self.significant_change_percent < 0:
            raise ValueError("significant_change_percent must be non-negative")
        if self.cache_size < 1:
            raise ValueError("cache_size must be at least 1")


default_config = ComparisonConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> ComparisonConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep file values.

    Returns:
        Validated ComparisonConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ComparisonConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise ConfigurationError(str(e))


def _read_config_file(path: Path, kind: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {kind} '{path}': {e}")
    # Allow settings either at top level or under a [budget-diff] table
    section = data.get("budget-diff")
    return dict(section) if isinstance(section, dict) else data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BUDGET_DIFF_* environment variables.

    Every ComparisonConfig field can be set this way, e.g.
    BUDGET_DIFF_VIEW_MODE=changed or BUDGET_DIFF_INCLUDE_TOTALS=true.

    Returns:
        Dict of field_name -> parsed_value for any BUDGET_DIFF_* vars found.
    """
    type_hints = get_type_hints(ComparisonConfig)

    result: dict[str, Any] = {}

    for field_name in ComparisonConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
