"""Configuration loading and management for DevInsight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalyticsConfig)
    2. Global config (~/.devinsight.toml)
    3. Project config (./devinsight.toml)
    4. Explicit config file
    5. Environment variables (DEVINSIGHT_* prefix)
    6. Keyword overrides (typically from CLI flags)

Example:
    >>> config = load_config(evolution_retention_days=30)
    >>> config.evolution_retention_days
    30
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
UnknownIdPolicy = Literal["raise", "fallback"]


@dataclass(frozen=True)
class ThresholdConfig:
    """Rule thresholds used by the analytics engines and insight generators.

    Attributes:
        Technical debt:
            complexity_debt_hours: Complexity hours above which reduction is recommended
            duplication_debt_hours: Duplication hours above which dedup is recommended
            debt_trend_tolerance: Relative change vs. baseline treated as stable

        Architecture:
            weak_point_score: Sub-scores below this are weak points
            strength_score: Sub-scores above this are strengths

        Cognitive recommendations:
            accuracy_target: Reasoning accuracy below this suggests retraining
            latency_target_ms: Latency above this suggests caching
            convergence_target: Convergence below this suggests hyperparameter review
            prediction_target: Prediction accuracy below this suggests feature review
            growth_rate_floor: Knowledge growth below this suggests active learning

        Insights:
            debt_insight_hours: Total debt above which a quality insight fires
            debt_critical_hours: Total debt above which that insight is critical
            min_bug_probability: Bug predictions below this are not reported
    """

    # Technical debt
    complexity_debt_hours: float = 10.0
    duplication_debt_hours: float = 5.0
    debt_trend_tolerance: float = 0.05

    # Architecture
    weak_point_score: float = 60.0
    strength_score: float = 80.0

    # Cognitive recommendations
    accuracy_target: float = 0.8
    latency_target_ms: float = 200.0
    convergence_target: float = 0.7
    prediction_target: float = 0.75
    growth_rate_floor: float = 0.05

    # Insights
    debt_insight_hours: float = 40.0
    debt_critical_hours: float = 80.0
    min_bug_probability: float = 0.3

    def __post_init__(self) -> None:
        if self.weak_point_score > self.strength_score:
            raise InvalidConfigError(
                "weak_point_score", self.weak_point_score, "must not exceed strength_score"
            )
        if self.debt_insight_hours > self.debt_critical_hours:
            raise InvalidConfigError(
                "debt_insight_hours", self.debt_insight_hours, "must not exceed debt_critical_hours"
            )
        if self.debt_trend_tolerance < 0:
            raise InvalidConfigError(
                "debt_trend_tolerance", self.debt_trend_tolerance, "must be non-negative"
            )
        if not 0.0 <= self.min_bug_probability <= 1.0:
            raise InvalidConfigError(
                "min_bug_probability", self.min_bug_probability, "must be between 0.0 and 1.0"
            )


@dataclass(frozen=True)
class AnalyticsConfig:
    """Configuration for the analytics engines.

    Attributes:
        History bounds:
            evolution_retention_days: Age limit for code-evolution snapshots
            performance_history_size: Capacity of the cognitive snapshot ring
            convergence_history_size: Capacity of each per-algorithm history
            debt_history_size: Debt totals kept per workspace
            debt_baseline_window: Recent debt totals averaged into the baseline

        Output:
            trend_points: Points produced by metric trend resampling
            default_insight_limit: Default limit for prioritized insights
            personalized_limit: Insights returned by personalized queries
            verbosity: Logging verbosity level

        Behaviour:
            unknown_id_policy: "raise" (NotFoundError) or "fallback" (zeroed metrics)
            default_workspace: Workspace analysed by the insight generators
            storage_path: SQLite file for persistent storage (None = in memory)
    """

    evolution_retention_days: int = 90
    performance_history_size: int = 1000
    convergence_history_size: int = 200
    debt_history_size: int = 50
    debt_baseline_window: int = 5

    trend_points: int = 20
    default_insight_limit: int = 10
    personalized_limit: int = 5
    verbosity: Verbosity = "normal"

    unknown_id_policy: UnknownIdPolicy = "raise"
    default_workspace: str = "."
    storage_path: Optional[str] = None

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.evolution_retention_days < 1:
            raise InvalidConfigError(
                "evolution_retention_days", self.evolution_retention_days, "must be at least 1"
            )
        for name in (
            "performance_history_size",
            "convergence_history_size",
            "debt_history_size",
            "debt_baseline_window",
            "default_insight_limit",
            "personalized_limit",
        ):
            if getattr(self, name) < 1:
                raise InvalidConfigError(name, getattr(self, name), "must be at least 1")
        if self.trend_points < 2:
            raise InvalidConfigError("trend_points", self.trend_points, "must be at least 2")
        if self.unknown_id_policy not in ("raise", "fallback"):
            raise InvalidConfigError(
                "unknown_id_policy", self.unknown_id_policy, "must be 'raise' or 'fallback'"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet/normal/verbose")

    @property
    def evolution_retention_seconds(self) -> float:
        """Get evolution retention window in seconds."""
        return self.evolution_retention_days * 24 * 3600.0


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalyticsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalyticsConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".devinsight.toml"
    if global_config.exists():
        merged.update(_load_toml_checked(global_config, "global config"))

    project_config = Path.cwd() / "devinsight.toml"
    if project_config.exists():
        merged.update(_load_toml_checked(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_checked(config_file, "config file"))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds_dict)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [thresholds] config: {e}")
        elif isinstance(thresholds_dict, ThresholdConfig):
            merged["thresholds"] = thresholds_dict

    try:
        return AnalyticsConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_toml_checked(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEVINSIGHT_* environment variables.

    Every scalar AnalyticsConfig field is supported, e.g.
    DEVINSIGHT_EVOLUTION_RETENTION_DAYS=30 or DEVINSIGHT_UNKNOWN_ID_POLICY=fallback.
    """
    type_hints = get_type_hints(AnalyticsConfig)

    result: dict[str, Any] = {}

    for field_name in AnalyticsConfig.__dataclass_fields__:
        env_key = f"DEVINSIGHT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be set from the environment.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
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

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
