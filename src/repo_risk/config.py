"""Configuration loading and management for repo-risk.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.repo-risk.toml)
    3. Project config (./repo-risk.toml)
    4. Explicit config file
    5. Environment variables (REPO_RISK_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, max_hotspots=10)
    >>> config.verbosity
    'verbose'
    >>> config.risk.frequency_weight
    0.3
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, RepoRiskError

Verbosity = Literal["quiet", "normal", "verbose"]

# Substrings in a commit subject that mark it as a bug fix
DEFAULT_BUG_KEYWORDS = ("fix", "bug", "issue", "error", "patch", "hotfix", "bugfix")


@dataclass(frozen=True)
class RiskConfig:
    """Calibration of the risk engine.

    Every score, tier and explanation is a pure function of FileMetrics and
    this object. Keep one instance fixed per deployment so scores stay
    comparable across files and analysis runs.

    Attributes:
        Composite weights (must sum to 1.0):
            frequency_weight: Weight of change_frequency
            diversity_weight: Weight of author_diversity
            volume_weight: Weight of change_volume
            bug_ratio_weight: Weight of bug_ratio

        Saturation (counter value at which a factor reaches 1.0):
            frequency_saturation: Commits
            author_saturation: Distinct authors
            volume_saturation: Inserted + deleted lines
            saturation_exponent: Curve shape in (0, 1]. 1.0 is a linear ramp,
                smaller values rise faster early and flatten near the knee.

        Explanations:
            reason_threshold: A factor must exceed this to produce a reason

        Output:
            score_precision: Decimal places kept in the composite score

        Trends:
            trend_stable_delta: |last - first| below this is "stable"
    """

    # === Composite weights (sum = 1.0) ===
    frequency_weight: float = 0.30
    diversity_weight: float = 0.20
    volume_weight: float = 0.30
    bug_ratio_weight: float = 0.20

    # === Saturation knees ===
    frequency_saturation: float = 40.0
    author_saturation: float = 8.0
    volume_saturation: float = 300.0
    saturation_exponent: float = 0.5

    # === Explanations ===
    reason_threshold: float = 0.25

    # === Output ===
    score_precision: int = 4

    # === Trends ===
    trend_stable_delta: float = 0.10

    def __post_init__(self) -> None:
        """Validate risk configuration."""
        weight_fields = [
            "frequency_weight",
            "diversity_weight",
            "volume_weight",
            "bug_ratio_weight",
        ]
        for field_name in weight_fields:
            value = getattr(self, field_name)
            if not math.isfinite(value) or value < 0.0:
                raise InvalidConfigError(field_name, value, "weight must be non-negative")

        weight_sum = sum(getattr(self, name) for name in weight_fields)
        if not 0.99 <= weight_sum <= 1.01:
            raise InvalidConfigError(
                "weights", f"{weight_sum:.3f}", "risk weights must sum to 1.0"
            )

        for field_name in ("frequency_saturation", "author_saturation", "volume_saturation"):
            value = getattr(self, field_name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfigError(field_name, value, "saturation point must be positive")

        if not 0.0 < self.saturation_exponent <= 1.0:
            raise InvalidConfigError(
                "saturation_exponent", self.saturation_exponent, "must be in (0, 1]"
            )
        if not 0.0 <= self.reason_threshold < 1.0:
            raise InvalidConfigError(
                "reason_threshold", self.reason_threshold, "must be in [0, 1)"
            )
        if self.score_precision < 1:
            raise InvalidConfigError("score_precision", self.score_precision, "must be at least 1")
        if not 0.0 <= self.trend_stable_delta <= 1.0:
            raise InvalidConfigError(
                "trend_stable_delta", self.trend_stable_delta, "must be in [0, 1]"
            )

    @property
    def weights(self) -> dict[str, float]:
        """Factor name -> weight, in canonical factor order."""
        return {
            "change_frequency": self.frequency_weight,
            "author_diversity": self.diversity_weight,
            "change_volume": self.volume_weight,
            "bug_ratio": self.bug_ratio_weight,
        }


# Default risk configuration (singleton)
DEFAULT_RISK_CONFIG = RiskConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a repository analysis run.

    Attributes:
        Git integration:
            git_max_commits: Maximum commits read from git log (0 = unlimited)
            git_timeout_seconds: Timeout for the git log subprocess
            bug_keywords: Subject substrings marking a commit as a bug fix

        Hotspots:
            hotspot_threshold: Minimum score for a file to be a hotspot
            max_hotspots: Maximum hotspots reported

        Output control:
            verbosity: Logging verbosity level
    """

    # Git integration
    git_max_commits: int = 1000
    git_timeout_seconds: int = 60
    bug_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_BUG_KEYWORDS))

    # Hotspots
    hotspot_threshold: float = 0.5
    max_hotspots: int = 20

    # Output control
    verbosity: Verbosity = "normal"

    # Engine calibration (nested config)
    risk: RiskConfig = field(default_factory=RiskConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.git_max_commits < 0:
            raise InvalidConfigError("git_max_commits", self.git_max_commits, "must be non-negative")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if not self.bug_keywords:
            raise InvalidConfigError("bug_keywords", self.bug_keywords, "must not be empty")

        if not 0.0 <= self.hotspot_threshold <= 1.0:
            raise InvalidConfigError(
                "hotspot_threshold", self.hotspot_threshold, "must be between 0.0 and 1.0"
            )
        if self.max_hotspots < 1:
            raise InvalidConfigError("max_hotspots", self.max_hotspots, "must be at least 1")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Later sources win key by key. A [risk] table is merged the same way, so
    a project file can change one knee without restating the weights.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        RepoRiskError: If a config file is missing or invalid
        InvalidConfigError: If a merged value is out of range

    Example:
        >>> config = load_config(config_file=Path("custom.toml"))
    """
    if config_file is not None and not config_file.exists():
        raise RepoRiskError(f"Config file not found: {config_file}")

    sources = [
        ("global", Path.home() / ".repo-risk.toml"),
        ("project", Path.cwd() / "repo-risk.toml"),
    ]
    if config_file is not None:
        sources.append(("explicit", config_file))

    merged: dict[str, Any] = {}
    risk_table: dict[str, Any] = {}
    for label, path in sources:
        if not path.exists():
            continue
        try:
            data = _load_toml_file(path)
        except RepoRiskError:
            raise
        except Exception as e:
            raise RepoRiskError(f"Invalid {label} config '{path}': {e}")
        _merge_layer(merged, risk_table, data)

    _merge_layer(merged, risk_table, _load_env_vars())
    _merge_layer(merged, risk_table, _apply_verbosity_flags(overrides))

    if risk_table:
        try:
            merged["risk"] = RiskConfig(**risk_table)
        except TypeError as e:
            raise RepoRiskError(f"Invalid [risk] config: {e}")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise RepoRiskError(f"Invalid configuration: {e}")


def _merge_layer(merged: dict[str, Any], risk_table: dict[str, Any], layer: dict[str, Any]) -> None:
    for key, value in layer.items():
        if key != "risk":
            merged[key] = value
        elif isinstance(value, RiskConfig):
            risk_table.clear()
            risk_table.update(asdict(value))
        elif isinstance(value, dict):
            risk_table.update(value)
        else:
            raise RepoRiskError(f"Invalid [risk] config: expected a table, got {value!r}")


def _apply_verbosity_flags(overrides: dict[str, Any]) -> dict[str, Any]:
    """Turn verbose/quiet booleans into a verbosity value. quiet wins."""
    result = dict(overrides)
    verbose = result.pop("verbose", False)
    quiet = result.pop("quiet", False)
    if quiet:
        result["verbosity"] = "quiet"
    elif verbose:
        result["verbosity"] = "verbose"
    return result


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REPO_RISK_* environment variables.

    Supported environment variables:
        REPO_RISK_GIT_MAX_COMMITS: int
        REPO_RISK_GIT_TIMEOUT_SECONDS: int
        REPO_RISK_HOTSPOT_THRESHOLD: float
        REPO_RISK_MAX_HOTSPOTS: int
        REPO_RISK_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any REPO_RISK_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"REPO_RISK_{field_name.upper()}"
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
            raise RepoRiskError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot come from the environment (lists,
    nested configs).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list or type_hint is RiskConfig:
        return None

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
        RepoRiskError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise RepoRiskError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
