"""Exception hierarchy for repo-risk."""

from .analysis import (
    AnalysisError,
    GitHistoryError,
    InvalidArgumentError,
    InvariantViolationError,
)
from .base import RepoRiskError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "RepoRiskError",
    "AnalysisError",
    "InvalidArgumentError",
    "InvariantViolationError",
    "GitHistoryError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
