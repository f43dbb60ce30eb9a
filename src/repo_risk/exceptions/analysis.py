"""Analysis-related exceptions: bad arguments, broken input contracts, git."""

from typing import Any

from .base import RepoRiskError


class AnalysisError(RepoRiskError):
    """Base class for analysis-related errors."""
    pass


class InvalidArgumentError(AnalysisError):
    """Raised when an engine operation receives an out-of-range argument."""

    def __init__(self, argument: str, value: Any, reason: str):
        super().__init__(
            f"Invalid argument {argument}={value!r}",
            details={"argument": argument, "reason": reason},
        )
        self.argument = argument
        self.value = value
        self.reason = reason


class InvariantViolationError(AnalysisError):
    """Raised when file metrics break the aggregator's contract.

    Examples: negative counters, or more bug commits than commits.
    """

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Invalid metrics for {file_path or '<unknown>'}",
            details={"file_path": file_path, "reason": reason},
        )
        self.file_path = file_path
        self.reason = reason


class GitHistoryError(AnalysisError):
    """Raised when commit history cannot be read from a repository."""

    def __init__(self, repo_path: str, reason: str):
        super().__init__(
            f"Cannot read git history: {repo_path}",
            details={"repo_path": repo_path, "reason": reason},
        )
        self.repo_path = repo_path
        self.reason = reason
