"""Tests for the exception hierarchy."""

from pathlib import Path

from repo_risk.exceptions import (
    AnalysisError,
    ConfigurationError,
    GitHistoryError,
    InvalidArgumentError,
    InvalidConfigError,
    InvalidPathError,
    InvariantViolationError,
    RepoRiskError,
)


class TestHierarchy:
    def test_analysis_errors(self):
        for cls in (InvalidArgumentError, InvariantViolationError, GitHistoryError):
            assert issubclass(cls, AnalysisError)
            assert issubclass(cls, RepoRiskError)

    def test_configuration_errors(self):
        for cls in (InvalidConfigError, InvalidPathError):
            assert issubclass(cls, ConfigurationError)


class TestMessages:
    def test_details_rendered(self):
        err = InvalidArgumentError("limit", 0, "must be a positive integer")
        assert str(err) == (
            "Invalid argument limit=0 (argument=limit, reason=must be a positive integer)"
        )
        assert err.value == 0

    def test_plain_message(self):
        assert str(RepoRiskError("boom")) == "boom"

    def test_invariant_violation(self):
        err = InvariantViolationError("a.py", "bug_commits exceeds commit_count")
        assert err.file_path == "a.py"
        assert "a.py" in str(err)

    def test_path_error(self):
        err = InvalidPathError(Path("/tmp/x"), "not a directory")
        assert err.details["reason"] == "not a directory"
