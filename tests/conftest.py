"""Shared test fixtures for repo-risk."""

import json
import os
from datetime import datetime, timezone

import pytest

from repo_risk.risk import FileMetrics


def _metrics(
    file_path: str = "src/app.py",
    commit_count: int = 10,
    author_count: int = 2,
    total_changes: int = 100,
    bug_commits: int = 0,
    last_modified: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
) -> FileMetrics:
    return FileMetrics(
        file_path=file_path,
        commit_count=commit_count,
        author_count=author_count,
        total_changes=total_changes,
        bug_commits=bug_commits,
        last_modified=last_modified,
    )


@pytest.fixture
def make_metrics():
    """Factory for FileMetrics with sensible defaults."""
    return _metrics


@pytest.fixture
def critical_file():
    """45 commits, 8 authors, 320 changed lines, 12 bug fixes."""
    return _metrics("src/core/engine.ts", 45, 8, 320, 12)


@pytest.fixture
def high_file():
    """25 commits, 5 authors, 650 changed lines, 3 bug fixes."""
    return _metrics("src/api/routes.ts", 25, 5, 650, 3)


@pytest.fixture
def medium_file():
    """15 commits, 3 authors, 120 changed lines, 2 bug fixes."""
    return _metrics("src/utils/format.ts", 15, 3, 120, 2)


@pytest.fixture
def untouched_file():
    return _metrics("README.md", 0, 0, 0, 0)


@pytest.fixture
def mixed_metrics(critical_file, high_file, medium_file, untouched_file):
    return [medium_file, untouched_file, critical_file, high_file]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep a real ~/.repo-risk.toml, ./repo-risk.toml or REPO_RISK_* out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("REPO_RISK_"):
            monkeypatch.delenv(key)


def _write_metrics(path, metrics):
    path.write_text(json.dumps([m.to_dict() for m in metrics]), encoding="utf-8")
    return path


@pytest.fixture
def write_metrics():
    """Serialize FileMetrics to a JSON snapshot file."""
    return _write_metrics


@pytest.fixture
def metrics_file(tmp_path, mixed_metrics):
    """mixed_metrics serialized as a camelCase JSON array."""
    return _write_metrics(tmp_path / "metrics.json", mixed_metrics)
