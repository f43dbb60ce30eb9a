"""Aggregate commit history into per-file FileMetrics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..config import DEFAULT_BUG_KEYWORDS
from ..risk.models import FileMetrics
from .models import GitHistory


def is_bug_fix(subject: str, keywords: Iterable[str] = DEFAULT_BUG_KEYWORDS) -> bool:
    """True if the commit subject contains any bug-fix keyword (case-insensitive)."""
    subject_lower = subject.lower()
    return any(kw.lower() in subject_lower for kw in keywords)


@dataclass
class _FileAccumulator:
    commit_count: int = 0
    total_changes: int = 0
    bug_commits: int = 0
    last_timestamp: int = 0
    authors: set[str] = field(default_factory=set)


def aggregate_file_metrics(
    history: GitHistory,
    bug_keywords: Sequence[str] = DEFAULT_BUG_KEYWORDS,
) -> list[FileMetrics]:
    """Per-file metrics from git history, sorted by file path.

    A commit listing the same path twice (e.g. after rename resolution)
    counts once for that file; its line changes are summed.
    """
    accumulators: dict[str, _FileAccumulator] = {}

    for commit in history.commits:
        is_fix = is_bug_fix(commit.subject, bug_keywords)

        changes_by_path: dict[str, int] = {}
        for fc in commit.files:
            changes_by_path[fc.path] = changes_by_path.get(fc.path, 0) + fc.lines_changed

        for path, lines_changed in changes_by_path.items():
            acc = accumulators.setdefault(path, _FileAccumulator())
            acc.commit_count += 1
            acc.total_changes += lines_changed
            acc.authors.add(commit.author)
            if is_fix:
                acc.bug_commits += 1
            acc.last_timestamp = max(acc.last_timestamp, commit.timestamp)

    return [
        FileMetrics(
            file_path=path,
            commit_count=acc.commit_count,
            author_count=len(acc.authors),
            total_changes=acc.total_changes,
            bug_commits=acc.bug_commits,
            last_modified=datetime.fromtimestamp(acc.last_timestamp, tz=timezone.utc),
            authors=frozenset(acc.authors),
        )
        for path, acc in sorted(accumulators.items())
    ]
