"""Data models for git history extraction."""

from dataclasses import dataclass, field


@dataclass
class FileChange:
    path: str
    insertions: int = 0
    deletions: int = 0  # binary files report 0 for both

    @property
    def lines_changed(self) -> int:
        return self.insertions + self.deletions


@dataclass
class Commit:
    hash: str
    timestamp: int  # unix seconds
    author: str
    subject: str = ""
    files: list[FileChange] = field(default_factory=list)


@dataclass
class GitHistory:
    """Non-merge commits of one repository, newest first."""

    commits: list[Commit] = field(default_factory=list)

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    @property
    def file_set(self) -> set[str]:
        return {fc.path for commit in self.commits for fc in commit.files}

    @property
    def span_days(self) -> int:
        """Whole days between the oldest and newest commit, at least 1 if there are two."""
        if len(self.commits) < 2:
            return 0
        timestamps = [c.timestamp for c in self.commits]
        return max(1, (max(timestamps) - min(timestamps)) // 86400)
