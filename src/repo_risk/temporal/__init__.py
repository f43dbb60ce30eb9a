"""Temporal analysis: git history extraction and per-file aggregation."""

from .aggregator import aggregate_file_metrics, is_bug_fix
from .git_extractor import GitExtractor
from .models import Commit, FileChange, GitHistory

__all__ = [
    "Commit",
    "FileChange",
    "GitHistory",
    "GitExtractor",
    "aggregate_file_metrics",
    "is_bug_fix",
]
