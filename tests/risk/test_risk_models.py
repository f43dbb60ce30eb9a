"""Tests for FileMetrics validation and serialization."""

from datetime import datetime, timezone

import pytest

from repo_risk.exceptions import InvariantViolationError
from repo_risk.risk import FileMetrics, RiskLevel


class TestFileMetricsInvariants:
    def test_valid_metrics(self):
        m = FileMetrics("a.py", commit_count=3, author_count=2, total_changes=40, bug_commits=1)
        assert m.bug_commits == 1
        assert m.authors == frozenset()

    @pytest.mark.parametrize(
        "field", ["commit_count", "author_count", "total_changes", "bug_commits"]
    )
    def test_negative_counter_rejected(self, field):
        kwargs = {"commit_count": 5, "author_count": 1, "total_changes": 10, "bug_commits": 0}
        kwargs[field] = -1
        with pytest.raises(InvariantViolationError) as exc_info:
            FileMetrics("a.py", **kwargs)
        assert exc_info.value.file_path == "a.py"
        assert field in exc_info.value.reason

    def test_bug_commits_above_commit_count_rejected(self):
        with pytest.raises(InvariantViolationError, match="Invalid metrics for a.py"):
            FileMetrics("a.py", commit_count=2, bug_commits=3)

    def test_non_integer_counter_rejected(self):
        with pytest.raises(InvariantViolationError):
            FileMetrics("a.py", commit_count=2.5)

    def test_bool_counter_rejected(self):
        with pytest.raises(InvariantViolationError):
            FileMetrics("a.py", commit_count=True)

    def test_empty_path_rejected(self):
        with pytest.raises(InvariantViolationError):
            FileMetrics("", commit_count=1)

    def test_authors_must_match_count(self):
        with pytest.raises(InvariantViolationError, match="listed authors"):
            FileMetrics("a.py", commit_count=2, author_count=3, authors={"alice", "bob"})

    def test_authors_list_frozen(self):
        m = FileMetrics("a.py", commit_count=2, author_count=2, authors=["alice", "bob"])
        assert m.authors == frozenset({"alice", "bob"})


class TestFileMetricsFromDict:
    def test_camel_case_record(self):
        m = FileMetrics.from_dict(
            {
                "filePath": "src/high-risk.ts",
                "commitCount": 50,
                "authorCount": 2,
                "riskScore": 0.8,  # stale upstream score is ignored
                "totalChanges": 1000,
                "bugCommits": 15,
                "lastModified": "2024-01-01T00:00:00Z",
                "authors": ["author1", "author2"],
            }
        )
        assert m.file_path == "src/high-risk.ts"
        assert m.commit_count == 50
        assert m.last_modified == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert m.authors == frozenset({"author1", "author2"})

    def test_snake_case_record(self):
        m = FileMetrics.from_dict({"file_path": "a.py", "commit_count": 4, "bug_commits": 1})
        assert m.commit_count == 4
        assert m.author_count == 0

    def test_unix_timestamp(self):
        m = FileMetrics.from_dict({"filePath": "a.py", "commitCount": 1, "lastModified": 0})
        assert m.last_modified == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_bad_timestamp_rejected(self):
        with pytest.raises(InvariantViolationError, match="a.py"):
            FileMetrics.from_dict({"filePath": "a.py", "commitCount": 1, "lastModified": "soon"})

    def test_missing_path_rejected(self):
        with pytest.raises(InvariantViolationError):
            FileMetrics.from_dict({"commitCount": 1})

    def test_to_dict_round_trips_through_from_dict(self, critical_file):
        assert FileMetrics.from_dict(critical_file.to_dict()) == critical_file


class TestRiskLevel:
    def test_parse_is_case_insensitive(self):
        assert RiskLevel.parse("Critical") is RiskLevel.CRITICAL
        assert RiskLevel.parse(RiskLevel.LOW) is RiskLevel.LOW

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            RiskLevel.parse("severe")

    def test_ordering(self):
        ranks = [level.rank for level in RiskLevel]
        assert ranks == [0, 1, 2, 3]
        assert RiskLevel.CRITICAL.rank > RiskLevel.HIGH.rank
