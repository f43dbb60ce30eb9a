"""Data models for risk and hotspot analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from ..exceptions import InvariantViolationError


class RiskLevel(str, Enum):
    """Risk tier derived from a composite score. Ordered low -> critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @classmethod
    def parse(cls, value: "RiskLevel | str") -> "RiskLevel":
        """Accept a RiskLevel or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


_LEVEL_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL]


# Upstream records use camelCase keys
_FIELD_ALIASES = {
    "filePath": "file_path",
    "commitCount": "commit_count",
    "authorCount": "author_count",
    "totalChanges": "total_changes",
    "bugCommits": "bug_commits",
    "lastModified": "last_modified",
}

_COUNTER_FIELDS = ("commit_count", "author_count", "total_changes", "bug_commits")


@dataclass(frozen=True)
class FileMetrics:
    """Aggregated history of one file within one analysis run.

    Construction enforces the aggregator's contract: non-negative integer
    counters and bug_commits <= commit_count. A violation raises
    InvariantViolationError, so everything downstream can assume valid input.
    """

    file_path: str
    commit_count: int = 0
    author_count: int = 0
    total_changes: int = 0
    bug_commits: int = 0
    last_modified: Optional[datetime] = None
    authors: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.file_path, str) or not self.file_path:
            raise InvariantViolationError(str(self.file_path or ""), "file_path must be a non-empty string")

        for name in _COUNTER_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass but never a valid counter
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvariantViolationError(
                    self.file_path, f"{name} must be an integer, got {value!r}"
                )
            if value < 0:
                raise InvariantViolationError(self.file_path, f"{name} must be non-negative")

        if self.bug_commits > self.commit_count:
            raise InvariantViolationError(
                self.file_path,
                f"bug_commits ({self.bug_commits}) exceeds commit_count ({self.commit_count})",
            )

        if not isinstance(self.authors, frozenset):
            object.__setattr__(self, "authors", frozenset(self.authors))
        if self.authors and len(self.authors) != self.author_count:
            raise InvariantViolationError(
                self.file_path,
                f"author_count ({self.author_count}) does not match "
                f"{len(self.authors)} listed authors",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileMetrics":
        """Build from a snake_case or camelCase record.

        lastModified may be a datetime, an ISO-8601 string or unix seconds.
        Extra keys (e.g. a stale upstream riskScore) are ignored.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value

        if "file_path" not in values:
            raise InvariantViolationError("", "record has no file path")

        if values.get("last_modified") is not None:
            values["last_modified"] = _parse_timestamp(values["file_path"], values["last_modified"])
        if "authors" in values:
            values["authors"] = frozenset(values["authors"] or ())

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "commitCount": self.commit_count,
            "authorCount": self.author_count,
            "totalChanges": self.total_changes,
            "bugCommits": self.bug_commits,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
            "authors": sorted(self.authors),
        }


def _parse_timestamp(file_path: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            # NaN, infinities and years outside datetime's range
            raise InvariantViolationError(file_path, f"unparseable lastModified {value!r}")
    if isinstance(value, str):
        try:
            # fromisoformat() only accepts a trailing Z from 3.11 on
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    raise InvariantViolationError(file_path, f"unparseable lastModified {value!r}")


@dataclass(frozen=True)
class RiskFactors:
    """Normalized risk factors, each in [0, 1]."""

    change_frequency: float = 0.0
    author_diversity: float = 0.0
    change_volume: float = 0.0
    bug_ratio: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "change_frequency": self.change_frequency,
            "author_diversity": self.author_diversity,
            "change_volume": self.change_volume,
            "bug_ratio": self.bug_ratio,
        }

    def to_dict(self) -> dict[str, float]:
        return {
            "changeFrequency": self.change_frequency,
            "authorDiversity": self.author_diversity,
            "changeVolume": self.change_volume,
            "bugRatio": self.bug_ratio,
        }


@dataclass(frozen=True)
class RiskScore:
    """Explained composite risk for one file."""

    file_path: str
    score: float
    factors: RiskFactors
    recommendations: tuple[str, ...] = ()
    risk_level: RiskLevel = RiskLevel.LOW
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "score": self.score,
            "riskLevel": self.risk_level.value,
            "factors": self.factors.to_dict(),
            "reasons": list(self.reasons),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class HotspotMetrics:
    """Raw counters shown next to a hotspot."""

    commit_count: int
    author_count: int
    total_changes: int
    bug_commits: int

    @classmethod
    def from_file_metrics(cls, metrics: FileMetrics) -> "HotspotMetrics":
        return cls(
            commit_count=metrics.commit_count,
            author_count=metrics.author_count,
            total_changes=metrics.total_changes,
            bug_commits=metrics.bug_commits,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "commitCount": self.commit_count,
            "authorCount": self.author_count,
            "totalChanges": self.total_changes,
            "bugCommits": self.bug_commits,
        }


@dataclass(frozen=True)
class Hotspot:
    """A file whose risk score met the caller's threshold."""

    file_path: str
    risk_score: float
    risk_level: RiskLevel
    reasons: tuple[str, ...]
    metrics: HotspotMetrics
    rank: int = 0  # 1-indexed position in the ranked list
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "filePath": self.file_path,
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "reasons": list(self.reasons),
            "recommendations": list(self.recommendations),
            "metrics": self.metrics.to_dict(),
        }


class Trend(str, Enum):
    """Direction of a file's risk across snapshots."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class RiskTrend:
    file_path: str
    trend: Trend
    confidence: float
    slope: float  # least-squares score change per snapshot
    historical_scores: tuple[tuple[Optional[datetime], float], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "trend": self.trend.value,
            "confidence": self.confidence,
            "slope": self.slope,
            "historicalScores": [
                {"date": date.isoformat() if date else None, "score": score}
                for date, score in self.historical_scores
            ],
        }
