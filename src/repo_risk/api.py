"""Public API for repo-risk.

Users should call analyze() instead of wiring the extractor, aggregator and
engine together by hand.

Example:
    >>> from repo_risk import analyze
    >>>
    >>> result = analyze("/path/to/repo")
    >>> for hotspot in result.hotspots:
    ...     print(hotspot.rank, hotspot.file_path, hotspot.risk_level.value)
    >>>
    >>> # With customization
    >>> result = analyze("/path/to/repo", hotspot_threshold=0.7, max_hotspots=5)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .config import AnalysisConfig, load_config
from .exceptions import GitHistoryError, InvalidPathError
from .logging_config import get_logger
from .risk import (
    FileMetrics,
    Hotspot,
    RiskLevel,
    RiskScore,
    calculate_risk_scores,
    identify_hotspots,
    summarize_by_level,
)
from .risk.loader import read_metrics_file
from .temporal import GitExtractor, aggregate_file_metrics

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Everything one analysis run produces."""

    file_metrics: list[FileMetrics]
    risk_scores: list[RiskScore]
    hotspots: list[Hotspot]
    summary: dict[RiskLevel, int]
    config: AnalysisConfig

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {level.value: count for level, count in self.summary.items()},
            "hotspots": [h.to_dict() for h in self.hotspots],
            "riskScores": [s.to_dict() for s in self.risk_scores],
        }


def collect_file_metrics(path: Path, config: AnalysisConfig) -> list[FileMetrics]:
    """Run the history aggregator over a git repository.

    Raises:
        InvalidPathError: If path is not a directory
        GitHistoryError: If path is not a git repository or git log fails
    """
    if not path.is_dir():
        raise InvalidPathError(path, "not a directory")

    extractor = GitExtractor(
        str(path),
        max_commits=config.git_max_commits,
        timeout=config.git_timeout_seconds,
    )
    if not extractor.is_git_repo():
        raise GitHistoryError(str(path), "not a git repository")

    history = extractor.extract()
    if history is None:
        raise GitHistoryError(str(path), "no commits with file changes could be read")

    return aggregate_file_metrics(history, config.bug_keywords)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    metrics_file: Optional[Path] = None,
    risk_level: Optional[str] = None,
    **overrides,
) -> AnalysisResult:
    """Score every file in a repository and rank its hotspots.

    Pipeline:
    1. Load configuration (auto-discover TOML + apply overrides)
    2. Read per-file metrics, from git history or a pre-aggregated JSON file
    3. Score, classify and explain each file
    4. Rank hotspots above config.hotspot_threshold

    Args:
        path: Repository root (default: current directory)
        config_file: Optional explicit config file path
        metrics_file: Read FileMetrics JSON instead of running git
        risk_level: Only report hotspots in this tier
        **overrides: Configuration overrides (e.g. hotspot_threshold=0.7)

    Raises:
        RepoRiskError: On invalid configuration, path or arguments
    """
    config = load_config(config_file=config_file, **overrides)

    if metrics_file is not None:
        file_metrics = read_metrics_file(Path(metrics_file))
        logger.info("Loaded %d file records from %s", len(file_metrics), metrics_file)
    else:
        repo = Path(path).resolve()
        logger.info("Reading git history of %s", repo)
        file_metrics = collect_file_metrics(repo, config)

    risk_scores = calculate_risk_scores(file_metrics, config.risk)
    hotspots = identify_hotspots(
        file_metrics,
        threshold=config.hotspot_threshold,
        risk_level=risk_level,
        limit=config.max_hotspots,
        config=config.risk,
    )

    return AnalysisResult(
        file_metrics=file_metrics,
        risk_scores=risk_scores,
        hotspots=hotspots,
        summary=summarize_by_level(risk_scores),
        config=config,
    )
