"""Per-file risk pipeline: normalize -> score -> classify -> explain.

Every function here is pure. Files never read each other's data, so a
caller may fan score_file() out over a worker pool without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from ..logging_config import get_logger
from .classification import classify_risk
from .explanation import explain_reasons, recommend
from .models import FileMetrics, RiskScore
from .normalization import normalize
from .scoring import composite_score

logger = get_logger(__name__)


def score_file(metrics: FileMetrics, config: RiskConfig = DEFAULT_RISK_CONFIG) -> RiskScore:
    """Explained risk score for a single file."""
    factors = normalize(metrics, config)
    score = composite_score(factors, config)
    level = classify_risk(score)
    return RiskScore(
        file_path=metrics.file_path,
        score=score,
        factors=factors,
        recommendations=recommend(factors, level, config),
        risk_level=level,
        reasons=explain_reasons(metrics, factors, config),
    )


def calculate_risk_scores(
    file_metrics: Iterable[FileMetrics],
    config: Optional[RiskConfig] = None,
) -> list[RiskScore]:
    """One RiskScore per input file, in input order."""
    config = config or DEFAULT_RISK_CONFIG
    scores = [score_file(metrics, config) for metrics in file_metrics]
    logger.debug("Scored %d files", len(scores))
    return scores


def score_map(
    file_metrics: Sequence[FileMetrics],
    config: Optional[RiskConfig] = None,
) -> dict[str, RiskScore]:
    """file_path -> RiskScore."""
    return {score.file_path: score for score in calculate_risk_scores(file_metrics, config)}
