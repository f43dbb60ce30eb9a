"""Hotspot ranking: filter, sort and truncate scored files.

Ordering is score descending with file_path ascending as tie-break, so the
list is a total order and repeated calls return identical output.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Optional, Union

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from ..exceptions import InvalidArgumentError
from ..logging_config import get_logger
from .analyzer import score_file
from .models import FileMetrics, Hotspot, HotspotMetrics, RiskLevel, RiskScore

logger = get_logger(__name__)

DEFAULT_HOTSPOT_THRESHOLD = 0.5


def validate_threshold(threshold: float) -> float:
    """Reject thresholds outside [0, 1]. Never clamps."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidArgumentError("threshold", threshold, "must be a number")
    if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidArgumentError("threshold", threshold, "must be between 0.0 and 1.0")
    return float(threshold)


def validate_limit(limit: Optional[int]) -> Optional[int]:
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError("limit", limit, "must be an integer")
    if limit < 1:
        raise InvalidArgumentError("limit", limit, "must be a positive integer")
    return limit


def validate_risk_level(risk_level: Union[RiskLevel, str, None]) -> Optional[RiskLevel]:
    if risk_level is None:
        return None
    try:
        return RiskLevel.parse(risk_level)
    except ValueError:
        allowed = ", ".join(level.value for level in RiskLevel)
        raise InvalidArgumentError("risk_level", risk_level, f"must be one of {allowed}")


def identify_hotspots(
    file_metrics: Iterable[FileMetrics],
    threshold: float = DEFAULT_HOTSPOT_THRESHOLD,
    risk_level: Union[RiskLevel, str, None] = None,
    limit: Optional[int] = None,
    config: Optional[RiskConfig] = None,
) -> list[Hotspot]:
    """Rank files whose risk score meets the threshold.

    Args:
        file_metrics: Per-file history from the aggregator
        threshold: Minimum score, inclusive, in [0, 1]
        risk_level: Keep only files in this tier
        limit: Keep at most this many hotspots (positive)
        config: Engine calibration (default: DEFAULT_RISK_CONFIG)

    Returns:
        Hotspots sorted by score descending, then file path ascending,
        with 1-indexed ranks.

    Raises:
        InvalidArgumentError: If threshold, risk_level or limit is invalid.
    """
    threshold = validate_threshold(threshold)
    level_filter = validate_risk_level(risk_level)
    limit = validate_limit(limit)
    config = config or DEFAULT_RISK_CONFIG

    candidates: list[tuple[FileMetrics, RiskScore]] = []
    total = 0
    for metrics in file_metrics:
        total += 1
        risk = score_file(metrics, config)
        if risk.score < threshold:
            continue
        # A file nobody touched is never a hotspot, even at threshold 0
        if metrics.commit_count == 0:
            continue
        if level_filter is not None and risk.risk_level is not level_filter:
            continue
        candidates.append((metrics, risk))

    candidates.sort(key=lambda c: (-c[1].score, c[0].file_path))
    if limit is not None:
        candidates = candidates[:limit]

    logger.debug(
        "%d of %d files are hotspots (threshold=%.2f, level=%s, limit=%s)",
        len(candidates),
        total,
        threshold,
        level_filter.value if level_filter else "any",
        limit,
    )

    return [
        Hotspot(
            file_path=metrics.file_path,
            risk_score=risk.score,
            risk_level=risk.risk_level,
            reasons=risk.reasons,
            metrics=HotspotMetrics.from_file_metrics(metrics),
            rank=rank,
            recommendations=risk.recommendations,
        )
        for rank, (metrics, risk) in enumerate(candidates, start=1)
    ]
