"""Risk trend prediction across successive metric snapshots.

Each snapshot is a batch of FileMetrics from one earlier analysis run. A
file's scores are ordered by last_modified and compared first-to-last:

- |last - first| < RiskConfig.trend_stable_delta  -> STABLE, confidence 0.8
- otherwise INCREASING / DECREASING, confidence min(2 * |delta|, 1.0)

The least-squares slope over the whole series is reported alongside so
callers can tell a steady climb from a single jump.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

import numpy as np

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from ..logging_config import get_logger
from .analyzer import score_file
from .models import FileMetrics, RiskTrend, Trend

logger = get_logger(__name__)

STABLE_CONFIDENCE = 0.8
MIN_DATA_POINTS = 2

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(metrics: FileMetrics) -> datetime:
    ts = metrics.last_modified
    if ts is None:
        return _EPOCH
    # Naive timestamps are taken as UTC so they compare with aware ones
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def _least_squares_slope(scores: list[float]) -> float:
    if len(scores) < 2:
        return 0.0
    x = np.arange(len(scores), dtype=float)
    slope, _intercept = np.polyfit(x, np.asarray(scores, dtype=float), 1)
    return float(slope)


def classify_trend(first: float, last: float, stable_delta: float) -> tuple[Trend, float]:
    """Trend direction and confidence from the first and last score."""
    delta = last - first
    if abs(delta) < stable_delta:
        return Trend.STABLE, STABLE_CONFIDENCE
    confidence = min(abs(delta) * 2, 1.0)
    return (Trend.INCREASING if delta > 0 else Trend.DECREASING), confidence


def predict_risk_trends(
    snapshots: Iterable[Iterable[FileMetrics]],
    config: Optional[RiskConfig] = None,
) -> list[RiskTrend]:
    """Predict per-file risk trends, ordered by file path.

    Files seen in fewer than two snapshots are skipped. A path repeated
    within one snapshot counts once; the first record wins.
    """
    config = config or DEFAULT_RISK_CONFIG

    by_file: dict[str, list[FileMetrics]] = defaultdict(list)
    for index, snapshot in enumerate(snapshots):
        seen: set[str] = set()
        for metrics in snapshot:
            if metrics.file_path in seen:
                logger.warning(
                    "Ignoring duplicate %s in snapshot #%d", metrics.file_path, index
                )
                continue
            seen.add(metrics.file_path)
            by_file[metrics.file_path].append(metrics)

    trends: list[RiskTrend] = []
    for file_path in sorted(by_file):
        history = by_file[file_path]
        if len(history) < MIN_DATA_POINTS:
            logger.debug("Skipping trend for %s: only %d data point(s)", file_path, len(history))
            continue

        # sorted() is stable, so snapshots with equal timestamps keep input order
        ordered = sorted(history, key=_sort_key)
        points = [(m.last_modified, score_file(m, config).score) for m in ordered]
        scores = [score for _, score in points]

        trend, confidence = classify_trend(scores[0], scores[-1], config.trend_stable_delta)
        trends.append(
            RiskTrend(
                file_path=file_path,
                trend=trend,
                confidence=round(confidence, config.score_precision),
                slope=round(_least_squares_slope(scores), config.score_precision),
                historical_scores=tuple(points),
            )
        )

    return trends
