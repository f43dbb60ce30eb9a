"""Map composite scores to risk tiers.

Cut points are fixed and inclusive on the lower edge:

    [0.8, 1.0]  critical
    [0.6, 0.8)  high
    [0.4, 0.6)  medium
    [0.0, 0.4)  low

classify_risk() is the only place these boundaries live; the hotspot level
filter and the per-tier summary both go through it.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import RiskLevel, RiskScore

# (lower bound, tier), highest first
RISK_LEVEL_CUTOFFS: tuple[tuple[float, RiskLevel], ...] = (
    (0.8, RiskLevel.CRITICAL),
    (0.6, RiskLevel.HIGH),
    (0.4, RiskLevel.MEDIUM),
)


def classify_risk(score: float) -> RiskLevel:
    for lower_bound, level in RISK_LEVEL_CUTOFFS:
        if score >= lower_bound:
            return level
    return RiskLevel.LOW


def summarize_by_level(scores: Iterable[RiskScore]) -> dict[RiskLevel, int]:
    """Count files per tier. Every tier is present, highest first."""
    counts = {level: 0 for level in reversed(list(RiskLevel))}
    for risk_score in scores:
        counts[classify_risk(risk_score.score)] += 1
    return counts
