"""Human-readable reasons and remediation advice for a risk score.

Each factor contributes weight * value to the composite score. Reasons are
listed for factors above RiskConfig.reason_threshold, largest contribution
first. The single largest contributor picks the recommendation.

Equal contributions are ordered by FACTOR_PRIORITY so the explanation text
never changes between identical runs.
"""

from __future__ import annotations

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from .models import FileMetrics, RiskFactors, RiskLevel
from .scoring import factor_contributions

# Tie-break order, most important first
FACTOR_PRIORITY: tuple[str, ...] = (
    "bug_ratio",
    "change_volume",
    "change_frequency",
    "author_diversity",
)

RECOMMENDATIONS: dict[str, str] = {
    "bug_ratio": "High bug ratio - add regression tests and stabilize this file",
    "author_diversity": "Many contributors - clarify ownership and assign a primary maintainer",
    "change_frequency": "Frequently changed - consider refactoring or splitting this file",
    "change_volume": "Large change volume - consider breaking this file into smaller modules",
}

CRITICAL_RECOMMENDATION = "Critical risk file - immediate attention recommended"


def _format_reason(factor: str, metrics: FileMetrics, factors: RiskFactors) -> str:
    if factor == "change_frequency":
        return f"High commit frequency ({metrics.commit_count} commits)"
    if factor == "author_diversity":
        return f"Many contributors ({metrics.author_count} authors)"
    if factor == "change_volume":
        return f"Large change volume ({metrics.total_changes} changes)"
    return f"Bug fixes present ({factors.bug_ratio * 100:.1f}% of commits)"


def ranked_factors(
    factors: RiskFactors, config: RiskConfig = DEFAULT_RISK_CONFIG
) -> list[tuple[str, float]]:
    """(factor, contribution) pairs, largest contribution first."""
    contributions = factor_contributions(factors, config)
    return sorted(
        contributions.items(),
        key=lambda item: (-item[1], FACTOR_PRIORITY.index(item[0])),
    )


def dominant_factor(
    factors: RiskFactors, config: RiskConfig = DEFAULT_RISK_CONFIG
) -> str | None:
    """Factor with the largest contribution, or None if nothing contributes."""
    name, contribution = ranked_factors(factors, config)[0]
    return name if contribution > 0 else None


def explain_reasons(
    metrics: FileMetrics,
    factors: RiskFactors,
    config: RiskConfig = DEFAULT_RISK_CONFIG,
) -> tuple[str, ...]:
    """Reasons for every factor above the inclusion threshold."""
    if metrics.commit_count == 0:
        return ()

    values = factors.as_dict()
    return tuple(
        _format_reason(name, metrics, factors)
        for name, _ in ranked_factors(factors, config)
        if values[name] > config.reason_threshold
    )


def recommend(
    factors: RiskFactors,
    risk_level: RiskLevel,
    config: RiskConfig = DEFAULT_RISK_CONFIG,
) -> tuple[str, ...]:
    """Suggestion for the dominant factor, escalated for critical files."""
    dominant = dominant_factor(factors, config)
    if dominant is None:
        return ()

    recommendations = [RECOMMENDATIONS[dominant]]
    if risk_level is RiskLevel.CRITICAL:
        recommendations.append(CRITICAL_RECOMMENDATION)
    return tuple(recommendations)
