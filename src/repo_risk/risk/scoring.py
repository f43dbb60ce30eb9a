"""Composite risk score: a fixed weighted sum of normalized factors."""

from __future__ import annotations

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from .models import RiskFactors


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def factor_contributions(
    factors: RiskFactors, config: RiskConfig = DEFAULT_RISK_CONFIG
) -> dict[str, float]:
    """weight_i * factor_i for every factor, in canonical factor order."""
    weights = config.weights
    return {name: weights[name] * value for name, value in factors.as_dict().items()}


def composite_score(factors: RiskFactors, config: RiskConfig = DEFAULT_RISK_CONFIG) -> float:
    """Weighted risk score in [0, 1].

    Non-negative weights make the score monotone in every factor. Rounding
    to config.score_precision keeps serialized scores stable and is itself
    monotone, so it cannot reorder two files.
    """
    total = sum(factor_contributions(factors, config).values())
    return round(clamp01(total), config.score_precision)
