"""Map raw history counters to comparable [0, 1] risk factors.

Each counter saturates at a calibration point from RiskConfig:

    saturate(x, knee, p) = min((x / knee) ** p, 1.0)

With p < 1 the curve is concave, so the first commits (or authors, or
changed lines) move the factor more than later ones, and anything past the
knee counts as fully saturated. p = 1 gives a plain linear ramp.

bug_ratio is already a fraction and is used as-is.
"""

from __future__ import annotations

from ..config import DEFAULT_RISK_CONFIG, RiskConfig
from .models import FileMetrics, RiskFactors


def saturate(value: float, knee: float, exponent: float = 1.0) -> float:
    """Monotone, saturating map of a non-negative counter into [0, 1]."""
    if value <= 0 or knee <= 0:
        return 0.0
    ratio = value / knee
    if ratio >= 1.0:
        return 1.0
    return ratio**exponent


def bug_ratio(bug_commits: int, commit_count: int) -> float:
    """Fraction of commits that were bug fixes. 0 when there are no commits."""
    if commit_count <= 0:
        return 0.0
    return min(bug_commits / commit_count, 1.0)


def normalize(metrics: FileMetrics, config: RiskConfig = DEFAULT_RISK_CONFIG) -> RiskFactors:
    """Compute the four risk factors for one file."""
    # A file nobody committed to carries no historical risk, whatever else
    # the record claims.
    if metrics.commit_count == 0:
        return RiskFactors()

    p = config.saturation_exponent
    return RiskFactors(
        change_frequency=saturate(metrics.commit_count, config.frequency_saturation, p),
        author_diversity=saturate(metrics.author_count, config.author_saturation, p),
        change_volume=saturate(metrics.total_changes, config.volume_saturation, p),
        bug_ratio=bug_ratio(metrics.bug_commits, metrics.commit_count),
    )
