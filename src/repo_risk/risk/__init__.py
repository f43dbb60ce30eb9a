"""Risk and hotspot analysis engine.

Pure functions from per-file history metrics to explained risk scores,
risk tiers and ranked hotspots. No I/O, no clock, no shared state.
"""

from .analyzer import calculate_risk_scores, score_file
from .classification import RISK_LEVEL_CUTOFFS, classify_risk, summarize_by_level
from .explanation import FACTOR_PRIORITY, dominant_factor, explain_reasons, recommend
from .hotspots import DEFAULT_HOTSPOT_THRESHOLD, identify_hotspots
from .loader import load_file_metrics
from .models import (
    FileMetrics,
    Hotspot,
    HotspotMetrics,
    RiskFactors,
    RiskLevel,
    RiskScore,
    RiskTrend,
    Trend,
)
from .normalization import normalize, saturate
from .scoring import composite_score
from .trends import predict_risk_trends

__all__ = [
    "FileMetrics",
    "RiskFactors",
    "RiskScore",
    "RiskLevel",
    "Hotspot",
    "HotspotMetrics",
    "RiskTrend",
    "Trend",
    "DEFAULT_HOTSPOT_THRESHOLD",
    "FACTOR_PRIORITY",
    "RISK_LEVEL_CUTOFFS",
    "calculate_risk_scores",
    "classify_risk",
    "composite_score",
    "dominant_factor",
    "explain_reasons",
    "identify_hotspots",
    "load_file_metrics",
    "normalize",
    "predict_risk_trends",
    "recommend",
    "saturate",
    "score_file",
    "summarize_by_level",
]
