"""
repo-risk - Git history risk and hotspot analysis

Scores every file in a repository by change frequency, ownership spread,
change volume and bug-fix history, then ranks the riskiest files with
reasons and remediation advice.
"""

__version__ = "0.1.0"

from .api import AnalysisResult, analyze
from .risk import (
    FileMetrics,
    Hotspot,
    RiskLevel,
    RiskScore,
    calculate_risk_scores,
    identify_hotspots,
)

__all__ = [
    "analyze",  # Main entry point
    "AnalysisResult",
    "FileMetrics",
    "Hotspot",
    "RiskLevel",
    "RiskScore",
    "calculate_risk_scores",
    "identify_hotspots",
]
