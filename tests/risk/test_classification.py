"""Tests for risk tier classification."""

import pytest

from repo_risk.risk import RiskFactors, RiskLevel, RiskScore, classify_risk, summarize_by_level


class TestClassifyRisk:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (1.0, RiskLevel.CRITICAL),
            (0.8, RiskLevel.CRITICAL),
            (0.7999999, RiskLevel.HIGH),
            (0.6, RiskLevel.HIGH),
            (0.5999999, RiskLevel.MEDIUM),
            (0.4, RiskLevel.MEDIUM),
            (0.3999999, RiskLevel.LOW),
            (0.0, RiskLevel.LOW),
        ],
    )
    def test_boundaries_inclusive_on_lower_edge(self, score, expected):
        assert classify_risk(score) is expected

    def test_monotone_in_score(self):
        levels = [classify_risk(i / 100).rank for i in range(101)]
        assert levels == sorted(levels)


class TestSummarizeByLevel:
    def _score(self, path, score):
        return RiskScore(file_path=path, score=score, factors=RiskFactors())

    def test_counts_every_level(self):
        scores = [
            self._score("a", 0.95),
            self._score("b", 0.81),
            self._score("c", 0.65),
            self._score("d", 0.1),
        ]
        assert summarize_by_level(scores) == {
            RiskLevel.CRITICAL: 2,
            RiskLevel.HIGH: 1,
            RiskLevel.MEDIUM: 0,
            RiskLevel.LOW: 1,
        }

    def test_empty(self):
        summary = summarize_by_level([])
        assert list(summary) == [
            RiskLevel.CRITICAL,
            RiskLevel.HIGH,
            RiskLevel.MEDIUM,
            RiskLevel.LOW,
        ]
        assert sum(summary.values()) == 0
