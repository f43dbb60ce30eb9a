"""Tests for configuration loading and validation."""

import pytest

from repo_risk.config import DEFAULT_RISK_CONFIG, AnalysisConfig, RiskConfig, load_config
from repo_risk.exceptions import InvalidConfigError, RepoRiskError


class TestRiskConfig:
    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_RISK_CONFIG.weights.values()) == pytest.approx(1.0)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(InvalidConfigError, match="weights"):
            RiskConfig(frequency_weight=0.5)

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigError):
            RiskConfig(
                frequency_weight=-0.1, diversity_weight=0.4,
                volume_weight=0.4, bug_ratio_weight=0.3,
            )

    def test_saturation_must_be_positive(self):
        with pytest.raises(InvalidConfigError):
            RiskConfig(volume_saturation=0)

    @pytest.mark.parametrize("exponent", [0.0, 1.5])
    def test_exponent_range(self, exponent):
        with pytest.raises(InvalidConfigError):
            RiskConfig(saturation_exponent=exponent)

    def test_frozen(self):
        with pytest.raises(Exception):
            DEFAULT_RISK_CONFIG.frequency_weight = 0.9  # type: ignore[misc]


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.hotspot_threshold == 0.5
        assert config.git_max_commits == 1000
        assert "fix" in config.bug_keywords

    def test_threshold_range(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(hotspot_threshold=1.5)

    def test_max_hotspots_positive(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(max_hotspots=0)


class TestLoadConfig:
    def test_defaults_without_files(self):
        assert load_config() == AnalysisConfig()

    def test_overrides(self):
        config = load_config(max_hotspots=5, verbose=True)
        assert config.max_hotspots == 5
        assert config.verbosity == "verbose"

    def test_quiet_flag(self):
        assert load_config(quiet=True).verbosity == "quiet"

    def test_project_toml_with_risk_table(self, tmp_path):
        (tmp_path / "repo-risk.toml").write_text(
            "hotspot_threshold = 0.7\n"
            "\n"
            "[risk]\n"
            "frequency_saturation = 20.0\n"
            "reason_threshold = 0.4\n"
        )
        config = load_config()
        assert config.hotspot_threshold == 0.7
        assert config.risk.frequency_saturation == 20.0
        assert config.risk.reason_threshold == 0.4
        assert config.risk.volume_weight == 0.30

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(RepoRiskError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("no_such_option = 1\n")
        with pytest.raises(RepoRiskError, match="Invalid configuration"):
            load_config(config_file=path)

    def test_invalid_risk_table(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[risk]\nmystery = 1\n")
        with pytest.raises(RepoRiskError, match=r"\[risk\]"):
            load_config(config_file=path)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("REPO_RISK_MAX_HOTSPOTS", "7")
        monkeypatch.setenv("REPO_RISK_HOTSPOT_THRESHOLD", "0.65")
        config = load_config()
        assert config.max_hotspots == 7
        assert config.hotspot_threshold == 0.65

    def test_bad_env_var(self, monkeypatch):
        monkeypatch.setenv("REPO_RISK_MAX_HOTSPOTS", "many")
        with pytest.raises(RepoRiskError, match="REPO_RISK_MAX_HOTSPOTS"):
            load_config()

    def test_override_beats_env(self, monkeypatch):
        monkeypatch.setenv("REPO_RISK_MAX_HOTSPOTS", "7")
        assert load_config(max_hotspots=3).max_hotspots == 3

    def test_risk_tables_merge_across_files(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".repo-risk.toml").write_text("[risk]\nvolume_saturation = 500.0\n")
        (tmp_path / "repo-risk.toml").write_text("[risk]\nauthor_saturation = 4.0\n")

        risk = load_config().risk
        assert risk.volume_saturation == 500.0
        assert risk.author_saturation == 4.0
