"""Tests for config validation."""

import pytest

from talent_scout.config import SourcingConfig, load_config


class TestConfigValidation:
    def test_valid_defaults(self, tmp_path):
        """Default config passes validation without raising."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.llm.timeout == 60
        assert config.sourcing.candidate_count == 6

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_max_retries(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  max_retries: 9\n")
        with pytest.raises(ValueError, match="max_retries"):
            load_config(yaml)

    def test_invalid_candidate_count(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("sourcing:\n  candidate_count: 0\n")
        with pytest.raises(ValueError, match="candidate_count"):
            load_config(yaml)

    def test_invalid_delay(self):
        with pytest.raises(ValueError, match="delay_seconds"):
            SourcingConfig(delay_seconds=-1)

    def test_zero_delay_allowed(self):
        assert SourcingConfig(delay_seconds=0).delay_seconds == 0
