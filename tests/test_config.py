"""Tests for config loading and validation."""

import pytest

from linguacheck.config import AppConfig, CacheConfig, LLMConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.model == "claude-haiku-4-5-20251001"
        assert config.suggestions.min_words == 5
        assert config.suggestions.quiet_period_seconds == 1.5
        assert config.cache.ttl_days == 7
        assert config.document.max_upload_mb == 10

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.llm.timeout == 60

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "llm:\n  model: test-model\nsuggestions:\n  min_words: 3\n  quiet_period_seconds: 0.5\n"
        )
        config = load_config(yaml_path)
        assert config.llm.model == "test-model"
        assert config.suggestions.min_words == 3
        assert config.suggestions.quiet_period_seconds == 0.5
        # Defaults for unspecified
        assert config.cache.ttl_days == 7

    def test_empty_yaml_gives_defaults(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_cache_resolved_path(self):
        cache = CacheConfig(db_path="~/test.db")
        assert "~" not in str(cache.resolved_db_path)

    def test_max_upload_bytes(self):
        assert AppConfig().document.max_upload_bytes == 10 * 1024 * 1024

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.model = "changed"


class TestConfigValidation:
    def test_invalid_timeout(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_max_retries(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  max_retries: 99\n")
        with pytest.raises(ValueError, match="max_retries"):
            load_config(yaml)

    def test_invalid_min_words(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("suggestions:\n  min_words: 0\n")
        with pytest.raises(ValueError, match="min_words"):
            load_config(yaml)

    def test_invalid_quiet_period(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("suggestions:\n  quiet_period_seconds: 0\n")
        with pytest.raises(ValueError, match="quiet_period_seconds"):
            load_config(yaml)

    def test_invalid_ttl_days(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("cache:\n  ttl_days: 999\n")
        with pytest.raises(ValueError, match="ttl_days"):
            load_config(yaml)

    def test_invalid_upload_limit(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("document:\n  max_upload_mb: 500\n")
        with pytest.raises(ValueError, match="max_upload_mb"):
            load_config(yaml)
