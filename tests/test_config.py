"""
Tests for Configuration Module
"""

import pytest

from agent_os.config import Config
from agent_os.errors import ConfigurationError


class TestConfig:
    """Test configuration loading and validation"""

    def test_config_default_provider(self):
        """Test default LLM provider is set"""
        assert Config.DEFAULT_LLM_PROVIDER in ["anthropic", "openai"]

    def test_refine_context_has_default(self):
        assert Config.REFINE_CONTEXT

    def test_get_api_key_missing_raises(self):
        with pytest.raises(ConfigurationError):
            Config.get_api_key("anthropic")
        with pytest.raises(ConfigurationError):
            Config.get_api_key("openai")

    def test_get_api_key_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            Config.get_api_key("gemini")

    def test_get_api_key_present(self, monkeypatch):
        monkeypatch.setattr(Config, "OPENAI_API_KEY", "sk-test")
        assert Config.get_api_key("openai") == "sk-test"

    def test_is_configured(self, monkeypatch):
        monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", "anthropic")
        assert Config.is_configured() is False

        monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "key")
        assert Config.is_configured() is True
        assert Config.is_configured("openai") is False

    def test_validate_reports_missing_key(self, monkeypatch):
        monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", "openai")
        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()
        assert "OPENAI_API_KEY" in str(exc_info.value)

    def test_validate_passes_with_key(self, monkeypatch):
        monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", "anthropic")
        monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "key")
        assert Config.validate() is True

    def test_validate_missing_capabilities_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", "anthropic")
        monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "key")
        monkeypatch.setattr(Config, "CAPABILITIES_FILE", tmp_path / "missing.json")
        with pytest.raises(ConfigurationError):
            Config.validate()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
