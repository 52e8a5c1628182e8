"""Tests for kaizen_mcp.core.config — Configuration management."""

import pytest
from kaizen_mcp.core.config import (
    KaizenConfig,
    ApiConfig,
    ServerConfig,
    LoggingConfig,
)

_ENV_VARS = (
    "KAIZEN_API_BASE_URL",
    "KAIZEN_API_KEY",
    "KAIZEN_API_TIMEOUT_SEC",
    "KAIZEN_MCP_TOOL_CALL_TIMEOUT_SEC",
    "KAIZEN_MCP_LOG_LEVEL",
    "KAIZEN_MCP_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestKaizenConfigDefaults:
    def test_from_env_defaults(self):
        config = KaizenConfig.from_env()
        assert config.api.base_url == "http://localhost:8080"
        assert config.api.api_key == ""
        assert config.api.timeout == 60.0
        assert config.server.tool_call_timeout == 60.0
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_model_defaults_match_env_defaults(self):
        assert KaizenConfig() == KaizenConfig.from_env()


class TestKaizenConfigFromEnv:
    def test_overrides(self, monkeypatch, tmp_path):
        log_file = tmp_path / "kaizen.log"
        monkeypatch.setenv("KAIZEN_API_BASE_URL", " https://api.kaizen.dev/ ")
        monkeypatch.setenv("KAIZEN_API_KEY", " sk-test ")
        monkeypatch.setenv("KAIZEN_API_TIMEOUT_SEC", "15")
        monkeypatch.setenv("KAIZEN_MCP_TOOL_CALL_TIMEOUT_SEC", "2.5")
        monkeypatch.setenv("KAIZEN_MCP_LOG_LEVEL", "debug")
        monkeypatch.setenv("KAIZEN_MCP_LOG_FILE", str(log_file))

        config = KaizenConfig.from_env()

        assert config.api.base_url == "https://api.kaizen.dev"
        assert config.api.api_key == "sk-test"
        assert config.api.timeout == 15.0
        assert config.server.tool_call_timeout == 2.5
        assert config.logging.level == "DEBUG"
        assert config.logging.file == str(log_file)

    def test_blank_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("KAIZEN_API_BASE_URL", "   ")
        monkeypatch.setenv("KAIZEN_MCP_LOG_FILE", "")
        config = KaizenConfig.from_env()
        assert config.api.base_url == "http://localhost:8080"
        assert config.logging.file is None

    @pytest.mark.parametrize("raw", ["soon", "0", "-3", "nan", "inf"])
    def test_invalid_timeouts_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("KAIZEN_MCP_TOOL_CALL_TIMEOUT_SEC", raw)
        monkeypatch.setenv("KAIZEN_API_TIMEOUT_SEC", raw)
        config = KaizenConfig.from_env()
        assert config.server.tool_call_timeout == 60.0
        assert config.api.timeout == 60.0


class TestSectionModels:
    def test_custom_sections(self):
        cfg = KaizenConfig(
            api=ApiConfig(base_url="http://kaizen:9000", api_key="k", timeout=5.0),
            server=ServerConfig(tool_call_timeout=1.0),
            logging=LoggingConfig(level="WARNING"),
        )
        assert cfg.api.base_url == "http://kaizen:9000"
        assert cfg.server.tool_call_timeout == 1.0
        assert cfg.logging.level == "WARNING"
