"""Tests for environment-driven settings (settings.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcp_scout.errors import ConfigurationError
from mcp_scout.settings import Settings


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.catalog_url == ""
        assert settings.proxy_url == ""
        assert settings.source_timeout == 10.0
        assert settings.toolbox_path.name == "toolbox.json"

    def test_reads_all_variables(self, tmp_path: Path):
        settings = Settings.from_env(
            {
                "MCP_SCOUT_CATALOG_URL": " https://catalog.example.test ",
                "MCP_SCOUT_CATALOG_KEY": "anon",
                "MCP_SCOUT_PROXY_URL": "https://proxy.example.test",
                "MCP_SCOUT_SOURCE_TIMEOUT": "2.5",
                "MCP_SCOUT_TOOLBOX_PATH": str(tmp_path / "box.json"),
            }
        )
        assert settings.catalog_url == "https://catalog.example.test"
        assert settings.catalog_key == "anon"
        assert settings.proxy_url == "https://proxy.example.test"
        assert settings.source_timeout == 2.5
        assert settings.toolbox_path == tmp_path / "box.json"

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="number of seconds"):
            Settings.from_env({"MCP_SCOUT_SOURCE_TIMEOUT": "soon"})

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="positive"):
            Settings.from_env({"MCP_SCOUT_SOURCE_TIMEOUT": "0"})

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("MCP_SCOUT_PROXY_URL", "https://proxy.example.test")
        assert Settings.from_env().proxy_url == "https://proxy.example.test"
