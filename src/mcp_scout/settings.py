"""Runtime settings, read from environment variables at the composition root."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mcp_scout.errors import ConfigurationError

_DEFAULT_SOURCE_TIMEOUT = 10.0
_DEFAULT_TOOLBOX_PATH = Path.home() / ".mcp-scout" / "toolbox.json"


@dataclass(frozen=True, slots=True)
class Settings:
    """Where the tool sources live and how long to wait for them.

    An empty ``catalog_url`` is allowed here; the Catalog Store adapter
    reports it as a configuration error on each search instead.
    An empty ``proxy_url`` means the registry is called directly.
    """

    catalog_url: str = ""
    catalog_key: str = ""
    proxy_url: str = ""
    source_timeout: float = _DEFAULT_SOURCE_TIMEOUT
    toolbox_path: Path = _DEFAULT_TOOLBOX_PATH

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``MCP_SCOUT_*`` environment variables.

        Raises:
            ConfigurationError: If ``MCP_SCOUT_SOURCE_TIMEOUT`` is not a
                positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("MCP_SCOUT_SOURCE_TIMEOUT", "").strip()
        timeout = _DEFAULT_SOURCE_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"MCP_SCOUT_SOURCE_TIMEOUT must be a number of seconds, got '{raw_timeout}'."
                ) from exc
            if timeout <= 0:
                raise ConfigurationError(
                    f"MCP_SCOUT_SOURCE_TIMEOUT must be positive, got '{raw_timeout}'."
                )

        toolbox = env.get("MCP_SCOUT_TOOLBOX_PATH", "").strip()
        return cls(
            catalog_url=env.get("MCP_SCOUT_CATALOG_URL", "").strip(),
            catalog_key=env.get("MCP_SCOUT_CATALOG_KEY", "").strip(),
            proxy_url=env.get("MCP_SCOUT_PROXY_URL", "").strip(),
            source_timeout=timeout,
            toolbox_path=Path(toolbox).expanduser() if toolbox else _DEFAULT_TOOLBOX_PATH,
        )
