"""Upstream Registry adapter: the public MCP server registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mcp_scout.errors import McpScoutError
from mcp_scout.models import (
    UNKNOWN_COUNT,
    SourceError,
    SourceErrorKind,
    SourceOutcome,
    Tool,
    ToolSource,
    UpstreamServer,
    qualified_id,
)
from mcp_scout.registry.base import UpstreamRegistryPort
from mcp_scout.registry.health import HealthProbe
from mcp_scout.sources.base import failed_outcome, unique_by_id

logger = logging.getLogger(__name__)

_PAGE_SIZE = 100
_MAX_PAGES = 3
_CATEGORY = "MCP Server"

_INSTALL_TEMPLATES: dict[str, str] = {
    "npm": "npm install {name}",
    "pypi": "pip install {name}",
    "oci": "docker pull {name}",
    "docker": "docker pull {name}",
}


@dataclass
class UpstreamSource:
    """Filters the registry listing client-side and normalizes its servers.

    The registry offers no search, so each query walks up to
    ``max_pages`` pages of the listing and matches on name/description.
    """

    registry: UpstreamRegistryPort
    probe: HealthProbe | None = None
    page_size: int = _PAGE_SIZE
    max_pages: int = _MAX_PAGES
    name: str = ToolSource.UPSTREAM.value

    async def search(self, query: str) -> SourceOutcome:
        if self.probe is not None and self.probe.is_offline:
            return SourceOutcome(
                source=self.name,
                error=SourceError(
                    source=self.name,
                    kind=SourceErrorKind.OFFLINE,
                    message="Registry: offline",
                ),
                attempted=False,
            )

        try:
            servers = await self._fetch_listing()
        except McpScoutError as exc:
            logger.warning("MCP Registry search failed: %s", exc)
            return failed_outcome(self.name, exc)

        needle = query.lower()
        matches = (
            server
            for server in servers
            if needle in server.name.lower() or needle in server.description.lower()
        )
        return SourceOutcome(
            source=self.name,
            tools=unique_by_id(server_to_tool(server) for server in matches),
        )

    async def _fetch_listing(self) -> list[UpstreamServer]:
        servers: list[UpstreamServer] = []
        cursor: str | None = None
        for _ in range(max(self.max_pages, 1)):
            page = await self.registry.list_servers(limit=self.page_size, cursor=cursor)
            servers.extend(page.servers)
            cursor = page.next_cursor
            if not cursor:
                break
        return servers


def server_to_tool(server: UpstreamServer) -> Tool:
    """Flatten an upstream server into a Tool.

    The registry reports neither downloads nor stars, so both carry the
    ``UNKNOWN_COUNT`` sentinel rather than a misleading zero.
    """
    first = server.packages[0] if server.packages else None
    package_name = first.name if first and first.name else server.name

    install_command = None
    if first and first.name:
        template = _INSTALL_TEMPLATES.get(first.registry_name.lower())
        if template:
            install_command = template.format(name=first.name)

    return Tool(
        id=qualified_id(ToolSource.UPSTREAM, server.id),
        native_id=server.id,
        name=server.name,
        description=server.description,
        category=_CATEGORY,
        version=server.version,
        source=ToolSource.UPSTREAM,
        repository_url=server.repository.url or None,
        downloads=UNKNOWN_COUNT,
        stars=UNKNOWN_COUNT,
        keywords=frozenset(pkg.name for pkg in server.packages if pkg.name),
        package_name=package_name,
        install_command=install_command,
    )
