"""MCP server that searches the tool catalogs and manages toolbox profiles."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from mcp_scout.aggregator import RegistryAggregator
from mcp_scout.catalog.base import CatalogStorePort
from mcp_scout.catalog.client import CatalogClient
from mcp_scout.profiles import Toolbox, load_toolbox
from mcp_scout.registry.base import UpstreamRegistryPort
from mcp_scout.registry.client import UpstreamRegistryClient
from mcp_scout.registry.health import HealthProbe
from mcp_scout.settings import Settings
from mcp_scout.sources.catalog import CatalogSource
from mcp_scout.sources.upstream import UpstreamSource
from mcp_scout.tools.categories import list_categories
from mcp_scout.tools.details import get_server_details
from mcp_scout.tools.health import check_registry
from mcp_scout.tools.profiles import (
    add_tool_to_profile,
    list_profiles,
    remove_tool_from_profile,
    set_active_profile,
)
from mcp_scout.tools.search import search_tools


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations.

    The toolbox is the caller-owned session: loaded once here and saved
    by the profile tools after each change.
    """

    http_client: httpx.AsyncClient
    settings: Settings
    catalog: CatalogStorePort
    registry: UpstreamRegistryPort
    aggregator: RegistryAggregator
    toolbox: Toolbox


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle as the composition root."""
    settings = Settings.from_env()
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.source_timeout, connect=5.0),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        catalog = CatalogClient(
            http_client,
            base_url=settings.catalog_url,
            api_key=settings.catalog_key,
        )
        registry = UpstreamRegistryClient(http_client, proxy_url=settings.proxy_url)
        probe = HealthProbe(registry)
        aggregator = RegistryAggregator(
            sources=[CatalogSource(catalog), UpstreamSource(registry, probe)],
            probe=probe,
            source_timeout=settings.source_timeout,
        )
        await aggregator.start()

        yield AppContext(
            http_client=http_client,
            settings=settings,
            catalog=catalog,
            registry=registry,
            aggregator=aggregator,
            toolbox=load_toolbox(settings.toolbox_path),
        )


mcp = FastMCP(
    "mcp-scout",
    instructions=(
        "mcp-scout searches MCP tool catalogs and keeps the user's toolbox profiles.\n\n"
        "## Tools\n"
        "- **search_tools**: Search the Catalog Store and the official MCP Registry "
        "in one call. Results are ranked by match_score (0-1). Each result has a "
        "source ('Catalog' or 'Official MCP'). Official MCP results report "
        "downloads and stars as 'N/A' because the registry does not publish them.\n"
        "- **check_registry**: Re-check the official registry. When it is offline, "
        "searches return catalog results only; call this before retrying.\n"
        "- **list_categories**: Categories available in the Catalog Store.\n"
        "- **get_server_details**: Full registry entry (release date, latest flag, "
        "packages) for an Official MCP result.\n"
        "- **list_profiles** / **set_active_profile**: Inspect and switch profiles.\n"
        "- **add_tool_to_profile** / **remove_tool_from_profile**: Connect a tool "
        "from the latest search results to a profile, or disconnect it.\n\n"
        "If a search reports errors for a source, tell the user that source is "
        "unavailable instead of claiming nothing matched."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(search_tools)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(check_registry)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(list_categories)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_server_details)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(list_profiles)

# ─── Profile-modifying tools ──────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(set_active_profile)
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(add_tool_to_profile)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(remove_tool_from_profile)
