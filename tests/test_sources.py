"""Tests for the source adapters (sources/)."""

from __future__ import annotations

from unittest.mock import AsyncMock

from mcp_scout.errors import ConfigurationError, NetworkError, ParseError, UpstreamError
from mcp_scout.models import (
    UNKNOWN_COUNT,
    CatalogRecord,
    HealthStatus,
    ServerListing,
    SourceErrorKind,
    ToolSource,
    UpstreamPackage,
    UpstreamRepository,
    UpstreamServer,
)
from mcp_scout.registry.health import HealthProbe
from mcp_scout.sources.base import error_kind, unique_by_id
from mcp_scout.sources.catalog import CatalogSource, record_to_tool
from mcp_scout.sources.upstream import UpstreamSource, server_to_tool

# ── Helpers ───────────────────────────────────────────────────────


def _record(record_id: str = "1", name: str = "Postgres Explorer") -> CatalogRecord:
    return CatalogRecord(
        id=record_id,
        name=name,
        slug="postgres-explorer",
        description="Browse PostgreSQL schemas",
        category="Database",
        version="2.1.0",
        downloads=1200,
        stars=88,
        tags=["postgres", "sql"],
    )


def _server(
    server_id: str = "filesystem-mcp",
    name: str = "filesystem-mcp",
    description: str = "Read and write files...",
    packages: list[UpstreamPackage] | None = None,
) -> UpstreamServer:
    return UpstreamServer(
        id=server_id,
        name=name,
        description=description,
        repository=UpstreamRepository(url="https://github.com/modelcontextprotocol/servers"),
        version="1.0.0",
        packages=packages if packages is not None else [],
    )


def _catalog_source(result: list[CatalogRecord] | Exception) -> CatalogSource:
    store = AsyncMock()
    if isinstance(result, Exception):
        store.search = AsyncMock(side_effect=result)
    else:
        store.search = AsyncMock(return_value=result)
    return CatalogSource(store=store)


def _upstream_source(
    pages: list[ServerListing] | Exception,
    status: HealthStatus | None = None,
) -> UpstreamSource:
    registry = AsyncMock()
    registry.list_servers = AsyncMock(side_effect=pages)
    probe = None
    if status is not None:
        probe = HealthProbe(registry=registry)
        probe.status = status
    return UpstreamSource(registry=registry, probe=probe)


# ═══════════════════════════════════════════════════════════════════
# CatalogSource
# ═══════════════════════════════════════════════════════════════════


class TestCatalogSource:
    async def test_queries_store_with_page_size_ten(self):
        source = _catalog_source([])

        await source.search("postgres")

        source.store.search.assert_awaited_once_with("postgres", limit=10)

    async def test_normalizes_rows(self):
        source = _catalog_source([_record()])

        outcome = await source.search("postgres")

        assert outcome.error is None
        assert outcome.attempted is True
        tool = outcome.tools[0]
        assert tool.id == "Catalog:1"
        assert tool.source is ToolSource.CATALOG
        assert tool.keywords == frozenset({"postgres", "sql"})
        assert tool.downloads == 1200
        assert tool.package_name == "postgres-explorer"

    async def test_drops_duplicate_ids(self):
        source = _catalog_source([_record("1"), _record("1", name="dup"), _record("2")])

        outcome = await source.search("postgres")

        assert [t.native_id for t in outcome.tools] == ["1", "2"]
        assert outcome.tools[0].name == "Postgres Explorer"

    async def test_store_error_fails_open(self):
        source = _catalog_source(NetworkError("refused"))

        outcome = await source.search("postgres")

        assert outcome.tools == ()
        assert outcome.attempted is True
        assert outcome.error is not None
        assert outcome.error.kind is SourceErrorKind.NETWORK
        assert outcome.error.source == "Catalog"

    async def test_missing_configuration_is_reported(self):
        source = _catalog_source(ConfigurationError("not configured"))

        outcome = await source.search("x")

        assert outcome.error.kind is SourceErrorKind.CONFIGURATION

    def test_record_without_tags_has_empty_keywords(self):
        tool = record_to_tool(CatalogRecord(id="9", name="bare"))
        assert tool.keywords == frozenset()
        assert tool.downloads == 0
        assert tool.package_name == "bare"

    def test_carries_featured_and_verified_badges(self):
        tool = record_to_tool(
            CatalogRecord(id="9", name="bare", is_featured=True, is_verified=True)
        )
        assert tool.is_featured is True
        assert tool.is_verified is True


# ═══════════════════════════════════════════════════════════════════
# UpstreamSource
# ═══════════════════════════════════════════════════════════════════


class TestUpstreamSource:
    async def test_filters_on_name_and_description(self):
        servers = [
            _server("a", name="filesystem-mcp", description="files"),
            _server("b", name="notes", description="A filesystem-backed notebook"),
            _server("c", name="slack", description="chat"),
        ]
        source = _upstream_source([ServerListing(servers=servers)])

        outcome = await source.search("FileSystem")

        assert [t.native_id for t in outcome.tools] == ["a", "b"]

    async def test_offline_short_circuits_without_network(self):
        source = _upstream_source([], status=HealthStatus.OFFLINE)

        outcome = await source.search("filesystem")

        assert outcome.tools == ()
        assert outcome.attempted is False
        assert outcome.error.kind is SourceErrorKind.OFFLINE
        assert outcome.error.message == "Registry: offline"
        source.registry.list_servers.assert_not_called()

    async def test_checking_status_still_attempts(self):
        source = _upstream_source(
            [ServerListing(servers=[_server()])],
            status=HealthStatus.CHECKING,
        )

        outcome = await source.search("filesystem")

        assert len(outcome.tools) == 1

    async def test_follows_cursor_up_to_max_pages(self):
        pages = [
            ServerListing(servers=[_server("1", name="git-1")], next_cursor="c1"),
            ServerListing(servers=[_server("2", name="git-2")], next_cursor="c2"),
            ServerListing(servers=[_server("3", name="git-3")], next_cursor="c3"),
        ]
        source = _upstream_source(pages)
        source.max_pages = 2

        outcome = await source.search("git")

        assert [t.native_id for t in outcome.tools] == ["1", "2"]
        assert source.registry.list_servers.await_count == 2
        second_call = source.registry.list_servers.await_args_list[1]
        assert second_call.kwargs["cursor"] == "c1"

    async def test_stops_when_no_cursor(self):
        source = _upstream_source([ServerListing(servers=[_server()])])

        await source.search("filesystem")

        source.registry.list_servers.assert_awaited_once()

    async def test_upstream_error_fails_open(self):
        source = _upstream_source(UpstreamError("500"))

        outcome = await source.search("x")

        assert outcome.tools == ()
        assert outcome.error.kind is SourceErrorKind.UPSTREAM

    async def test_parse_error_fails_open(self):
        source = _upstream_source(ParseError("bad"))

        outcome = await source.search("x")

        assert outcome.error.kind is SourceErrorKind.PARSE


class TestServerToTool:
    def test_downloads_and_stars_are_unknown(self):
        tool = server_to_tool(_server())
        assert tool.downloads == UNKNOWN_COUNT
        assert tool.stars == UNKNOWN_COUNT

    def test_package_name_from_first_package(self):
        tool = server_to_tool(
            _server(
                packages=[
                    UpstreamPackage(registry_name="npm", name="@mcp/server-filesystem"),
                    UpstreamPackage(registry_name="pypi", name="mcp-filesystem"),
                ]
            )
        )
        assert tool.package_name == "@mcp/server-filesystem"
        assert tool.install_command == "npm install @mcp/server-filesystem"
        assert tool.keywords == frozenset({"@mcp/server-filesystem", "mcp-filesystem"})

    def test_package_name_falls_back_to_server_name(self):
        tool = server_to_tool(_server(name="filesystem-mcp", packages=[]))
        assert tool.package_name == "filesystem-mcp"
        assert tool.install_command is None
        assert tool.keywords == frozenset()

    def test_source_and_ids(self):
        tool = server_to_tool(_server())
        assert tool.source is ToolSource.UPSTREAM
        assert tool.id == "Official MCP:filesystem-mcp"
        assert tool.native_id == "filesystem-mcp"
        assert tool.repository_url == "https://github.com/modelcontextprotocol/servers"

    def test_unknown_registry_has_no_install_command(self):
        tool = server_to_tool(
            _server(packages=[UpstreamPackage(registry_name="nuget", name="Mcp.Server")])
        )
        assert tool.install_command is None


class TestSourceHelpers:
    def test_error_kind_mapping(self):
        assert error_kind(NetworkError("x")) is SourceErrorKind.NETWORK
        assert error_kind(UpstreamError("x")) is SourceErrorKind.UPSTREAM
        assert error_kind(ParseError("x")) is SourceErrorKind.PARSE
        assert error_kind(ConfigurationError("x")) is SourceErrorKind.CONFIGURATION
        assert error_kind(TimeoutError()) is SourceErrorKind.TIMEOUT
        assert error_kind(RuntimeError("x")) is SourceErrorKind.UPSTREAM

    def test_unique_by_id_keeps_first(self):
        first = record_to_tool(_record("1", name="first"))
        second = record_to_tool(_record("1", name="second"))
        assert unique_by_id([first, second]) == (first,)
