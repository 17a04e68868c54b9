"""Catalog Store adapter: the application's own published tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mcp_scout.catalog.base import CatalogStorePort
from mcp_scout.errors import McpScoutError
from mcp_scout.models import CatalogRecord, SourceOutcome, Tool, ToolSource, qualified_id
from mcp_scout.sources.base import failed_outcome, unique_by_id

logger = logging.getLogger(__name__)

_PAGE_SIZE = 10


@dataclass
class CatalogSource:
    """Searches the Catalog Store by name and normalizes its rows."""

    store: CatalogStorePort
    page_size: int = _PAGE_SIZE
    name: str = ToolSource.CATALOG.value

    async def search(self, query: str) -> SourceOutcome:
        try:
            records = await self.store.search(query, limit=self.page_size)
        except McpScoutError as exc:
            logger.warning("Catalog Store search failed: %s", exc)
            return failed_outcome(self.name, exc)

        tools = unique_by_id(record_to_tool(record) for record in records)
        return SourceOutcome(source=self.name, tools=tools)


def record_to_tool(record: CatalogRecord) -> Tool:
    """Normalize a Catalog Store row. Tags double as keywords."""
    return Tool(
        id=qualified_id(ToolSource.CATALOG, record.id),
        native_id=record.id,
        name=record.name,
        description=record.description,
        category=record.category,
        version=record.version,
        source=ToolSource.CATALOG,
        repository_url=record.repository_url,
        downloads=record.downloads,
        stars=record.stars,
        keywords=frozenset(record.tags),
        package_name=record.slug or record.name,
        install_command=record.install_command,
        is_featured=record.is_featured,
        is_verified=record.is_verified,
    )
