"""Port: Catalog Store client."""

from __future__ import annotations

from typing import Protocol

from mcp_scout.models import CatalogRecord


class CatalogStorePort(Protocol):
    """Port for reading published tools from the Catalog Store."""

    async def search(self, text: str, *, limit: int = 10) -> list[CatalogRecord]:
        """Return published tools whose name contains *text* (case-insensitive)."""
        ...

    async def list_categories(self) -> list[str]:
        """Return the distinct categories of published tools, sorted."""
        ...
