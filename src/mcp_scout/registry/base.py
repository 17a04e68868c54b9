"""Port: Upstream Registry client."""

from __future__ import annotations

from typing import Protocol

from mcp_scout.models import ServerListing, UpstreamServer


class UpstreamRegistryPort(Protocol):
    """Port for the public MCP server registry."""

    async def list_servers(
        self,
        *,
        limit: int = 100,
        cursor: str | None = None,
    ) -> ServerListing:
        """Fetch one page of the registry's server listing."""
        ...

    async def get_server(self, server_id: str) -> UpstreamServer | None:
        """Fetch a specific server entry by its registry id."""
        ...

    async def health(self) -> dict:
        """Fetch the registry's health payload."""
        ...
