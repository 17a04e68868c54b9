"""get_server_details tool -- one server's full record from the MCP Registry."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from mcp_scout.errors import McpScoutError
from mcp_scout.models import ToolSource
from mcp_scout.tools._helpers import get_context

_UPSTREAM_PREFIX = f"{ToolSource.UPSTREAM.value}:"


async def get_server_details(server_id: str, ctx: Context) -> dict[str, object]:
    """Show the official MCP Registry entry for one server.

    Includes its release date, whether it is the latest version, and
    every published package.

    Args:
        server_id: Registry id, or a search result id such as
            "Official MCP:filesystem-mcp".

    Returns:
        Dict with success and the server record, or a message when the
        server is unknown or the registry is unavailable.
    """
    app = get_context(ctx)
    native_id = server_id.removeprefix(_UPSTREAM_PREFIX).strip()
    if not native_id:
        return {"success": False, "message": "A server id is required."}

    try:
        server = await app.registry.get_server(native_id)
    except McpScoutError as exc:
        return {"success": False, "message": str(exc)}

    if server is None:
        return {
            "success": False,
            "message": f"Server '{native_id}' is not listed in the official MCP Registry.",
        }
    return {"success": True, "server": server.to_dict()}
