"""list_categories tool -- categories available in the Catalog Store."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from mcp_scout.errors import McpScoutError
from mcp_scout.tools._helpers import get_context


async def list_categories(ctx: Context) -> dict[str, object]:
    """List the categories of published tools in the Catalog Store.

    Returns:
        Dict with success and a sorted list of category names, or an
        error message when the Catalog Store is unavailable.
    """
    app = get_context(ctx)
    try:
        categories = await app.catalog.list_categories()
    except McpScoutError as exc:
        return {"success": False, "categories": [], "error": str(exc)}
    return {"success": True, "categories": categories}
