"""search_tools tool -- query every tool catalog at once."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from mcp_scout.query import extract_search_query
from mcp_scout.tools._helpers import get_context


async def search_tools(query: str, ctx: Context) -> dict[str, object]:
    """Search the Catalog Store and the official MCP Registry for tools.

    Accepts a bare term ("filesystem") or a chat command
    ("/search filesystem", "please search servers filesystem").
    Results from both catalogs are scored against the query and merged
    into a single ranked list of at most 20 tools.

    Args:
        query: Search term or chat command.

    Returns:
        Dict with results (each with id, name, description, source,
        match_score, downloads, stars, ...), total_count, sources, the
        echoed query, errors (one entry per source that failed), and
        registry_status ("online", "offline", or "checking").
    """
    app = get_context(ctx)
    term = extract_search_query(query)

    response = await app.aggregator.search(term)
    for error in response.errors:
        await ctx.info(f"{error.source}: {error.message}")

    result = response.to_dict()
    status = app.aggregator.health_status
    result["registry_status"] = status.value if status is not None else None
    return result
