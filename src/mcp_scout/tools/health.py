"""check_registry tool -- re-probe the official MCP Registry."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from mcp_scout.tools._helpers import get_context


async def check_registry(ctx: Context) -> dict[str, object]:
    """Check whether the official MCP Registry is reachable.

    The registry is probed once at startup. If it was offline, searches
    skip it until this tool is called and the registry answers again.

    Returns:
        Dict with status ("online" or "offline") and, when offline,
        the reason.
    """
    app = get_context(ctx)
    status = await app.aggregator.refresh_health()
    if status is None:
        return {"status": None, "error": "No registry health probe is configured."}

    result: dict[str, object] = {"status": status.value}
    probe = app.aggregator.probe
    if probe is not None and probe.last_error:
        result["error"] = probe.last_error
    return result
