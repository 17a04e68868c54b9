"""Toolbox profile tools -- list, switch, and fill the user's profiles."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from mcp_scout.errors import McpScoutError
from mcp_scout.models import ToolboxProfile
from mcp_scout.profiles import save_toolbox
from mcp_scout.tools._helpers import get_context


def _profile_summary(profile: ToolboxProfile) -> dict[str, object]:
    return {
        "id": profile.id,
        "name": profile.name,
        "color": profile.color,
        "is_active": profile.is_active,
        "tools": [{"id": t.id, "name": t.name, "source": t.source.value} for t in profile.tools],
    }


async def list_profiles(ctx: Context) -> dict[str, object]:
    """List toolbox profiles and the tools connected to each.

    Returns:
        Dict with the active profile id and every profile's tools.
    """
    app = get_context(ctx)
    return {
        "active_profile": app.toolbox.active_profile().id,
        "profiles": [_profile_summary(p) for p in app.toolbox.profiles],
    }


async def set_active_profile(profile_id: str, ctx: Context) -> dict[str, object]:
    """Switch the active toolbox profile.

    Args:
        profile_id: Profile to activate (e.g. "personal", "work", "project").
    """
    app = get_context(ctx)
    try:
        profile = app.toolbox.set_active(profile_id)
        save_toolbox(app.settings.toolbox_path, app.toolbox)
    except McpScoutError as exc:
        return {"success": False, "message": str(exc)}
    return {"success": True, "profile": _profile_summary(profile)}


async def add_tool_to_profile(
    tool_id: str,
    ctx: Context,
    profile_id: str = "",
) -> dict[str, object]:
    """Connect a tool from the latest search_tools results to a profile.

    Args:
        tool_id: The result's id, e.g. "Official MCP:filesystem-mcp".
        profile_id: Target profile. Defaults to the active profile.
    """
    app = get_context(ctx)
    tool = app.aggregator.find_result(tool_id)
    if tool is None:
        return {
            "success": False,
            "message": f"Tool '{tool_id}' is not in the latest search results. "
            "Run search_tools first and use one of the returned ids.",
        }

    try:
        added = app.toolbox.add_tool(tool, profile_id or None)
        target = app.toolbox.get(profile_id) if profile_id else app.toolbox.active_profile()
        if added:
            save_toolbox(app.settings.toolbox_path, app.toolbox)
    except McpScoutError as exc:
        return {"success": False, "message": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in add_tool_to_profile: {exc}")
        return {"success": False, "message": f"Internal error: {type(exc).__name__}"}

    message = (
        f"Added '{tool.name}' to profile '{target.name}'."
        if added
        else f"'{tool.name}' is already in profile '{target.name}'."
    )
    return {"success": True, "added": added, "message": message}


async def remove_tool_from_profile(
    tool_id: str,
    ctx: Context,
    profile_id: str = "",
) -> dict[str, object]:
    """Disconnect a tool from a profile.

    Args:
        tool_id: Id of the tool, as shown by list_profiles.
        profile_id: Profile to remove it from. Defaults to the active profile.
    """
    app = get_context(ctx)
    try:
        removed = app.toolbox.remove_tool(tool_id, profile_id or None)
        if removed:
            save_toolbox(app.settings.toolbox_path, app.toolbox)
    except McpScoutError as exc:
        return {"success": False, "message": str(exc)}

    if not removed:
        return {
            "success": False,
            "message": f"Tool '{tool_id}' is not in that profile. "
            "Use list_profiles to see connected tools.",
        }
    return {"success": True, "message": f"Removed '{tool_id}'."}
