"""Toolbox profiles: named sets of connected tools, owned by the caller.

A ``Toolbox`` is an ordinary object passed to whoever needs it. It is
only read from and written to disk by ``load_toolbox`` and
``save_toolbox``; nothing here keeps module-level state.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path

from mcp_scout.errors import ProfileError
from mcp_scout.models import Tool, ToolboxProfile, ToolSource

logger = logging.getLogger(__name__)

_TOOLBOX_VERSION = 1


def default_profiles() -> list[ToolboxProfile]:
    return [
        ToolboxProfile(id="personal", name="Personal", color="bg-blue-600", is_active=True),
        ToolboxProfile(id="work", name="Work", color="bg-green-600"),
        ToolboxProfile(id="project", name="Project-specific", color="bg-purple-600"),
    ]


@dataclass
class Toolbox:
    """The user's profiles and which one is active."""

    profiles: list[ToolboxProfile] = field(default_factory=default_profiles)

    def get(self, profile_id: str) -> ToolboxProfile:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        known = ", ".join(p.id for p in self.profiles)
        raise ProfileError(f"Unknown profile '{profile_id}'. Known profiles: {known}.")

    def active_profile(self) -> ToolboxProfile:
        """Return the active profile, or the first one if none is marked."""
        if not self.profiles:
            raise ProfileError("Toolbox has no profiles.")
        for profile in self.profiles:
            if profile.is_active:
                return profile
        return self.profiles[0]

    def set_active(self, profile_id: str) -> ToolboxProfile:
        """Make *profile_id* the only active profile."""
        self.get(profile_id)
        self.profiles = [replace(p, is_active=p.id == profile_id) for p in self.profiles]
        return self.get(profile_id)

    def add_tool(self, tool: Tool, profile_id: str | None = None) -> bool:
        """Add *tool* to a profile (the active one by default).

        Returns False when the profile already holds a tool with that id.
        The stored snapshot drops the query-specific ``match_score``.
        """
        target = self.get(profile_id) if profile_id else self.active_profile()
        if target.has_tool(tool.id):
            return False
        snapshot = replace(tool, match_score=0.0)
        self._replace(replace(target, tools=(*target.tools, snapshot)))
        return True

    def remove_tool(self, tool_id: str, profile_id: str | None = None) -> bool:
        """Remove a tool by id. Returns False when it was not in the profile."""
        target = self.get(profile_id) if profile_id else self.active_profile()
        if not target.has_tool(tool_id):
            return False
        remaining = tuple(t for t in target.tools if t.id != tool_id)
        self._replace(replace(target, tools=remaining))
        return True

    def _replace(self, updated: ToolboxProfile) -> None:
        self.profiles = [updated if p.id == updated.id else p for p in self.profiles]


# ─── Persistence ──────────────────────────────────────────────


def load_toolbox(path: Path | str) -> Toolbox:
    """Load a toolbox from *path*.

    A missing or empty file yields the default profiles. A corrupt or
    unreadable file is logged and also falls back to the defaults, so a
    bad save never locks the user out of the playground.
    """
    path = Path(path)
    if not path.exists():
        return Toolbox()
    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return Toolbox()
        return parse_toolbox(json.loads(text))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ProfileError) as exc:
        logger.warning("Failed to read saved profiles in %s: %s", path, exc)
        return Toolbox()


def parse_toolbox(data: object) -> Toolbox:
    """Parse a JSON document into a Toolbox.

    Raises:
        ProfileError: If the document does not describe any profiles.
    """
    if not isinstance(data, dict) or not isinstance(data.get("profiles"), list):
        raise ProfileError("Toolbox file has no 'profiles' list.")
    try:
        profiles = [_parse_profile(raw) for raw in data["profiles"]]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ProfileError(f"Malformed profile entry: {exc}") from exc
    if not profiles:
        raise ProfileError("Toolbox file has an empty 'profiles' list.")
    return Toolbox(profiles=profiles)


def _parse_profile(raw: dict) -> ToolboxProfile:
    return ToolboxProfile(
        id=str(raw["id"]),
        name=raw.get("name", raw["id"]),
        color=raw.get("color", ""),
        is_active=bool(raw.get("is_active", False)),
        tools=tuple(_parse_tool(t) for t in raw.get("tools", [])),
    )


def _parse_tool(raw: dict) -> Tool:
    return Tool(
        id=raw["id"],
        native_id=raw.get("native_id", raw["id"]),
        name=raw.get("name", ""),
        description=raw.get("description", ""),
        category=raw.get("category", ""),
        version=raw.get("version", ""),
        source=ToolSource(raw.get("source", ToolSource.CATALOG.value)),
        repository_url=raw.get("repository_url"),
        downloads=raw.get("downloads", 0),
        stars=raw.get("stars", 0),
        keywords=frozenset(raw.get("keywords", [])),
        package_name=raw.get("package_name", ""),
        install_command=raw.get("install_command"),
        is_featured=bool(raw.get("is_featured", False)),
        is_verified=bool(raw.get("is_verified", False)),
    )


def toolbox_to_dict(toolbox: Toolbox) -> dict:
    """Serialize a Toolbox. ``match_score`` is never written."""
    profiles = []
    for profile in toolbox.profiles:
        tools = []
        for tool in profile.tools:
            entry = tool.to_dict()
            entry.pop("match_score", None)
            tools.append(entry)
        profiles.append(
            {
                "id": profile.id,
                "name": profile.name,
                "color": profile.color,
                "is_active": profile.is_active,
                "tools": tools,
            }
        )
    return {"version": _TOOLBOX_VERSION, "profiles": profiles}


def save_toolbox(path: Path | str, toolbox: Toolbox) -> None:
    """Write the toolbox to disk atomically via tempfile + os.replace."""
    path = Path(path)
    fd = None
    tmp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp", prefix=".toolbox_")
        content = json.dumps(toolbox_to_dict(toolbox), indent=2, ensure_ascii=False) + "\n"
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        os.replace(tmp_path, str(path))
        tmp_path = None
    except OSError as exc:
        raise ProfileError(f"Failed to write toolbox {path}: {exc}") from exc
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
