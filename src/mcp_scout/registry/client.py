"""HTTP client for the public MCP Registry, reached through the registry proxy.

Proxy contract:
    GET {proxy_url}?limit=N                    -> server listing
    GET {proxy_url}?endpoint=servers/{id}      -> one server
    GET {proxy_url}?endpoint=health            -> {"status": "ok" | ...}

When no proxy URL is configured the client calls the registry directly,
using the same route mapping as the proxy.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote as urlquote

import httpx

from mcp_scout.errors import NetworkError, ParseError, UpstreamError
from mcp_scout.models import ServerListing, UpstreamPackage, UpstreamRepository, UpstreamServer
from mcp_scout.registry.proxy import USER_AGENT, resolve_upstream_url

# Namespace key used by the registry for official-status metadata.
_OFFICIAL_META_KEY = "io.modelcontextprotocol.registry/official"

_MAX_PAGE_SIZE = 100


@dataclass
class UpstreamRegistryClient:
    """Async client for the MCP Registry API."""

    http: httpx.AsyncClient
    proxy_url: str = ""

    async def list_servers(
        self,
        *,
        limit: int = _MAX_PAGE_SIZE,
        cursor: str | None = None,
    ) -> ServerListing:
        """Fetch one page of the server listing.

        The registry has no search endpoint; callers filter the listing.

        Args:
            limit: Page size (1-100).
            cursor: ``next_cursor`` from a previous page.

        Raises:
            NetworkError: On connection failure or timeout.
            UpstreamError: On a non-2xx response.
            ParseError: If the body is not a server listing.
        """
        params = {"limit": str(min(max(limit, 1), _MAX_PAGE_SIZE))}
        if cursor:
            params["cursor"] = cursor
        data = await self._get("servers", params)

        servers_raw = data.get("servers")
        if not isinstance(servers_raw, list):
            raise ParseError("Registry listing has no 'servers' array.")
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            metadata = {}

        servers = [self._parse_entry(entry) for entry in servers_raw]
        try:
            count = int(metadata.get("count", len(servers)))
        except (TypeError, ValueError):
            count = len(servers)
        return ServerListing(
            servers=servers,
            count=count,
            next_cursor=metadata.get("next_cursor") or metadata.get("nextCursor") or None,
        )

    async def get_server(self, server_id: str) -> UpstreamServer | None:
        """Fetch a single server by its registry id, or None if unknown."""
        encoded = urlquote(server_id, safe="")
        try:
            data = await self._get(f"servers/{encoded}", {})
        except UpstreamError as exc:
            cause = exc.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                return None
            raise
        return self._parse_entry(data)

    async def health(self) -> dict:
        """Return the registry's health payload."""
        return await self._get("health", {})

    # ── HTTP helpers ──────────────────────────────────────────

    def _route(self, endpoint: str, params: dict[str, str]) -> tuple[str, dict[str, str]]:
        if self.proxy_url:
            routed = dict(params)
            if endpoint != "servers":
                routed["endpoint"] = endpoint
            return self.proxy_url, routed
        return resolve_upstream_url({**params, "endpoint": endpoint})

    async def _get(self, endpoint: str, params: dict[str, str]) -> dict:
        url, routed = self._route(endpoint, params)
        try:
            response = await self.http.get(
                url,
                params=routed or None,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Registry API error for '{endpoint}': "
                f"{exc.response.status_code} {self._proxy_error(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Failed to reach MCP Registry at '{endpoint}': {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError(f"Registry returned invalid JSON for '{endpoint}': {exc}") from exc
        if not isinstance(data, dict):
            raise ParseError(f"Registry returned an unexpected payload for '{endpoint}'.")
        return data

    @staticmethod
    def _proxy_error(response: httpx.Response) -> str:
        """Prefer the proxy's ``{"error": ...}`` message over the bare reason phrase."""
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase

    # ── Parsing helpers ──────────────────────────────────────────

    def _parse_entry(self, entry: object) -> UpstreamServer:
        """Parse a listing entry in either wrapped or flat format.

        Wrapped entries look like ``{"server": {...}, "_meta": {...}}``;
        older listings put the server fields at the top level.
        """
        if not isinstance(entry, dict):
            raise ParseError(f"Registry server entry is not an object: {entry!r}")
        if isinstance(entry.get("server"), dict):
            return self._parse_server(entry["server"], entry.get("_meta") or {})
        return self._parse_server(entry, entry.get("_meta") or {})

    def _parse_server(self, raw: dict, meta: dict) -> UpstreamServer:
        """Parse raw server JSON into an UpstreamServer.

        Tolerant of missing fields -- uses defaults rather than crashing.
        A text field holding another type raises ParseError.
        """
        official = meta.get(_OFFICIAL_META_KEY, {}) if isinstance(meta, dict) else {}
        if not isinstance(official, dict):
            official = {}
        detail = raw.get("version_detail") or {}
        if not isinstance(detail, dict):
            detail = {}

        name = _text(raw.get("name"), "name")
        return UpstreamServer(
            id=str(raw.get("id") or official.get("serverId") or name),
            name=name,
            description=_text(raw.get("description"), "description"),
            repository=self._parse_repository(raw.get("repository")),
            version=_text(detail.get("version") or raw.get("version"), "version"),
            release_date=_text(
                detail.get("release_date") or official.get("publishedAt"), "release_date"
            ),
            is_latest=bool(detail.get("is_latest", official.get("isLatest", False))),
            packages=self._parse_packages(raw),
        )

    @staticmethod
    def _parse_repository(raw: object) -> UpstreamRepository:
        if not isinstance(raw, dict):
            return UpstreamRepository()
        return UpstreamRepository(
            url=_text(raw.get("url"), "repository.url"),
            source=_text(raw.get("source"), "repository.source"),
            id=str(raw.get("id", "") or ""),
        )

    @staticmethod
    def _parse_packages(raw: dict) -> list[UpstreamPackage]:
        """Parse ``packages`` in both the snake_case and camelCase schemas."""
        packages = []
        for pkg in raw.get("packages") or []:
            if not isinstance(pkg, dict):
                continue
            packages.append(
                UpstreamPackage(
                    registry_name=_text(
                        pkg.get("registry_name") or pkg.get("registryType"), "registry_name"
                    ),
                    name=_text(pkg.get("name") or pkg.get("identifier"), "package name"),
                    version=_text(pkg.get("version"), "package version"),
                )
            )
        return packages


def _text(value: object, field_name: str) -> str:
    """Return *value* as a string; missing values become ``""``."""
    if value is None or value == "":
        return ""
    if not isinstance(value, str):
        raise ParseError(
            f"Registry field '{field_name}' should be a string, got {type(value).__name__}."
        )
    return value
