"""Same-origin passthrough to the public MCP Registry.

Browsers cannot call the registry directly (no CORS), so requests go
through this proxy. The custom ``endpoint`` query parameter selects the
upstream route and is stripped before forwarding; every other parameter
is passed through untouched.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

import httpx

logger = logging.getLogger(__name__)

REGISTRY_BASE_URL = "https://registry.modelcontextprotocol.io/v0"
USER_AGENT = "MCP-Registry-Proxy/1.0"

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def resolve_upstream_url(params: Mapping[str, str]) -> tuple[str, dict[str, str]]:
    """Map proxy query parameters to an upstream URL and forwarded params.

    ``endpoint=health`` targets ``/health`` (no params forwarded),
    ``endpoint=servers/<id>`` targets that server, and anything else
    (including no endpoint) targets the ``/servers`` listing.
    """
    forwarded = dict(params)
    endpoint = forwarded.pop("endpoint", "") or "servers"

    if endpoint == "health":
        return f"{REGISTRY_BASE_URL}/health", {}
    if endpoint.startswith("servers/"):
        return f"{REGISTRY_BASE_URL}/{endpoint}", forwarded
    return f"{REGISTRY_BASE_URL}/servers", forwarded


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class ProxyResponse:
    """What the proxy sends back to the browser."""

    status_code: int
    body: object
    headers: dict[str, str] = field(default_factory=dict)

    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


def _json_headers() -> dict[str, str]:
    return {**CORS_HEADERS, "Content-Type": "application/json"}


def _error_response(message: str) -> ProxyResponse:
    logger.error("Proxy error: %s", message)
    return ProxyResponse(
        status_code=500,
        body={"error": message, "timestamp": _now_iso()},
        headers=_json_headers(),
    )


@dataclass
class RegistryProxy:
    """Forwards registry requests and adds permissive CORS headers."""

    http: httpx.AsyncClient

    async def handle(self, method: str, params: Mapping[str, str]) -> ProxyResponse:
        """Proxy a single request.

        Returns:
            ``"ok"`` for CORS preflight, the upstream JSON on success, or
            HTTP 500 with ``{"error", "timestamp"}`` on any upstream failure.
        """
        if method.upper() == "OPTIONS":
            return ProxyResponse(status_code=200, body="ok", headers=dict(CORS_HEADERS))

        url, forwarded = resolve_upstream_url(params)
        logger.info("Proxying request to: %s", url)

        try:
            response = await self.http.request(
                method.upper(),
                url,
                params=forwarded or None,
                headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
            )
        except httpx.HTTPError as exc:
            return _error_response(f"Failed to reach registry: {exc}")

        if response.is_error:
            logger.error("Registry API error: %s %s", response.status_code, response.reason_phrase)
            return _error_response(f"Registry API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            return _error_response(f"Registry returned invalid JSON: {exc}")

        if isinstance(data, dict) and isinstance(data.get("servers"), list):
            logger.info("Registry response received, servers count: %d", len(data["servers"]))
        return ProxyResponse(status_code=200, body=data, headers=_json_headers())
