"""HTTP client for the Catalog Store (Supabase / PostgREST).

Reads the ``mcp_tools`` table through the PostgREST endpoint at
``{base_url}/rest/v1``. Only published rows are ever returned.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from mcp_scout.errors import ConfigurationError, NetworkError, ParseError, UpstreamError
from mcp_scout.models import CatalogRecord

_TABLE_PATH = "/rest/v1/mcp_tools"


@dataclass
class CatalogClient:
    """Async client for the Catalog Store's tool table."""

    http: httpx.AsyncClient
    base_url: str = ""
    api_key: str = ""

    async def search(self, text: str, *, limit: int = 10) -> list[CatalogRecord]:
        """Search published tools by name.

        The store only matches on ``name`` (``ilike``); richer matching is
        left to the caller's scoring.

        Args:
            text: Substring to look for in the tool name.
            limit: Max rows to return.

        Raises:
            ConfigurationError: If the store URL or key is not configured.
            NetworkError: On connection failure or timeout.
            UpstreamError: On a non-2xx response.
            ParseError: If the body is not a list of rows.
        """
        params = {
            "select": "*",
            "is_published": "eq.true",
            "name": f"ilike.*{text}*",
            "order": "created_at.desc",
            "limit": str(max(limit, 1)),
        }
        rows = await self._get(params)
        try:
            return [self._parse_row(row) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Catalog Store returned a malformed tool row: {exc}") from exc

    async def list_categories(self) -> list[str]:
        """Return the distinct, sorted categories of published tools."""
        rows = await self._get({"select": "category", "is_published": "eq.true"})
        return sorted({row.get("category") or "" for row in rows if isinstance(row, dict)} - {""})

    # ── HTTP helpers ──────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _get(self, params: dict[str, str]) -> list[dict]:
        if not self.base_url or not self.api_key:
            raise ConfigurationError(
                "Catalog Store is not configured. "
                "Set MCP_SCOUT_CATALOG_URL and MCP_SCOUT_CATALOG_KEY."
            )

        url = f"{self.base_url.rstrip('/')}{_TABLE_PATH}"
        try:
            response = await self.http.get(url, params=params, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Catalog Store error: {exc.response.status_code} {exc.response.reason_phrase}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Failed to reach Catalog Store: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError(f"Catalog Store returned invalid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise ParseError("Catalog Store returned an unexpected payload (expected a list).")
        return data

    # ── Parsing ───────────────────────────────────────────────

    @staticmethod
    def _parse_row(row: dict) -> CatalogRecord:
        """Map a ``mcp_tools`` row to a ``CatalogRecord``.

        Nullable columns come back as ``None``; those are replaced by
        defaults so consumers never see missing values.  A column holding
        the wrong type raises ``ParseError``.
        """
        return CatalogRecord(
            id=str(row["id"]),
            name=_text(row, "name"),
            slug=_text(row, "slug"),
            description=_text(row, "description"),
            category=_text(row, "category"),
            version=_text(row, "version"),
            repository_url=_text(row, "repository_url") or None,
            downloads=int(row.get("downloads") or 0),
            stars=int(row.get("stars") or 0),
            tags=_tags(row),
            install_command=_text(row, "install_command") or None,
            is_featured=bool(row.get("is_featured", False)),
            is_verified=bool(row.get("is_verified", False)),
        )


def _text(row: dict, column: str) -> str:
    value = row.get(column)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(
            f"Catalog Store column '{column}' should be text, got {type(value).__name__}."
        )
    return value


def _tags(row: dict) -> list[str]:
    value = row.get("tags")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ParseError("Catalog Store column 'tags' should be a list of strings.")
    return list(value)
