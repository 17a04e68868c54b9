"""Domain models for mcp-scout. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# Placeholder for counts a source cannot report (e.g. upstream downloads).
UNKNOWN_COUNT = "N/A"

# ─── Enumerations ─────────────────────────────────────────────


class ToolSource(StrEnum):
    CATALOG = "Catalog"
    UPSTREAM = "Official MCP"


class HealthStatus(StrEnum):
    ONLINE = "online"
    OFFLINE = "offline"
    CHECKING = "checking"


class SourceErrorKind(StrEnum):
    NETWORK = "network"
    UPSTREAM = "upstream"
    PARSE = "parse"
    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"
    OFFLINE = "offline"


# ─── Normalized Tool ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Tool:
    """A tool record normalized from any source.

    ``id`` is qualified with the source label, so two sources may hold
    records with the same native id without colliding.  ``match_score``
    is only meaningful for the query that produced it.
    """

    id: str
    native_id: str
    name: str
    description: str
    category: str
    version: str
    source: ToolSource
    repository_url: str | None = None
    downloads: int | str = 0
    stars: int | str = 0
    keywords: frozenset[str] = field(default_factory=frozenset)
    package_name: str = ""
    install_command: str | None = None
    is_featured: bool = False
    is_verified: bool = False
    match_score: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "native_id": self.native_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "version": self.version,
            "source": self.source.value,
            "repository_url": self.repository_url,
            "downloads": self.downloads,
            "stars": self.stars,
            "keywords": sorted(self.keywords),
            "package_name": self.package_name,
            "install_command": self.install_command,
            "is_featured": self.is_featured,
            "is_verified": self.is_verified,
            "match_score": self.match_score,
        }


def qualified_id(source: ToolSource, native_id: str) -> str:
    """Build a source-scoped tool id like ``Official MCP:filesystem-mcp``."""
    return f"{source.value}:{native_id}"


# ─── Catalog Store Models ─────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """A published tool row from the Catalog Store."""

    id: str
    name: str
    slug: str = ""
    description: str = ""
    category: str = ""
    version: str = ""
    repository_url: str | None = None
    downloads: int = 0
    stars: int = 0
    tags: list[str] = field(default_factory=list)
    install_command: str | None = None
    is_featured: bool = False
    is_verified: bool = False


# ─── Upstream Registry Models ─────────────────────────────────


@dataclass(frozen=True, slots=True)
class UpstreamRepository:
    url: str = ""
    source: str = ""
    id: str = ""


@dataclass(frozen=True, slots=True)
class UpstreamPackage:
    """One distributable package of an upstream server."""

    registry_name: str
    name: str
    version: str = ""


@dataclass(frozen=True, slots=True)
class UpstreamServer:
    """An MCP server as listed by the Upstream Registry."""

    id: str
    name: str
    description: str = ""
    repository: UpstreamRepository = field(default_factory=UpstreamRepository)
    version: str = ""
    release_date: str = ""
    is_latest: bool = False
    packages: list[UpstreamPackage] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "repository_url": self.repository.url or None,
            "version": self.version,
            "release_date": self.release_date,
            "is_latest": self.is_latest,
            "packages": [
                {"registry_name": p.registry_name, "name": p.name, "version": p.version}
                for p in self.packages
            ],
        }


@dataclass(frozen=True, slots=True)
class ServerListing:
    """One page of the Upstream Registry server listing."""

    servers: list[UpstreamServer]
    count: int = 0
    next_cursor: str | None = None


# ─── Search Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SourceError:
    """Why a source contributed nothing to a search."""

    source: str
    kind: SourceErrorKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "kind": self.kind.value, "message": self.message}


@dataclass(frozen=True, slots=True)
class SourceOutcome:
    """What one source produced for one query.

    ``attempted`` is False when the source was skipped without a
    network call (e.g. the upstream registry is known to be offline).
    """

    source: str
    tools: tuple[Tool, ...] = ()
    error: SourceError | None = None
    attempted: bool = True


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Merged, ranked results for a single query."""

    results: list[Tool]
    total_count: int
    sources: list[str]
    query: str
    errors: list[SourceError] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "results": [tool.to_dict() for tool in self.results],
            "total_count": self.total_count,
            "sources": list(self.sources),
            "query": self.query,
            "errors": [error.to_dict() for error in self.errors],
        }


# ─── Toolbox Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ToolboxProfile:
    """A named set of tools the user connected in the playground."""

    id: str
    name: str
    color: str = ""
    is_active: bool = False
    tools: tuple[Tool, ...] = ()

    def has_tool(self, tool_id: str) -> bool:
        return any(tool.id == tool_id for tool in self.tools)
