"""RegistryAggregator -- concurrent search across every configured tool source."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mcp_scout.models import HealthStatus, SearchResponse, SourceError, SourceOutcome, Tool
from mcp_scout.registry.health import HealthProbe
from mcp_scout.scoring import rank_tools
from mcp_scout.sources.base import ToolSourcePort, failed_outcome

logger = logging.getLogger(__name__)

_MAX_RESULTS = 20
_DEFAULT_SOURCE_TIMEOUT_SECONDS = 10.0


@dataclass
class RegistryAggregator:
    """Fans a query out to all sources, then scores, merges, and ranks.

    Sources are queried concurrently and each one is isolated: a failure,
    exception, or timeout in one source leaves the others untouched and is
    reported in ``SearchResponse.errors``. ``search`` never raises.

    No cross-source deduplication is done: the same tool listed by two
    catalogs appears twice, once per source.

    Args:
        sources: Adapters to query, in tie-break order.
        probe: Upstream health probe, checked once by ``start()``.
        max_results: Cap on the merged result list.
        source_timeout: Seconds each source may take before it is dropped.
    """

    sources: Sequence[ToolSourcePort]
    probe: HealthProbe | None = None
    max_results: int = _MAX_RESULTS
    source_timeout: float = _DEFAULT_SOURCE_TIMEOUT_SECONDS
    last_response: SearchResponse | None = field(default=None, init=False, repr=False)

    async def start(self) -> HealthStatus | None:
        """Run the one health check this aggregator gets on startup."""
        if self.probe is None:
            return None
        return await self.probe.check()

    async def refresh_health(self) -> HealthStatus | None:
        """Re-run the health check on demand (e.g. a manual refresh)."""
        return await self.start()

    @property
    def health_status(self) -> HealthStatus | None:
        return self.probe.status if self.probe is not None else None

    async def search(self, query: str) -> SearchResponse:
        """Search all sources and return merged, ranked results.

        Args:
            query: Free-text search term. Blank queries return an empty
                response without touching any source.

        Returns:
            ``SearchResponse`` with at most ``max_results`` tools sorted by
            descending ``match_score``. ``query`` echoes the caller's input.
        """
        needle = query.strip()
        if not needle:
            return SearchResponse(results=[], total_count=0, sources=[], query=query)

        outcomes = await asyncio.gather(
            *(self._run_source(source, needle) for source in self.sources)
        )

        candidates: list[Tool] = []
        sources: list[str] = []
        errors: list[SourceError] = []
        for outcome in outcomes:
            if outcome.attempted or outcome.tools:
                sources.append(outcome.source)
            if outcome.error is not None:
                errors.append(outcome.error)
            candidates.extend(outcome.tools)

        ranked = rank_tools(candidates, needle)[: self.max_results]
        response = SearchResponse(
            results=ranked,
            total_count=len(ranked),
            sources=sources,
            query=query,
            errors=errors,
        )
        self.last_response = response
        return response

    def find_result(self, tool_id: str) -> Tool | None:
        """Look up a tool from the most recent search by its qualified id."""
        if self.last_response is None:
            return None
        for tool in self.last_response.results:
            if tool.id == tool_id:
                return tool
        return None

    async def _run_source(self, source: ToolSourcePort, query: str) -> SourceOutcome:
        """Run one source under the timeout, converting anything it raises."""
        try:
            return await asyncio.wait_for(source.search(query), timeout=self.source_timeout)
        except TimeoutError:
            logger.warning(
                "Source '%s' timed out after %ss for query '%s'",
                source.name,
                self.source_timeout,
                query,
            )
            return failed_outcome(
                source.name,
                TimeoutError(f"{source.name} did not respond within {self.source_timeout}s"),
            )
        except Exception as exc:
            logger.warning("Source '%s' failed unexpectedly: %s", source.name, exc)
            return failed_outcome(source.name, exc)
