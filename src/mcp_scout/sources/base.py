"""Port: a searchable tool source, plus the shared failure handling for adapters."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from mcp_scout.errors import ConfigurationError, NetworkError, ParseError
from mcp_scout.models import SourceError, SourceErrorKind, SourceOutcome, Tool


class ToolSourcePort(Protocol):
    """Port for one catalog of tools.

    Implementations never raise: failures are reported through
    ``SourceOutcome.error`` with an empty tool list.
    """

    name: str

    async def search(self, query: str) -> SourceOutcome:
        """Return normalized tools matching *query*."""
        ...


def error_kind(exc: BaseException) -> SourceErrorKind:
    """Classify an adapter failure for reporting."""
    if isinstance(exc, TimeoutError):
        return SourceErrorKind.TIMEOUT
    if isinstance(exc, NetworkError):
        return SourceErrorKind.NETWORK
    if isinstance(exc, ParseError):
        return SourceErrorKind.PARSE
    if isinstance(exc, ConfigurationError):
        return SourceErrorKind.CONFIGURATION
    return SourceErrorKind.UPSTREAM


def failed_outcome(source: str, exc: BaseException) -> SourceOutcome:
    """Degrade a failed source to an empty result with a recorded error."""
    message = str(exc) or type(exc).__name__
    return SourceOutcome(
        source=source,
        error=SourceError(source=source, kind=error_kind(exc), message=message),
    )


def unique_by_id(tools: Iterable[Tool]) -> tuple[Tool, ...]:
    """Drop repeated ids within one source's list, keeping the first."""
    seen: set[str] = set()
    unique: list[Tool] = []
    for tool in tools:
        if tool.id in seen:
            continue
        seen.add(tool.id)
        unique.append(tool)
    return tuple(unique)
