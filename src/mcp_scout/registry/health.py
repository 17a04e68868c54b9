"""Reachability tracking for the Upstream Registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mcp_scout.errors import McpScoutError
from mcp_scout.models import HealthStatus
from mcp_scout.registry.base import UpstreamRegistryPort

logger = logging.getLogger(__name__)


@dataclass
class HealthProbe:
    """Tri-state health of the Upstream Registry.

    The status starts as ``checking`` and only changes when ``check()``
    runs. There is no automatic retry: an ``offline`` registry stays
    offline until the caller triggers another check.
    """

    registry: UpstreamRegistryPort
    status: HealthStatus = field(default=HealthStatus.CHECKING, init=False)
    last_error: str = field(default="", init=False)

    @property
    def is_offline(self) -> bool:
        return self.status is HealthStatus.OFFLINE

    async def check(self) -> HealthStatus:
        """Call the registry health endpoint and record the result.

        A non-2xx response, a network failure, an unreadable payload, or a
        status other than ``"ok"`` all resolve to ``offline``.
        """
        self.status = HealthStatus.CHECKING
        try:
            payload = await self.registry.health()
        except McpScoutError as exc:
            logger.warning("MCP Registry health check failed: %s", exc)
            self.last_error = str(exc)
            self.status = HealthStatus.OFFLINE
            return self.status

        reported = payload.get("status") if isinstance(payload, dict) else None
        if reported == "ok":
            self.last_error = ""
            self.status = HealthStatus.ONLINE
        else:
            logger.warning("MCP Registry reported status %r", reported)
            self.last_error = f"Registry reported status {reported!r}"
            self.status = HealthStatus.OFFLINE
        return self.status
