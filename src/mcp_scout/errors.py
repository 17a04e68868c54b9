"""Exception hierarchy for mcp-scout.

All exceptions inherit from McpScoutError (single catch point).
Messages are written for LLM consumption -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class McpScoutError(Exception):
    """Base exception for all mcp-scout errors."""


class ConfigurationError(McpScoutError):
    """A tool source is missing required configuration."""


class SourceAccessError(McpScoutError):
    """A tool source could not produce results."""


class NetworkError(SourceAccessError):
    """Connection failure or timeout while talking to a tool source."""


class UpstreamError(SourceAccessError):
    """A tool source answered with a non-2xx status or an unusable body."""


class ParseError(SourceAccessError):
    """A tool source returned a payload that does not match its schema."""


class ProfileError(McpScoutError):
    """Error reading, writing, or updating a toolbox profile."""
