"""Shared test fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def filesystem_server_entry() -> dict:
    """An Upstream Registry server record in the snake_case listing schema."""
    return {
        "id": "filesystem-mcp",
        "name": "filesystem-mcp",
        "description": "Read and write files on the local filesystem",
        "repository": {
            "url": "https://github.com/modelcontextprotocol/servers",
            "source": "github",
            "id": "12345",
        },
        "version_detail": {
            "version": "1.0.0",
            "release_date": "2025-05-01T00:00:00Z",
            "is_latest": True,
        },
        "packages": [
            {
                "registry_name": "npm",
                "name": "@modelcontextprotocol/server-filesystem",
                "version": "1.0.0",
            }
        ],
    }
