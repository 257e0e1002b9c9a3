"""Test configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Iterator

import pytest

from affine_kb.core.config import Settings, TransportKind, get_settings


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep environment-dependent settings from leaking between tests."""
    for key in (
        "AFFINE_KB_TRANSPORT",
        "AFFINE_KB_API_KEY",
        "AFFINE_KB_WORKSPACE_ID",
        "AFFINE_KB_TIMEOUT_SECONDS",
        "AFFINE_KB_ENVIRONMENT",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with safe defaults and no .env lookup."""
    return Settings(
        _env_file=None,
        transport=TransportKind.GRAPHQL,
        api_url="https://affine.test/graphql",
        mcp_endpoint="https://affine.test/mcp",
        api_key="test-key",
        workspace_id="ws-default",
        timeout_seconds=5,
        log_level="DEBUG",
    )


# ============================================================================
# Payload Fixtures
# ============================================================================


@pytest.fixture
def search_payload() -> dict[str, Any]:
    """GraphQL SearchPages data with two hits."""
    return {
        "workspace": {
            "search": [
                {
                    "id": "p1",
                    "title": "Roadmap",
                    "snippet": "Q3 goals and milestones",
                    "tags": ["planning", "2024"],
                    "updatedAt": "2024-05-01T10:00:00Z",
                },
                {
                    "id": "p2",
                    "title": "Retro notes",
                    "snippet": None,
                    "tags": [],
                    "updatedAt": "2024-05-02T10:00:00Z",
                },
            ]
        }
    }


@pytest.fixture
def content_wrapper_payload() -> dict[str, Any]:
    """MCP tools/call result whose text entries hold JSON-encoded records."""
    return {
        "content": [
            {"type": "text", "text": '[{"docId": "d1", "title": "Alpha"}]'},
            {"type": "text", "text": "not json at all"},
            {"type": "text", "text": '{"docId": "d2", "title": "Beta", "tags": ["x"]}'},
        ]
    }
