"""Shared constants for the Affine knowledge-base adapter.

Centralizes wire-level literals (headers, content types, JSON-RPC framing)
and argument bounds so transports, dialects and tests agree on them.
"""

# =============================================================================
# HTTP
# =============================================================================

DEFAULT_TIMEOUT: float = 30.0

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_EVENT_STREAM = "text/event-stream"
ACCEPT_JSON_OR_STREAM = f"{CONTENT_TYPE_JSON}, {CONTENT_TYPE_EVENT_STREAM}"

SSE_DATA_PREFIX = "data: "


# =============================================================================
# JSON-RPC
# =============================================================================

JSONRPC_VERSION = "2.0"
JSONRPC_REQUEST_ID = 1
MCP_METHOD_TOOLS_CALL = "tools/call"


# =============================================================================
# Argument bounds
# =============================================================================

DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 50


# =============================================================================
# Tool identity
# =============================================================================

TOOL_NAME = "affine"
