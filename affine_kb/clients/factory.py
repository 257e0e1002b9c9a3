"""Transport selection from configuration.

A deployment speaks exactly one wire protocol; which one is decided here,
once, from Settings.transport - never by inspecting response data.
"""

from __future__ import annotations

from affine_kb.clients.graphql import GraphQLTransport
from affine_kb.clients.jsonrpc import JsonRpcTransport, StreamingJsonRpcTransport
from affine_kb.clients.protocols import TransportProtocol
from affine_kb.core.config import Settings, TransportKind
from affine_kb.core.http import HTTPClientFactory
from affine_kb.core.logging import get_logger


logger = get_logger(__name__)


def create_transport(settings: Settings) -> TransportProtocol:
    """Build the transport configured by ``settings``.

    Args:
        settings: Application settings

    Returns:
        GraphQLTransport, JsonRpcTransport or StreamingJsonRpcTransport
        sharing one pooled httpx client.
    """
    factory = HTTPClientFactory(settings)
    common = {
        "endpoint": settings.endpoint,
        "api_key": settings.api_key.get_secret_value(),
        "timeout": settings.timeout_seconds,
        "http_client": factory.create_client(),
    }

    logger.debug("Creating transport", transport=settings.transport.value, endpoint=settings.endpoint)

    if settings.transport is TransportKind.GRAPHQL:
        return GraphQLTransport(**common)
    if settings.transport is TransportKind.JSONRPC:
        return JsonRpcTransport(**common, envelope=settings.jsonrpc_envelope)
    return StreamingJsonRpcTransport(**common, envelope=settings.jsonrpc_envelope)
