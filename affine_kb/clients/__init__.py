"""Workspace-service transports.

GraphQL, JSON-RPC and streaming JSON-RPC clients behind one
``execute(operation, params)`` protocol.
"""

from affine_kb.clients.factory import create_transport
from affine_kb.clients.graphql import GraphQLTransport
from affine_kb.clients.jsonrpc import (
    JsonRpcTransport,
    StreamingJsonRpcTransport,
    last_sse_data,
)
from affine_kb.clients.protocols import TransportProtocol


__all__ = [
    "GraphQLTransport",
    "JsonRpcTransport",
    "StreamingJsonRpcTransport",
    "TransportProtocol",
    "create_transport",
    "last_sse_data",
]
