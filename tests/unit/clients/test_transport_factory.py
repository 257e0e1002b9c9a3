"""Unit tests for affine_kb/clients/factory module."""

import httpx
import pytest

from affine_kb.clients.factory import create_transport
from affine_kb.clients.graphql import GraphQLTransport
from affine_kb.clients.jsonrpc import JsonRpcTransport, StreamingJsonRpcTransport
from affine_kb.core.config import Settings, TransportKind


class TestCreateTransport:
    """Tests for create_transport."""

    @pytest.mark.asyncio
    async def test_graphql(self, test_settings: Settings) -> None:
        transport = create_transport(test_settings)

        assert type(transport) is GraphQLTransport
        assert transport.endpoint == "https://affine.test/graphql"
        assert transport.timeout == 5
        await transport.close()

    @pytest.mark.asyncio
    async def test_jsonrpc(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(
            update={"transport": TransportKind.JSONRPC, "jsonrpc_envelope": False}
        )

        transport = create_transport(settings)

        assert type(transport) is JsonRpcTransport
        assert transport.endpoint == "https://affine.test/mcp"
        assert transport.envelope is False
        await transport.close()

    @pytest.mark.asyncio
    async def test_jsonrpc_stream(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"transport": TransportKind.JSONRPC_STREAM})

        transport = create_transport(settings)

        assert type(transport) is StreamingJsonRpcTransport
        assert transport.envelope is True
        await transport.close()

    @pytest.mark.asyncio
    async def test_shared_client_carries_credential(self, test_settings: Settings) -> None:
        transport = create_transport(test_settings)

        client = await transport._get_client()

        assert isinstance(client, httpx.AsyncClient)
        assert client.headers["Authorization"] == "Bearer test-key"
        assert client.timeout.read == 5
        await transport.close()
