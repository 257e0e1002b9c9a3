"""Unit tests for affine_kb/clients/graphql module.

The transport runs against httpx.MockTransport; no network is touched.
"""

import json

import httpx
import pytest

from affine_kb.clients.graphql import GraphQLTransport
from affine_kb.clients.protocols import TransportProtocol
from affine_kb.core.exceptions import ApplicationError, TransportError


ENDPOINT = "https://affine.test/graphql"


def make_transport(handler) -> GraphQLTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GraphQLTransport(ENDPOINT, api_key="secret", timeout=5.0, http_client=client)


class TestGraphQLRequest:
    """Tests for request framing."""

    def test_implements_protocol(self) -> None:
        transport = GraphQLTransport(ENDPOINT)
        assert isinstance(transport, TransportProtocol)

    @pytest.mark.asyncio
    async def test_posts_query_and_variables(self) -> None:
        """Body is {query, variables}; bearer and JSON content type are sent."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"ok": True}})

        transport = make_transport(handler)
        data = await transport.execute("query Q { ok }", {"workspaceId": "ws1"})

        assert data == {"ok": True}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "query": "query Q { ok }",
            "variables": {"workspaceId": "ws1"},
        }
        await transport.close()

    @pytest.mark.asyncio
    async def test_omits_empty_variables(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"data": {"workspaces": []}})

        transport = make_transport(handler)
        await transport.execute("query { workspaces { id } }", {})

        assert "variables" not in bodies[0]


class TestGraphQLResponse:
    """Tests for response decoding and error mapping."""

    @pytest.mark.asyncio
    async def test_errors_list_becomes_application_error(self) -> None:
        """The first remote error message passes through verbatim."""
        transport = make_transport(
            lambda request: httpx.Response(
                200, json={"data": None, "errors": [{"message": "boom"}, {"message": "second"}]}
            )
        )

        with pytest.raises(ApplicationError) as exc_info:
            await transport.execute("query { x }", {})

        assert str(exc_info.value) == "graphql error: boom"

    @pytest.mark.asyncio
    async def test_empty_errors_list_is_success(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(200, json={"data": {"x": 1}, "errors": []})
        )

        assert await transport.execute("query { x }", {}) == {"x": 1}

    @pytest.mark.asyncio
    async def test_non_2xx_status_carries_body(self) -> None:
        transport = make_transport(lambda request: httpx.Response(502, text="bad gateway"))

        with pytest.raises(TransportError) as exc_info:
            await transport.execute("query { x }", {})

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "bad gateway"
        assert str(exc_info.value) == "HTTP 502: bad gateway"

    @pytest.mark.asyncio
    async def test_undecodable_body(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(TransportError, match="decode response"):
            await transport.execute("query { x }", {})

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportError) as exc_info:
            await transport.execute("query { x }", {})

        assert str(exc_info.value) == "request timed out after 5s"
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_connection_failure_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportError, match="execute request: connection refused"):
            await transport.execute("query { x }", {})


class TestGraphQLLifecycle:
    """Tests for client lifecycle."""

    @pytest.mark.asyncio
    async def test_close_releases_client(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json={"data": {}}))

        await transport.close()

        assert transport._client is None

    @pytest.mark.asyncio
    async def test_lazy_client_creation(self) -> None:
        transport = GraphQLTransport(ENDPOINT, timeout=7.0)
        assert transport._client is None

        client = await transport._get_client()

        assert isinstance(client, httpx.AsyncClient)
        assert await transport._get_client() is client
        await transport.close()
