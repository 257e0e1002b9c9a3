"""JSON-RPC transports for the Affine MCP endpoint.

Two strategies share the same request framing:

- JsonRpcTransport: the reply is a single JSON document {result, error?}.
- StreamingJsonRpcTransport: additionally advertises text/event-stream; when
  the server answers with an SSE stream, the last ``data: `` line carries
  the JSON-RPC reply. Earlier events are progress notifications and are
  discarded.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

from affine_kb.clients.base import BaseHTTPTransport, decode_json_object
from affine_kb.core.constants import (
    ACCEPT_JSON_OR_STREAM,
    CONTENT_TYPE_EVENT_STREAM,
    DEFAULT_TIMEOUT,
    JSONRPC_REQUEST_ID,
    JSONRPC_VERSION,
    SSE_DATA_PREFIX,
)
from affine_kb.core.exceptions import ApplicationError, TransportError
from affine_kb.core.logging import get_logger


logger = get_logger(__name__)


def build_rpc_body(method: str, params: dict[str, Any], envelope: bool = True) -> dict[str, Any]:
    """Frame a call as a JSON-RPC 2.0 envelope, or as bare {method, params}."""
    if not envelope:
        return {"method": method, "params": params}
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": JSONRPC_REQUEST_ID,
        "method": method,
        "params": params,
    }


def unwrap_rpc_reply(envelope: dict[str, Any]) -> Any:
    """Return ``result`` from a reply, raising on an ``error`` member.

    Raises:
        ApplicationError: The reply carried an ``error`` object.
    """
    error = envelope.get("error")
    if error is not None:
        if isinstance(error, dict):
            code = error.get("code")
            message = error.get("message", "")
        else:
            code, message = None, str(error)
        logger.warning("JSON-RPC error", code=code, error=message)
        raise ApplicationError(f"MCP error {code}: {message}", code=code)
    return envelope.get("result")


def last_sse_data(lines: Iterable[str]) -> str | None:
    """Forward-scan SSE lines keeping only the most recent ``data: `` payload.

    Returns:
        The payload of the last data line, or None if the stream had none.
    """
    last: str | None = None
    for line in lines:
        if line.startswith(SSE_DATA_PREFIX):
            last = line[len(SSE_DATA_PREFIX):]
    return last


class JsonRpcTransport(BaseHTTPTransport):
    """Call transport answered by one JSON document.

    Attributes:
        envelope: Whether calls are wrapped in a JSON-RPC 2.0 envelope
    """

    transport_name = "jsonrpc"

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
        envelope: bool = True,
    ) -> None:
        super().__init__(endpoint, api_key=api_key, timeout=timeout, http_client=http_client)
        self.envelope = envelope

    async def execute(self, operation: str, params: dict[str, Any]) -> Any:
        """Call ``operation`` with ``params``.

        Args:
            operation: JSON-RPC method, e.g. ``tools/call``
            params: Method params

        Returns:
            The ``result`` member of the reply.

        Raises:
            TransportError: Network failure, non-2xx status or undecodable body
            ApplicationError: The reply carried an ``error`` member
        """
        response = await self._post(build_rpc_body(operation, params, self.envelope))
        return unwrap_rpc_reply(decode_json_object(response.text))


class StreamingJsonRpcTransport(JsonRpcTransport):
    """Call transport whose reply may arrive as a server-sent-event stream.

    The stream is treated as one finite response: no reconnection, no
    event ids, no retry hints.
    """

    transport_name = "jsonrpc_stream"

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["Accept"] = ACCEPT_JSON_OR_STREAM
        return headers

    async def execute(self, operation: str, params: dict[str, Any]) -> Any:
        """Call ``operation`` and decode a JSON or SSE reply.

        Raises:
            TransportError: Network failure, non-2xx status, undecodable body
                or an event stream without any data line
            ApplicationError: The reply carried an ``error`` member
        """
        client = await self._get_client()
        body = build_rpc_body(operation, params, self.envelope)
        logger.debug("Posting request", transport=self.transport_name, endpoint=self.endpoint)

        try:
            async with client.stream(
                "POST", self.endpoint, json=body, headers=self._headers()
            ) as response:
                if not response.is_success:
                    await response.aread()
                    self._raise_for_status(response)

                content_type = response.headers.get("content-type", "")
                if CONTENT_TYPE_EVENT_STREAM in content_type:
                    lines = [line async for line in response.aiter_lines()]
                    return unwrap_rpc_reply(_decode_event_stream(lines))

                await response.aread()
                text = response.text
        except httpx.HTTPError as e:
            raise self._wrap_http_error(e) from e

        return unwrap_rpc_reply(decode_json_object(text))


def _decode_event_stream(lines: list[str]) -> dict[str, Any]:
    payload = last_sse_data(lines)
    if payload is None:
        raise TransportError("no data in SSE stream")
    try:
        return decode_json_object(payload)
    except TransportError as e:
        raise TransportError(f"decode SSE data: {e.message}", cause=e.cause) from e
