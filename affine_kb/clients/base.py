"""Shared HTTP mechanics for the concrete transports.

Holds the pooled httpx client, the per-request headers, JSON decoding and
the mapping of httpx failures onto TransportError. Wire framing lives in
the subclasses.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from affine_kb.core.constants import DEFAULT_TIMEOUT
from affine_kb.core.exceptions import TransportError
from affine_kb.core.http import build_default_headers
from affine_kb.core.logging import get_logger


logger = get_logger(__name__)


def decode_json_object(text: str) -> dict[str, Any]:
    """Decode a response envelope, which must be a JSON object.

    Raises:
        TransportError: If the text is not JSON or not an object.
    """
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise TransportError(f"decode response: {e}", cause=e) from e
    if not isinstance(decoded, dict):
        raise TransportError(
            f"decode response: expected JSON object, got {type(decoded).__name__}"
        )
    return decoded


class BaseHTTPTransport:
    """Base for transports that POST one JSON body per call.

    Attributes:
        endpoint: URL every request is posted to
        timeout: Request timeout in seconds
    """

    transport_name = "http"

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            endpoint: URL every request is posted to
            api_key: Static bearer credential
            timeout: Request timeout in seconds (default: 30.0)
            http_client: Pre-built client (tests inject one backed by
                httpx.MockTransport). Created lazily when omitted.
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._api_key = api_key
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy initialization).

        Returns:
            Shared httpx.AsyncClient instance (connection pooling)
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
            await asyncio.sleep(0)  # Yield to event loop on first init
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return build_default_headers(self._api_key)

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        """POST ``body`` and return a fully read 2xx response."""
        client = await self._get_client()
        logger.debug("Posting request", transport=self.transport_name, endpoint=self.endpoint)
        try:
            response = await client.post(self.endpoint, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise self._wrap_http_error(e) from e
        self._raise_for_status(response)
        return response

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Turn any non-2xx status into a TransportError with the raw body."""
        if response.is_success:
            return
        body = response.text
        logger.warning(
            "Non-success HTTP status",
            transport=self.transport_name,
            status_code=response.status_code,
        )
        raise TransportError(
            f"HTTP {response.status_code}: {body}",
            status_code=response.status_code,
            body=body,
        )

    def _wrap_http_error(self, error: httpx.HTTPError) -> TransportError:
        if isinstance(error, httpx.TimeoutException):
            message = f"request timed out after {self.timeout:g}s"
        else:
            message = f"execute request: {error}"
        logger.warning("HTTP exchange failed", transport=self.transport_name, error=str(error))
        return TransportError(message, cause=error)
