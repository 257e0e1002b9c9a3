"""HTTP client factory for the workspace service.

All transports talk to the remote service through httpx.AsyncClient
instances built here, so timeout and credential handling live in one place.

Pattern: Factory Pattern
"""

from typing import Any

import httpx

from affine_kb.core.config import Settings, get_settings
from affine_kb.core.constants import CONTENT_TYPE_JSON
from affine_kb.core.logging import get_logger


logger = get_logger(__name__)


def build_default_headers(api_key: str) -> dict[str, str]:
    """Headers sent with every request: JSON body plus bearer credential."""
    return {
        "Content-Type": CONTENT_TYPE_JSON,
        "Authorization": f"Bearer {api_key}",
    }


class HTTPClientFactory:
    """Factory for creating HTTP clients to the workspace service.

    Provides centralized client creation with:
    - Consistent timeout configuration
    - Bearer credential and JSON content type on every request
    - Connection pooling (one client per transport)

    Example:
        ```python
        factory = HTTPClientFactory()
        client = factory.create_client()
        try:
            response = await client.post(factory.endpoint, json=payload)
        finally:
            await client.aclose()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the HTTP client factory.

        Args:
            settings: Application settings. Uses get_settings() if not provided.
        """
        self._settings = settings or get_settings()

    @property
    def endpoint(self) -> str:
        """URL for the configured transport."""
        return self._settings.endpoint

    def _client_kwargs(self, timeout: float | None, **kwargs: Any) -> dict[str, Any]:
        request_timeout = timeout or self._settings.timeout_seconds
        headers = build_default_headers(self._settings.api_key.get_secret_value())
        headers.update(kwargs.pop("headers", None) or {})
        return {
            "timeout": httpx.Timeout(request_timeout),
            "headers": headers,
            **kwargs,
        }

    def create_client(
        self,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> httpx.AsyncClient:
        """Create a standalone HTTP client (caller manages lifecycle).

        Args:
            timeout: Request timeout in seconds.
            **kwargs: Additional arguments passed to httpx.AsyncClient.

        Returns:
            Configured httpx.AsyncClient instance.

        Warning:
            Caller is responsible for calling `await client.aclose()`.
        """
        client_kwargs = self._client_kwargs(timeout, **kwargs)

        logger.debug(
            "Creating HTTP client",
            endpoint=self.endpoint,
            timeout=client_kwargs["timeout"].read,
        )

        return httpx.AsyncClient(**client_kwargs)
