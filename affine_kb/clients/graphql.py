"""GraphQL transport for the Affine workspace API.

Request:  POST <api-url> {"query": ..., "variables": {...}}
Response: {"data": {...}, "errors": [{"message": ...}]}
"""

from __future__ import annotations

from typing import Any

from affine_kb.clients.base import BaseHTTPTransport, decode_json_object
from affine_kb.core.exceptions import ApplicationError
from affine_kb.core.logging import get_logger


logger = get_logger(__name__)


class GraphQLTransport(BaseHTTPTransport):
    """Typed-query transport.

    Example:
        >>> transport = GraphQLTransport("https://app.affine.pro/graphql", api_key="...")
        >>> data = await transport.execute("query { workspaces { id } }", {})
        >>> await transport.close()
    """

    transport_name = "graphql"

    async def execute(self, operation: str, params: dict[str, Any]) -> Any:
        """Run a GraphQL document.

        Args:
            operation: Query or mutation document
            params: Variables; omitted from the body when empty

        Returns:
            The ``data`` member of the response.

        Raises:
            TransportError: Network failure, non-2xx status or undecodable body
            ApplicationError: The response carried a non-empty ``errors`` list
        """
        body: dict[str, Any] = {"query": operation}
        if params:
            body["variables"] = params

        response = await self._post(body)
        envelope = decode_json_object(response.text)

        errors = envelope.get("errors")
        if errors:
            message = _first_error_message(errors)
            logger.warning("GraphQL error", error=message)
            raise ApplicationError(f"graphql error: {message}")

        return envelope.get("data")


def _first_error_message(errors: Any) -> str:
    first = errors[0] if isinstance(errors, list) else errors
    if isinstance(first, dict):
        return str(first.get("message", first))
    return str(first)
