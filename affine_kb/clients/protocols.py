"""Transport protocol.

Duck typing protocol for transports - enables FakeTransport substitution in
tests and keeps the concrete strategies independent of one another.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for a workspace-service transport.

    A transport serializes one logical request into its wire protocol,
    performs exactly one HTTP exchange and returns the decoded success
    payload. Failures are raised as TransportError or ApplicationError.

    Methods:
        execute: Run one operation and return the raw payload
        close: Release HTTP client resources
    """

    async def execute(self, operation: str, params: dict[str, Any]) -> Any:
        """Run one operation against the service.

        Args:
            operation: GraphQL document or JSON-RPC method name
            params: GraphQL variables or JSON-RPC params

        Returns:
            Decoded success payload (GraphQL ``data`` / JSON-RPC ``result``)
        """
        ...

    async def close(self) -> None:
        """Release HTTP client resources."""
        ...
