"""The ``affine`` tool: one LLM-facing entry point into the knowledge base.

Flow of one call:

1. Read and validate the action and its arguments (no I/O)
2. Build the transport-specific request through the configured dialect
3. Perform exactly one exchange through the transport
4. Extract typed records from whatever payload shape came back
5. Render identical model-facing and human-facing text

Every fault becomes an error ToolResult; nothing but cancellation escapes
``execute``.

Example:
    >>> async with AffineTool.from_settings() as tool:
    ...     result = await tool.execute({"action": "search", "query": "roadmap"})
    ...     print(result.for_user)
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from affine_kb.clients.factory import create_transport
from affine_kb.clients.protocols import TransportProtocol
from affine_kb.core.config import Settings, get_settings
from affine_kb.core.constants import MAX_LIMIT, MIN_LIMIT, TOOL_NAME
from affine_kb.core.exceptions import ArgumentValidationError, KnowledgeBaseError
from affine_kb.core.logging import get_logger
from affine_kb.extraction.extractor import extract
from affine_kb.formatters.presenter import render
from affine_kb.schemas.tool import ToolDefinition, ToolResult
from affine_kb.tools.actions import (
    ActionSpec,
    get_action_spec,
    read_action,
    validate_arguments,
)
from affine_kb.tools.dialects import Dialect, dialect_for


logger = get_logger(__name__)

TOOL_DESCRIPTION = (
    "Interact with the Affine knowledge base. List workspaces, list, search "
    "and read pages, create and update pages, and inspect the category and "
    "tag structure of a workspace."
)


class AffineTool:
    """LLM tool routing actions to an Affine workspace.

    The tool holds no per-call state, so one instance may serve concurrent
    callers.

    Attributes:
        name: Tool name exposed to the model
        description: Tool description exposed to the model
    """

    name = TOOL_NAME
    description = TOOL_DESCRIPTION

    def __init__(
        self,
        transport: TransportProtocol,
        dialect: Dialect,
        workspace_id: str = "",
    ) -> None:
        """Initialize the tool.

        Args:
            transport: Transport performing the single exchange per call
            dialect: Request dialect matching the transport
            workspace_id: Workspace used when a call does not name one
        """
        self._transport = transport
        self._dialect = dialect
        self._workspace_id = workspace_id

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> AffineTool:
        """Wire transport and dialect from configuration."""
        settings = settings or get_settings()
        return cls(
            transport=create_transport(settings),
            dialect=dialect_for(settings.transport),
            workspace_id=settings.workspace_id,
        )

    # =========================================================================
    # Definition
    # =========================================================================

    def parameters(self) -> dict[str, Any]:
        """JSON schema of the tool arguments."""
        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": list(self._dialect.actions),
                    "description": "Action to perform",
                },
                "workspace_id": {
                    "type": "string",
                    "description": "Workspace ID (optional, uses the configured default)",
                },
                "page_id": {
                    "type": "string",
                    "description": "Page ID (for read and update)",
                },
                "title": {
                    "type": "string",
                    "description": "Page title (for create and update)",
                },
                "content": {
                    "type": "string",
                    "description": "Page content in markdown (for create and update)",
                },
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Page tags (for create and update)",
                },
                "query": {
                    "type": "string",
                    "description": "Search query (for search and semantic_search)",
                },
                "limit": {
                    "type": "integer",
                    "minimum": MIN_LIMIT,
                    "maximum": MAX_LIMIT,
                    "description": "Maximum number of results (for list and search)",
                },
            },
            "required": ["action"],
        }

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            inputSchema=self.parameters(),
        )

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(self, args: Mapping[str, Any]) -> ToolResult:
        """Run one action.

        Args:
            args: Argument bag supplied by the model

        Returns:
            ToolResult; ``is_error`` is set for validation, transport,
            application and extraction failures alike.

        Raises:
            asyncio.CancelledError: The caller cancelled the call.
        """
        try:
            spec = self._resolve(args)
            call = validate_arguments(spec, args, self._workspace_id)
        except ArgumentValidationError as e:
            logger.warning("Invalid tool arguments", field=e.field, error=e.message)
            return ToolResult.failure(e.message)

        request = self._dialect.build(call)
        logger.debug(
            "Dispatching action",
            action=call.action,
            dialect=self._dialect.name,
            workspace_id=call.workspace_id or None,
        )

        try:
            payload = await self._transport.execute(request.operation, request.params)
            extracted = extract(
                payload, request.shape, request.path, record_id=request.record_id
            )
            for_llm, for_user = render(call.action, extracted, call)
        except asyncio.CancelledError:
            raise
        except KnowledgeBaseError as e:
            logger.warning("Action failed", action=call.action, error=str(e))
            return ToolResult.failure(f"failed to {spec.verb}: {e}")
        except Exception as e:
            logger.exception("Unexpected error during action", action=call.action)
            return ToolResult.failure(f"failed to {spec.verb}: {e}")

        return ToolResult.success(for_llm, for_user)

    def _resolve(self, args: Mapping[str, Any]) -> ActionSpec:
        spec = get_action_spec(read_action(args))
        if spec.name not in self._dialect.actions:
            raise ArgumentValidationError(
                f"action '{spec.name}' is not supported by the "
                f"{self._dialect.name} transport",
                field="action",
                action=spec.name,
            )
        return spec

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Release the transport's HTTP resources."""
        await self._transport.close()

    async def __aenter__(self) -> AffineTool:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
