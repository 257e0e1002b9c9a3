"""Tool boundary models.

ToolResult is the single value a tool call returns to the agent loop;
ToolDefinition is the MCP-style description used for tools/list.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Outcome of one tool invocation.

    ``for_llm`` and ``for_user`` are always identical today; they are kept
    apart so the human channel can get richer formatting later without
    changing the contract.
    """

    for_llm: str
    for_user: str
    is_error: bool = False
    error: str | None = None

    @classmethod
    def success(cls, for_llm: str, for_user: str | None = None) -> ToolResult:
        """Build a successful result; ``for_user`` defaults to ``for_llm``."""
        return cls(for_llm=for_llm, for_user=for_llm if for_user is None else for_user)

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        """Build an error result carrying ``message`` on both channels."""
        return cls(for_llm=message, for_user=message, is_error=True, error=message)


class ToolDefinition(BaseModel):
    """MCP tool definition for tools/list responses."""

    name: str
    description: str
    inputSchema: dict[str, Any] = Field(default_factory=dict)
