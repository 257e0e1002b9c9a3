"""FastMCP stdio server exposing the ``affine`` tool.

Usage:
    # Console script
    affine-kb-mcp

    # Direct execution
    python -m affine_kb.mcp.stdio_server

Claude Desktop / VS Code configuration:
    {
      "mcpServers": {
        "affine-kb": {
          "command": "affine-kb-mcp",
          "env": {"AFFINE_KB_API_KEY": "...", "AFFINE_KB_WORKSPACE_ID": "..."}
        }
      }
    }

stdout carries the MCP protocol, so logs go to stderr.
"""

from __future__ import annotations

import sys
from typing import Any

from fastmcp import FastMCP

from affine_kb.core.config import get_settings
from affine_kb.core.logging import configure_logging, get_logger
from affine_kb.tools.affine_tool import TOOL_DESCRIPTION, AffineTool


logger = get_logger(__name__)

mcp = FastMCP(
    name="affine-kb",
    instructions="Affine knowledge base access. Use the affine tool to browse "
                 "workspaces and to search, read, create and update pages.",
)

_tool: AffineTool | None = None


def get_tool() -> AffineTool:
    """Return the shared AffineTool, building it from settings on first use."""
    global _tool
    if _tool is None:
        _tool = AffineTool.from_settings(get_settings())
    return _tool


def set_tool(tool: AffineTool | None) -> None:
    """Replace the shared AffineTool (tests inject one backed by a fake)."""
    global _tool
    _tool = tool


# =============================================================================
# Tool
# =============================================================================


async def affine(
    action: str,
    workspace_id: str = "",
    page_id: str = "",
    title: str = "",
    content: str = "",
    tags: list[str] | None = None,
    query: str = "",
    limit: int | None = None,
) -> str:
    """Interact with the Affine knowledge base.

    Args:
        action: One of list_workspaces, list, search, semantic_search, read,
            create, update, get_structure
        workspace_id: Workspace ID (defaults to the configured workspace)
        page_id: Page ID for read and update
        title: Page title for create and update
        content: Markdown content for create and update
        tags: Page tags for create and update
        query: Search text for search and semantic_search
        limit: Maximum number of results (1-50)

    Returns:
        Rendered result text, prefixed with "Error: " on failure
    """
    args: dict[str, Any] = {"action": action}
    for key, value in (
        ("workspace_id", workspace_id),
        ("page_id", page_id),
        ("title", title),
        ("content", content),
        ("query", query),
    ):
        if value:
            args[key] = value
    if tags is not None:
        args["tags"] = tags
    if limit is not None:
        args["limit"] = limit

    result = await get_tool().execute(args)
    if result.is_error:
        return f"Error: {result.for_llm}"
    return result.for_llm


mcp.tool(name="affine", description=TOOL_DESCRIPTION)(affine)


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    """Run the server over stdio."""
    configure_logging(stream=sys.stderr)
    logger.info("Starting Affine knowledge-base MCP server", transport=get_settings().transport.value)
    mcp.run()


if __name__ == "__main__":
    main()
