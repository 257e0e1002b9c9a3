"""Request dialects: validated actions to transport-specific requests.

A dialect knows the remote API vocabulary of one family of transports:

- GraphQLDialect: typed queries/mutations against the workspace GraphQL API
- McpDialect: ``tools/call`` requests against the workspace MCP endpoint,
  shared by the synchronous and streaming JSON-RPC transports

Each built OperationRequest also tells the extractor which shape to expect
and where in the payload to find it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from affine_kb.core.config import TransportKind
from affine_kb.core.constants import MCP_METHOD_TOOLS_CALL
from affine_kb.extraction.extractor import ResultShape
from affine_kb.tools.actions import (
    CREATE,
    GET_STRUCTURE,
    LIST,
    LIST_WORKSPACES,
    READ,
    SEARCH,
    SEMANTIC_SEARCH,
    UPDATE,
    ActionArguments,
)


@dataclass(frozen=True)
class OperationRequest:
    """Transport-specific form of one call; built fresh, never reused."""

    operation: str
    params: dict[str, Any]
    shape: ResultShape
    path: tuple[str, ...] = ()
    record_id: str = ""


class Dialect(Protocol):
    name: str

    @property
    def actions(self) -> tuple[str, ...]: ...

    def build(self, args: ActionArguments) -> OperationRequest: ...


# =============================================================================
# GraphQL
# =============================================================================

LIST_WORKSPACES_QUERY = """
query ListWorkspaces {
  workspaces {
    id
    name
    createdAt
    memberCount
  }
}
"""

LIST_PAGES_QUERY = """
query ListPages($workspaceId: ID!, $limit: Int!) {
  workspace(id: $workspaceId) {
    pages(limit: $limit) {
      id
      title
      createdAt
      updatedAt
      tags
    }
  }
}
"""

SEARCH_PAGES_QUERY = """
query SearchPages($workspaceId: ID!, $query: String!, $limit: Int!) {
  workspace(id: $workspaceId) {
    search(query: $query, limit: $limit) {
      id
      title
      snippet
      tags
      updatedAt
    }
  }
}
"""

READ_PAGE_QUERY = """
query ReadPage($workspaceId: ID!, $pageId: ID!) {
  workspace(id: $workspaceId) {
    page(id: $pageId) {
      id
      title
      content
      tags
      createdAt
      updatedAt
      parent {
        id
        title
      }
    }
  }
}
"""

CREATE_PAGE_MUTATION = """
mutation CreatePage($workspaceId: ID!, $title: String!, $content: String, $tags: [String!]) {
  createPage(workspaceId: $workspaceId, title: $title, content: $content, tags: $tags) {
    id
    title
    tags
  }
}
"""

UPDATE_PAGE_MUTATION = """
mutation UpdatePage($workspaceId: ID!, $pageId: ID!, $title: String, $content: String, $tags: [String!]) {
  updatePage(workspaceId: $workspaceId, pageId: $pageId, title: $title, content: $content, tags: $tags) {
    id
    title
    tags
    updatedAt
  }
}
"""

GET_STRUCTURE_QUERY = """
query GetStructure($workspaceId: ID!) {
  workspace(id: $workspaceId) {
    id
    name
    structure {
      categories {
        name
        pageCount
      }
      tags {
        name
        count
      }
      totalPages
    }
  }
}
"""


class GraphQLDialect:
    """Builds GraphQL documents and variables."""

    name = "graphql"

    def __init__(self) -> None:
        self._builders: dict[str, Callable[[ActionArguments], OperationRequest]] = {
            LIST_WORKSPACES: self._list_workspaces,
            LIST: self._list_pages,
            SEARCH: self._search,
            READ: self._read,
            CREATE: self._create,
            UPDATE: self._update,
            GET_STRUCTURE: self._get_structure,
        }

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(self._builders)

    def build(self, args: ActionArguments) -> OperationRequest:
        return self._builders[args.action](args)

    def _list_workspaces(self, args: ActionArguments) -> OperationRequest:
        return OperationRequest(LIST_WORKSPACES_QUERY, {}, ResultShape.WORKSPACES, ("workspaces",))

    def _list_pages(self, args: ActionArguments) -> OperationRequest:
        return OperationRequest(
            LIST_PAGES_QUERY,
            {"workspaceId": args.workspace_id, "limit": args.limit},
            ResultShape.RECORDS,
            ("workspace", "pages"),
        )

    def _search(self, args: ActionArguments) -> OperationRequest:
        return OperationRequest(
            SEARCH_PAGES_QUERY,
            {"workspaceId": args.workspace_id, "query": args.query, "limit": args.limit},
            ResultShape.RECORDS,
            ("workspace", "search"),
        )

    def _read(self, args: ActionArguments) -> OperationRequest:
        return OperationRequest(
            READ_PAGE_QUERY,
            {"workspaceId": args.workspace_id, "pageId": args.page_id},
            ResultShape.RECORD,
            ("workspace", "page"),
            record_id=args.page_id,
        )

    def _create(self, args: ActionArguments) -> OperationRequest:
        variables: dict[str, Any] = {"workspaceId": args.workspace_id, "title": args.title}
        if args.content:
            variables["content"] = args.content
        if args.tags is not None:
            variables["tags"] = list(args.tags)
        return OperationRequest(CREATE_PAGE_MUTATION, variables, ResultShape.RECORD, ("createPage",))

    def _update(self, args: ActionArguments) -> OperationRequest:
        variables: dict[str, Any] = {"workspaceId": args.workspace_id, "pageId": args.page_id}
        for name in args.updates:
            value = getattr(args, name)
            variables[name] = list(value) if name == "tags" else value
        return OperationRequest(
            UPDATE_PAGE_MUTATION,
            variables,
            ResultShape.RECORD,
            ("updatePage",),
            record_id=args.page_id,
        )

    def _get_structure(self, args: ActionArguments) -> OperationRequest:
        return OperationRequest(
            GET_STRUCTURE_QUERY,
            {"workspaceId": args.workspace_id},
            ResultShape.STRUCTURE,
            ("workspace",),
        )


# =============================================================================
# MCP (JSON-RPC tools/call)
# =============================================================================

MCP_TOOL_KEYWORD_SEARCH = "keyword_search"
MCP_TOOL_SEMANTIC_SEARCH = "semantic_search"
MCP_TOOL_READ_DOCUMENT = "read_document"


def tools_call_params(tool: str, arguments: dict[str, Any]) -> dict[str, Any]:
    return {"name": tool, "arguments": arguments}


class McpDialect:
    """Builds ``tools/call`` requests for the workspace MCP endpoint."""

    name = "mcp"

    _SEARCH_TOOLS = {
        SEARCH: MCP_TOOL_KEYWORD_SEARCH,
        SEMANTIC_SEARCH: MCP_TOOL_SEMANTIC_SEARCH,
    }

    @property
    def actions(self) -> tuple[str, ...]:
        return (SEARCH, SEMANTIC_SEARCH, READ)

    def build(self, args: ActionArguments) -> OperationRequest:
        if args.action == READ:
            return OperationRequest(
                MCP_METHOD_TOOLS_CALL,
                tools_call_params(MCP_TOOL_READ_DOCUMENT, {"docId": args.page_id}),
                ResultShape.TEXT,
                record_id=args.page_id,
            )
        return OperationRequest(
            MCP_METHOD_TOOLS_CALL,
            tools_call_params(self._SEARCH_TOOLS[args.action], {"query": args.query}),
            ResultShape.RECORDS,
        )


def dialect_for(transport: TransportKind) -> Dialect:
    """Pick the dialect matching a configured transport."""
    if transport is TransportKind.GRAPHQL:
        return GraphQLDialect()
    return McpDialect()
