"""Pydantic models shared across transports, extraction and presentation."""

from affine_kb.schemas.documents import (
    CategoryCount,
    DocumentRecord,
    ParentRef,
    TagCount,
    WorkspaceStructure,
    WorkspaceSummary,
)
from affine_kb.schemas.tool import ToolDefinition, ToolResult


__all__ = [
    "CategoryCount",
    "DocumentRecord",
    "ParentRef",
    "TagCount",
    "ToolDefinition",
    "ToolResult",
    "WorkspaceStructure",
    "WorkspaceSummary",
]
