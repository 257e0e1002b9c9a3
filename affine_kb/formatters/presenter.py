"""Plain-text rendering of extracted results.

Rendering is deterministic and positional (1-based numbering) with no
truncation and no escaping. ``render`` returns the model-facing and the
human-facing text; they are identical today.
"""

from __future__ import annotations

from typing import Any

from affine_kb.schemas.documents import (
    DocumentRecord,
    WorkspaceStructure,
    WorkspaceSummary,
)
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


def render(action: str, extracted: Any, args: ActionArguments) -> tuple[str, str]:
    """Render ``extracted`` for ``action``.

    Args:
        action: Action that produced the result
        extracted: Output of the extractor for that action
        args: Validated arguments of the call (query text, changed fields)

    Returns:
        (for_llm, for_user)
    """
    text = _RENDERERS[action](extracted, args)
    return text, text


def render_search(records: list[DocumentRecord], args: ActionArguments) -> str:
    noun = "semantic matches" if args.action == SEMANTIC_SEARCH else "results"
    if not records:
        return f"No {noun} found for: {args.query}"

    lines = [f"Found {len(records)} {noun} for '{args.query}':"]
    for i, record in enumerate(records, start=1):
        tag_str = f" [{', '.join(record.tags)}]" if record.tags else ""
        lines.append(f"{i}. {record.title} (ID: {record.id}){tag_str}")
        if record.snippet:
            lines.append(f"   {record.snippet}")
    return "\n".join(lines)


def render_list(records: list[DocumentRecord], args: ActionArguments) -> str:
    if not records:
        return "No pages found in workspace"

    lines = [f"Pages in workspace (showing {len(records)}):"]
    for i, record in enumerate(records, start=1):
        tag_str = f" [Tags: {', '.join(record.tags)}]" if record.tags else ""
        lines.append(f"{i}. {record.title} (ID: {record.id}){tag_str}")
        lines.append(f"   Updated: {record.updated_at or ''}")
    return "\n".join(lines)


def render_read(record: DocumentRecord, args: ActionArguments) -> str:
    """Metadata block, blank line, then the full body.

    The title line is only written when the payload carried a title.
    """
    lines = []
    if record.title:
        lines.append(f"Title: {record.title}")
    lines.append(f"ID: {record.id}")
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")
    if record.parent is not None:
        lines.append(f"Parent: {record.parent.title} (ID: {record.parent.id})")
    if record.updated_at:
        lines.append(f"Updated: {record.updated_at}")
    lines.append("")
    lines.append("Content:")
    lines.append(record.content or "")
    return "\n".join(lines)


def render_create(record: DocumentRecord, args: ActionArguments) -> str:
    tag_str = f" with tags [{', '.join(record.tags)}]" if record.tags else ""
    return f"Created page '{record.title}' (ID: {record.id}){tag_str}"


def render_update(record: DocumentRecord, args: ActionArguments) -> str:
    return (
        f"Updated page '{record.title}' (ID: {record.id})"
        f" - changed: {', '.join(args.updates)}"
    )


def render_workspaces(workspaces: list[WorkspaceSummary], args: ActionArguments) -> str:
    if not workspaces:
        return "No workspaces found"

    lines = ["Available Workspaces:"]
    for ws in workspaces:
        lines.append(f"- {ws.name} (ID: {ws.id}, Members: {ws.member_count})")
    return "\n".join(lines)


def render_structure(structure: WorkspaceStructure, args: ActionArguments) -> str:
    lines = [
        f"Workspace: {structure.name} (ID: {structure.id})",
        f"Total Pages: {structure.total_pages}",
    ]

    if structure.categories:
        lines.extend(["", "Categories:"])
        for category in structure.categories:
            lines.append(f"  - {category.name} ({category.page_count} pages)")

    if structure.tags:
        lines.extend(["", "Tags:"])
        for tag in structure.tags:
            lines.append(f"  - {tag.name} ({tag.count} pages)")

    return "\n".join(lines)


_RENDERERS = {
    LIST_WORKSPACES: render_workspaces,
    LIST: render_list,
    SEARCH: render_search,
    SEMANTIC_SEARCH: render_search,
    READ: render_read,
    CREATE: render_create,
    UPDATE: render_update,
    GET_STRUCTURE: render_structure,
}
