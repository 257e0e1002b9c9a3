"""Action table and argument validation.

Every action declares its required and optional argument keys statically.
``validate_arguments`` turns a loosely-typed argument bag into a frozen
ActionArguments, raising ArgumentValidationError before anything touches
the network.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from affine_kb.core.constants import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT
from affine_kb.core.exceptions import ArgumentValidationError


# =============================================================================
# Action names
# =============================================================================

LIST_WORKSPACES = "list_workspaces"
LIST = "list"
SEARCH = "search"
SEMANTIC_SEARCH = "semantic_search"
READ = "read"
CREATE = "create"
UPDATE = "update"
GET_STRUCTURE = "get_structure"

NO_UPDATES_MESSAGE = "no updates specified (provide title, content, or tags)"


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """Static description of one action.

    Attributes:
        name: Action name as sent by the model
        verb: Phrase used in failure messages ("failed to <verb>: ...")
        required: Argument keys that must be present and non-empty strings
        optional: Argument keys the action reads when present
    """

    name: str
    verb: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()


ACTIONS: dict[str, ActionSpec] = {
    spec.name: spec
    for spec in (
        ActionSpec(LIST_WORKSPACES, "list workspaces"),
        ActionSpec(LIST, "list pages", optional=("workspace_id", "limit")),
        ActionSpec(SEARCH, "search", required=("query",), optional=("workspace_id", "limit")),
        ActionSpec(SEMANTIC_SEARCH, "semantic search", required=("query",)),
        ActionSpec(READ, "read page", required=("page_id",), optional=("workspace_id",)),
        ActionSpec(
            CREATE,
            "create page",
            required=("title",),
            optional=("workspace_id", "content", "tags"),
        ),
        ActionSpec(
            UPDATE,
            "update page",
            required=("page_id",),
            optional=("workspace_id", "title", "content", "tags"),
        ),
        ActionSpec(GET_STRUCTURE, "get structure", optional=("workspace_id",)),
    )
}


@dataclass(frozen=True, slots=True)
class ActionArguments:
    """Validated arguments for one call.

    ``updates`` lists the fields an update actually changes, in the fixed
    order title, content, tags.
    """

    action: str
    workspace_id: str = ""
    query: str = ""
    page_id: str = ""
    title: str = ""
    content: str = ""
    tags: tuple[str, ...] | None = None
    limit: int = DEFAULT_LIMIT
    updates: tuple[str, ...] = ()


# =============================================================================
# Argument readers
# =============================================================================


def read_action(args: Mapping[str, Any]) -> str:
    """Return the action name or raise if it is missing."""
    action = args.get("action")
    if not isinstance(action, str) or not action:
        raise ArgumentValidationError("action is required", field="action", value=action)
    return action


def get_action_spec(action: str) -> ActionSpec:
    spec = ACTIONS.get(action)
    if spec is None:
        raise ArgumentValidationError(f"unknown action: {action}", field="action", value=action)
    return spec


def _required_str(args: Mapping[str, Any], key: str, action: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value:
        raise ArgumentValidationError(
            f"{key} is required for {action}", field=key, action=action, value=value
        )
    return value


def _optional_str(args: Mapping[str, Any], key: str, action: str) -> str:
    value = args.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ArgumentValidationError(
            f"{key} must be a string", field=key, action=action, value=value
        )
    return value


def _optional_limit(args: Mapping[str, Any], action: str) -> int:
    value = args.get("limit")
    if value is None:
        return DEFAULT_LIMIT
    # bool is an int subclass; true/false is never a count
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
    ):
        raise ArgumentValidationError(
            "limit must be an integer", field="limit", action=action, value=value
        )
    return max(MIN_LIMIT, min(MAX_LIMIT, int(value)))


def _optional_tags(args: Mapping[str, Any], action: str) -> tuple[str, ...] | None:
    value = args.get("tags")
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ArgumentValidationError(
            "tags must be a list of strings", field="tags", action=action, value=value
        )
    return tuple(tag for tag in value if isinstance(tag, str))


def validate_arguments(
    spec: ActionSpec,
    args: Mapping[str, Any],
    default_workspace_id: str = "",
) -> ActionArguments:
    """Validate ``args`` against ``spec``.

    Args:
        spec: The action being invoked
        args: Raw argument bag from the model
        default_workspace_id: Used when ``workspace_id`` is absent or empty

    Returns:
        Frozen ActionArguments with defaults applied.

    Raises:
        ArgumentValidationError: A required key is missing, an optional key
            is malformed, or an update supplies nothing to change.
    """
    action = spec.name
    values: dict[str, Any] = {"action": action}

    for key in spec.required:
        values[key] = _required_str(args, key, action)

    for key in spec.optional:
        if key == "limit":
            values["limit"] = _optional_limit(args, action)
        elif key == "tags":
            values["tags"] = _optional_tags(args, action)
        else:
            values[key] = _optional_str(args, key, action)

    if "workspace_id" in spec.optional and not values.get("workspace_id"):
        values["workspace_id"] = default_workspace_id

    if action == UPDATE:
        values["updates"] = _changed_fields(values)
        if not values["updates"]:
            raise ArgumentValidationError(NO_UPDATES_MESSAGE, field="updates", action=action)

    return ActionArguments(**values)


def _changed_fields(values: Mapping[str, Any]) -> tuple[str, ...]:
    changed = []
    if values.get("title"):
        changed.append("title")
    if values.get("content"):
        changed.append("content")
    if values.get("tags") is not None:
        changed.append("tags")
    return tuple(changed)
