"""Result extraction from raw transport payloads.

Pure functions, no I/O: every function here takes an already-decoded JSON
value and returns typed records, so they can be tested with literal JSON
fixtures.

Three payload shapes are accepted without the caller knowing which one
occurred:

- Direct array: ``[{...}, {...}]``
- Direct nested object: ``{"workspace": {"search": [...]}}`` navigated by a
  known field path
- Content wrapper: ``{"content": [{"type": "text", "text": "<json>"}]}``
  where each ``text`` is decoded a second time. Entries that fail the second
  decode are skipped, not fatal.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError

from affine_kb.core.exceptions import ExtractionError
from affine_kb.core.logging import get_logger
from affine_kb.schemas.documents import (
    DocumentRecord,
    WorkspaceStructure,
    WorkspaceSummary,
)


logger = get_logger(__name__)

CONTENT_PLACEHOLDER = "(Content could not be extracted)"


class ResultShape(str, Enum):
    """What a request expects back from the payload."""
    RECORDS = "records"
    RECORD = "record"
    TEXT = "text"
    WORKSPACES = "workspaces"
    STRUCTURE = "structure"


# =============================================================================
# Payload navigation
# =============================================================================


def is_content_wrapper(payload: Any) -> bool:
    """True for ``{"content": [...]}`` envelopes."""
    return isinstance(payload, dict) and isinstance(payload.get("content"), list)


def navigate(payload: Any, path: Sequence[str]) -> Any:
    """Follow ``path`` through nested objects.

    Raises:
        ExtractionError: A step is not an object or lacks the next field.
    """
    node = payload
    walked: list[str] = []
    for key in path:
        if not isinstance(node, dict):
            where = ".".join(walked) or "<root>"
            raise ExtractionError(
                f"expected object at '{where}', got {_type_name(node)}"
            )
        if key not in node:
            walked.append(key)
            raise ExtractionError(f"missing field '{'.'.join(walked)}' in response")
        node = node[key]
        walked.append(key)
    return node


def content_texts(items: list[Any]) -> list[str]:
    """Collect the ``text`` strings of a content list in encounter order."""
    texts = []
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            texts.append(item["text"])
    return texts


# =============================================================================
# Records
# =============================================================================


def records_from_content(items: list[Any]) -> list[DocumentRecord]:
    """Second-stage decode of content-wrapper text entries.

    Each text is parsed as JSON holding either an array of records or a
    single record. Unparseable texts and invalid records are skipped.
    """
    records: list[DocumentRecord] = []
    for index, text in enumerate(content_texts(items)):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Skipping non-JSON content entry", index=index)
            continue

        candidates = decoded if isinstance(decoded, list) else [decoded]
        for candidate in candidates:
            try:
                records.append(DocumentRecord.model_validate(candidate))
            except ValidationError as e:
                logger.debug("Skipping invalid record", index=index, errors=e.error_count())
    return records


def extract_records(payload: Any, path: Sequence[str] = ()) -> list[DocumentRecord]:
    """Recover a list of DocumentRecords from any supported payload shape.

    Args:
        payload: Decoded success payload
        path: Field path to the record array for nested objects

    Returns:
        Records in payload order; an empty list is a valid "no matches".

    Raises:
        ExtractionError: The payload matches none of the expected shapes.
    """
    if isinstance(payload, list):
        return [_validate(DocumentRecord, item) for item in payload]
    if is_content_wrapper(payload):
        return records_from_content(payload["content"])
    if payload is None:
        raise ExtractionError("empty response payload")

    node = navigate(payload, path)
    if node is None:
        return []
    if isinstance(node, list):
        return [_validate(DocumentRecord, item) for item in node]
    raise ExtractionError(
        f"expected a list of records at '{'.'.join(path) or '<root>'}', got {_type_name(node)}"
    )


def extract_record(payload: Any, path: Sequence[str] = ()) -> DocumentRecord:
    """Recover a single DocumentRecord (create/update/read results).

    Raises:
        ExtractionError: No record could be found at ``path``.
    """
    if is_content_wrapper(payload):
        records = records_from_content(payload["content"])
        if not records:
            raise ExtractionError("no record in response content")
        return records[0]

    node = navigate(payload, path)
    if not isinstance(node, dict):
        raise ExtractionError(
            f"no record at '{'.'.join(path) or '<root>'}' (got {_type_name(node)})"
        )
    return _validate(DocumentRecord, node)


def extract_text(payload: Any) -> str:
    """Concatenate every content text entry as free-text body.

    Used for single-document reads, where the text entries are document
    body rather than JSON-encoded records.

    Raises:
        ExtractionError: The payload is not a content wrapper.
    """
    if not is_content_wrapper(payload):
        raise ExtractionError(
            f"expected a content list in response, got {_type_name(payload)}"
        )
    return "".join(f"{text}\n" for text in content_texts(payload["content"]))


def extract_document(payload: Any, record_id: str = "") -> DocumentRecord:
    """Recover a single-document read.

    A content wrapper is treated as free-text body; a directly-typed
    document object is validated as a record.

    Raises:
        ExtractionError: The payload is neither shape.
    """
    if isinstance(payload, dict) and not is_content_wrapper(payload):
        record = extract_record(payload)
        if not record.content:
            record = record.model_copy(update={"content": CONTENT_PLACEHOLDER})
        return record

    body = extract_text(payload)
    return DocumentRecord(id=record_id, content=body or CONTENT_PLACEHOLDER)


# =============================================================================
# Workspace shapes
# =============================================================================


def extract_workspaces(
    payload: Any, path: Sequence[str] = ("workspaces",)
) -> list[WorkspaceSummary]:
    """Recover the workspace list of a ListWorkspaces query."""
    node = navigate(payload, path)
    if node is None:
        return []
    if not isinstance(node, list):
        raise ExtractionError(f"expected a list of workspaces, got {_type_name(node)}")
    return [_validate(WorkspaceSummary, item) for item in node]


def extract_structure(
    payload: Any, path: Sequence[str] = ("workspace",)
) -> WorkspaceStructure:
    """Recover the category/tag overview of a GetStructure query."""
    node = navigate(payload, path)
    if not isinstance(node, dict):
        raise ExtractionError(f"no workspace in response (got {_type_name(node)})")
    try:
        return WorkspaceStructure.from_workspace(node)
    except (ValidationError, ValueError) as e:
        raise ExtractionError(f"unexpected workspace structure: {e}", cause=e) from e


# =============================================================================
# Dispatch
# =============================================================================


def extract(
    payload: Any,
    shape: ResultShape,
    path: Sequence[str] = (),
    *,
    record_id: str = "",
) -> Any:
    """Extract ``shape`` from ``payload``.

    Args:
        payload: Decoded success payload
        shape: Expected result shape
        path: Field path for nested-object payloads
        record_id: Document id used for free-text reads, whose payload
            carries no id of its own

    Returns:
        list[DocumentRecord], DocumentRecord, list[WorkspaceSummary] or
        WorkspaceStructure depending on ``shape``.
    """
    if shape is ResultShape.RECORDS:
        return extract_records(payload, path)
    if shape is ResultShape.RECORD:
        return extract_record(payload, path)
    if shape is ResultShape.TEXT:
        return extract_document(payload, record_id)
    if shape is ResultShape.WORKSPACES:
        return extract_workspaces(payload, path or ("workspaces",))
    return extract_structure(payload, path or ("workspace",))


def _validate(model: type[BaseModel], item: Any) -> Any:
    try:
        return model.model_validate(item)
    except ValidationError as e:
        raise ExtractionError(
            f"unexpected {model.__name__} shape: {e.error_count()} validation error(s)",
            cause=e,
        ) from e


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__
