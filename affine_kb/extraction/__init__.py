"""Payload extraction: raw transport payloads to typed records."""

from affine_kb.extraction.extractor import (
    CONTENT_PLACEHOLDER,
    ResultShape,
    extract,
    extract_document,
    extract_record,
    extract_records,
    extract_structure,
    extract_text,
    extract_workspaces,
    records_from_content,
)


__all__ = [
    "CONTENT_PLACEHOLDER",
    "ResultShape",
    "extract",
    "extract_document",
    "extract_record",
    "extract_records",
    "extract_structure",
    "extract_text",
    "extract_workspaces",
    "records_from_content",
]
