"""Unit tests for affine_kb/extraction/extractor module.

All inputs are literal JSON values; the extractor does no I/O.
"""

import pytest

from affine_kb.core.exceptions import ExtractionError
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
    navigate,
)
from affine_kb.schemas.documents import DocumentRecord, WorkspaceStructure


class TestExtractRecords:
    """Tests for the three accepted payload shapes."""

    def test_direct_array(self) -> None:
        records = extract_records([{"id": "a", "title": "A"}, {"id": "b", "title": "B"}])

        assert [r.id for r in records] == ["a", "b"]

    def test_nested_object(self, search_payload: dict) -> None:
        records = extract_records(search_payload, ("workspace", "search"))

        assert len(records) == 2
        assert records[0].title == "Roadmap"
        assert records[0].tags == ["planning", "2024"]
        assert records[0].updated_at == "2024-05-01T10:00:00Z"
        assert records[1].snippet is None

    def test_content_wrapper_skips_bad_entries(self, content_wrapper_payload: dict) -> None:
        """Array and single-object texts are concatenated; non-JSON text is skipped."""
        records = extract_records(content_wrapper_payload)

        assert [(r.id, r.title) for r in records] == [("d1", "Alpha"), ("d2", "Beta")]
        assert records[1].tags == ["x"]

    def test_content_wrapper_skips_invalid_records(self) -> None:
        payload = {
            "content": [
                {"type": "text", "text": '[{"title": "no id"}, {"docId": "ok"}]'},
            ]
        }

        records = extract_records(payload)

        assert [r.id for r in records] == ["ok"]

    def test_empty_content_wrapper_is_zero_records(self) -> None:
        assert extract_records({"content": []}) == []

    def test_null_leaf_is_zero_records(self) -> None:
        assert extract_records({"workspace": {"search": None}}, ("workspace", "search")) == []

    def test_missing_intermediate_raises(self) -> None:
        with pytest.raises(ExtractionError, match="missing field 'workspace'"):
            extract_records({"other": {}}, ("workspace", "search"))

    def test_null_intermediate_raises(self) -> None:
        with pytest.raises(ExtractionError, match="expected object at 'workspace'"):
            extract_records({"workspace": None}, ("workspace", "search"))

    def test_wrong_leaf_type_raises(self) -> None:
        with pytest.raises(ExtractionError, match="expected a list of records"):
            extract_records({"workspace": {"search": "oops"}}, ("workspace", "search"))

    def test_null_payload_raises(self) -> None:
        with pytest.raises(ExtractionError, match="empty response payload"):
            extract_records(None, ("workspace", "search"))

    def test_invalid_direct_item_raises(self) -> None:
        with pytest.raises(ExtractionError):
            extract_records([{"title": "missing id"}])


class TestExtractRecord:
    """Tests for single-record extraction."""

    def test_nested_record_with_parent(self) -> None:
        payload = {
            "workspace": {
                "page": {
                    "id": "p1",
                    "title": "Child",
                    "content": "body",
                    "tags": None,
                    "parent": {"id": "p0", "title": "Root"},
                }
            }
        }

        record = extract_record(payload, ("workspace", "page"))

        assert record.tags == []
        assert record.parent is not None
        assert record.parent.id == "p0"
        assert record.parent.title == "Root"

    def test_null_record_raises(self) -> None:
        with pytest.raises(ExtractionError, match="no record at 'workspace.page'"):
            extract_record({"workspace": {"page": None}}, ("workspace", "page"))

    def test_content_wrapper_record(self) -> None:
        record = extract_record({"content": [{"type": "text", "text": '{"id": "n1", "title": "New"}'}]})

        assert record.id == "n1"

    def test_content_wrapper_without_record_raises(self) -> None:
        with pytest.raises(ExtractionError, match="no record in response content"):
            extract_record({"content": [{"type": "text", "text": "plain"}]})


class TestExtractText:
    """Tests for free-text read bodies."""

    def test_concatenates_each_text_with_newline(self) -> None:
        payload = {
            "content": [
                {"type": "text", "text": "# Heading"},
                {"type": "image", "data": "..."},
                {"type": "text", "text": "Paragraph"},
            ]
        }

        assert extract_text(payload) == "# Heading\nParagraph\n"

    def test_non_wrapper_raises(self) -> None:
        with pytest.raises(ExtractionError, match="expected a content list"):
            extract_text({"result": "x"})

    def test_text_shape_accepts_document_object(self) -> None:
        record = extract(
            {"docId": "d1", "title": "T", "content": "body"}, ResultShape.TEXT, record_id="d1"
        )

        assert (record.id, record.title, record.content) == ("d1", "T", "body")

    def test_document_object_without_content_gets_placeholder(self) -> None:
        record = extract_document({"docId": "d1", "title": "T"}, record_id="d1")

        assert record.content == CONTENT_PLACEHOLDER

    def test_text_shape_rejects_scalar(self) -> None:
        with pytest.raises(ExtractionError, match="expected a content list"):
            extract("plain", ResultShape.TEXT, record_id="d1")

    def test_text_shape_builds_record(self) -> None:
        record = extract({"content": [{"type": "text", "text": "hello"}]}, ResultShape.TEXT, record_id="d9")

        assert isinstance(record, DocumentRecord)
        assert record.id == "d9"
        assert record.title == ""
        assert record.content == "hello\n"

    def test_empty_body_gets_placeholder(self) -> None:
        record = extract({"content": []}, ResultShape.TEXT, record_id="d9")

        assert record.content == CONTENT_PLACEHOLDER


class TestWorkspaceShapes:
    """Tests for workspace list and structure extraction."""

    def test_workspaces(self) -> None:
        payload = {
            "workspaces": [
                {"id": "w1", "name": "Team", "createdAt": "2024-01-01", "memberCount": 4},
            ]
        }

        workspaces = extract_workspaces(payload)

        assert workspaces[0].name == "Team"
        assert workspaces[0].member_count == 4

    def test_null_workspaces(self) -> None:
        assert extract_workspaces({"workspaces": None}) == []

    def test_structure(self) -> None:
        payload = {
            "workspace": {
                "id": "w1",
                "name": "Team",
                "structure": {
                    "categories": [{"name": "Docs", "pageCount": 3}],
                    "tags": [{"name": "draft", "count": 2}],
                    "totalPages": 7,
                },
            }
        }

        structure = extract_structure(payload)

        assert isinstance(structure, WorkspaceStructure)
        assert structure.total_pages == 7
        assert structure.categories[0].page_count == 3
        assert structure.tags[0].count == 2

    def test_structure_with_bad_shape_raises(self) -> None:
        with pytest.raises(ExtractionError, match="unexpected workspace structure"):
            extract_structure({"workspace": {"id": "w1", "structure": ["nope"]}})


class TestNavigate:
    """Tests for navigate."""

    def test_empty_path_returns_payload(self) -> None:
        assert navigate({"a": 1}, ()) == {"a": 1}

    def test_non_object_root(self) -> None:
        with pytest.raises(ExtractionError, match="expected object at '<root>', got list"):
            navigate([], ("workspace",))
