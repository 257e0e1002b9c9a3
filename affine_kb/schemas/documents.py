"""Domain records returned by the workspace service.

Every transport converges onto these models. Field aliases accept both the
GraphQL camelCase names and the document-tool names (``docId``), so the
extractor never needs to know which backend produced a payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


_RECORD_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


def _coerce_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(tag) for tag in value if tag is not None]
    return value


class ParentRef(BaseModel):
    """Reference to a page's parent page."""

    model_config = _RECORD_CONFIG

    id: str = Field(..., validation_alias=AliasChoices("id", "docId", "doc_id"))
    title: str = ""


class DocumentRecord(BaseModel):
    """Normalized unit of knowledge-base content.

    Title defaults to an empty string: some read payloads never populate it,
    and the presenter omits the title line in that case.
    """

    model_config = _RECORD_CONFIG

    id: str = Field(..., validation_alias=AliasChoices("id", "docId", "doc_id"))
    title: str = ""
    snippet: str | None = None
    content: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: str | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    updated_at: str | None = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at")
    )
    parent: ParentRef | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _none_title(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        return _coerce_tags(value)


class WorkspaceSummary(BaseModel):
    """A workspace visible to the credential."""

    model_config = _RECORD_CONFIG

    id: str
    name: str = ""
    created_at: str | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    member_count: int = Field(
        default=0, validation_alias=AliasChoices("memberCount", "member_count")
    )


class CategoryCount(BaseModel):
    model_config = _RECORD_CONFIG

    name: str
    page_count: int = Field(
        default=0, validation_alias=AliasChoices("pageCount", "page_count")
    )


class TagCount(BaseModel):
    model_config = _RECORD_CONFIG

    name: str
    count: int = 0


class WorkspaceStructure(BaseModel):
    """Category and tag overview of a workspace."""

    model_config = _RECORD_CONFIG

    id: str
    name: str = ""
    categories: list[CategoryCount] = Field(default_factory=list)
    tags: list[TagCount] = Field(default_factory=list)
    total_pages: int = 0

    @classmethod
    def from_workspace(cls, workspace: dict[str, Any]) -> WorkspaceStructure:
        """Flatten ``{id, name, structure: {...}}`` into one model."""
        structure = workspace.get("structure") or {}
        if not isinstance(structure, dict):
            raise ValueError("structure must be an object")
        return cls.model_validate(
            {
                "id": workspace.get("id"),
                "name": workspace.get("name") or "",
                "categories": structure.get("categories") or [],
                "tags": structure.get("tags") or [],
                "total_pages": structure.get("totalPages") or 0,
            }
        )
