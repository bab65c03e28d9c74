"""
Chunk Types

Records produced by a single segmentation pass over a Markdown document.

Hierarchical Models:
    - ParentChunk: Section-scoped span that provides retrieval context
    - ChildChunk: Smaller span inside a parent, used for precise matching
    - HierarchicalChunks: Parents and children from one pass, with lookups

Multi-Scale Models:
    - Chunk: One chunk of a size tier (small/medium/large), no linkage

All records are frozen once created. Line numbers are 0-based and inclusive
into the original document's line sequence.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChunkType(str, Enum):
    """Content classification of a child chunk."""

    CODE = "code"
    TEXT = "text"
    HEADER = "header"
    LIST = "list"
    MIXED = "mixed"


class ChunkSize(str, Enum):
    """Size tier of a multi-scale chunk."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class _LineSpan(BaseModel):
    """Shared line-range fields and validation."""

    model_config = ConfigDict(frozen=True)

    content: str
    start_line: int = Field(..., ge=0)
    end_line: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "_LineSpan":
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must be >= start_line ({self.start_line})"
            )
        return self


class ParentChunk(_LineSpan):
    """
    A large, section-scoped span of the document.

    Attributes:
        id: Unique identifier (used as the vector index key)
        content: Verbatim text of the span
        start_line: First line of the span
        end_line: Last line of the span (inclusive)
        headers: Up to 3 header lines, most significant first
        child_ids: Ids of the children carved from this parent, in order
        summary: Header breadcrumb plus an excerpt of the first real line
    """

    id: str
    headers: list[str] = Field(default_factory=list)
    child_ids: list[str] = Field(default_factory=list)
    summary: str = ""


class ChildChunk(_LineSpan):
    """
    A precisely-scoped span inside a parent.

    ``parent_id`` is a plain back-reference; it does not own the parent.
    Line numbers are already offset into the original document.
    """

    id: str
    parent_id: str
    chunk_type: ChunkType = ChunkType.TEXT
    index_in_parent: int = Field(..., ge=0)


class Chunk(_LineSpan):
    """
    A multi-scale chunk.

    Attributes:
        chunk_size: Tier the chunk was produced for
        has_code: Whether a fenced block was seen in this chunk
        headers: Header context at the point the chunk was closed
    """

    chunk_size: ChunkSize
    has_code: bool = False
    headers: list[str] = Field(default_factory=list)


class HierarchicalChunks(BaseModel):
    """
    Output of a hierarchical segmentation pass.

    The parent lookup is derived from ``parents`` on demand and never
    stored, so it can always be rebuilt from the two collections.
    """

    model_config = ConfigDict(frozen=True)

    parents: list[ParentChunk] = Field(default_factory=list)
    children: list[ChildChunk] = Field(default_factory=list)

    def parent_index(self) -> dict[str, int]:
        """Map parent id -> position in ``parents``."""
        return {parent.id: i for i, parent in enumerate(self.parents)}

    def get_parent(self, parent_id: str) -> ParentChunk | None:
        """Look up a parent by id."""
        index = self.parent_index().get(parent_id)
        return None if index is None else self.parents[index]

    def children_of(self, parent: ParentChunk) -> list[ChildChunk]:
        """Children of ``parent`` in ``child_ids`` order."""
        by_id = {child.id: child for child in self.children}
        return [by_id[child_id] for child_id in parent.child_ids if child_id in by_id]
