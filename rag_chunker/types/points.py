"""
Index Point Types

Records handed to the vector-store collaborator after embedding.

Models:
    - EmbeddingInput: Sanitized, truncated text paired with the chunk it came from
    - IndexPoint: Vector plus payload, keyed by the chunk id
"""

from typing import Any

from pydantic import BaseModel, Field


class EmbeddingInput(BaseModel):
    """Text prepared for the embedding model."""

    point_id: str = Field(..., description="Id the resulting vector will be stored under")
    text: str = Field(..., description="Sanitized and truncated embedding text")
    collection: str = Field(..., description="Target collection name")
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Payload stored alongside the vector"
    )


class IndexPoint(BaseModel):
    """
    A single vector-store point.

    Attributes:
        id: Point id (the chunk id)
        vector: Embedding vector
        payload: Chunk text and structural metadata
        collection: Collection the point belongs to
    """

    id: str
    vector: list[float]
    payload: dict[str, Any] = Field(default_factory=dict)
    collection: str
