"""
Type Definitions

Pydantic models for all data structures.

Chunk Models:
    - ParentChunk, ChildChunk - Two-level hierarchy with id cross references
    - HierarchicalChunks - Result of one hierarchical pass
    - Chunk - Multi-scale / section chunk without linkage
    - ChunkType, ChunkSize - Closed classification enums

Index Models:
    - EmbeddingInput - Prepared embedding text with its payload
    - IndexPoint - Vector-store point

All chunk types are frozen after creation.
"""

from rag_chunker.types.chunks import (
    Chunk,
    ChunkSize,
    ChunkType,
    ChildChunk,
    HierarchicalChunks,
    ParentChunk,
)
from rag_chunker.types.points import EmbeddingInput, IndexPoint

__all__ = [
    # Chunk Models
    "ChunkType",
    "ChunkSize",
    "ParentChunk",
    "ChildChunk",
    "Chunk",
    "HierarchicalChunks",
    # Index Models
    "EmbeddingInput",
    "IndexPoint",
]
