"""
rag-chunker - Structure-Aware Markdown Chunking

Splits Markdown documents into chunks for retrieval-augmented generation
without ever cutting through a fenced code block.

Example:
    >>> from rag_chunker import segment_document
    >>> result = segment_document(open("guide.md").read())
    >>> for parent in result.parents:
    ...     print(parent.summary, len(parent.child_ids))

Main Entry Points:
    segment_document: Hierarchical parents with typed children
    segment_multi_scale: Small/medium/large overlapping tiers
    segment_sections: Single-tier section-aligned chunks
    ChunkerConfig: Configuration management
    ChunkIndexer: Embeds chunks into vector-store points
"""

__version__ = "0.1.0"


# Public API - lazy imports to avoid loading optional dependencies
def __getattr__(name: str):
    """Lazy import public API components."""

    if name in (
        "segment_document",
        "segment_children",
        "segment_multi_scale",
        "segment_sections",
        "create_summary",
        "chunk_statistics",
    ):
        from rag_chunker import chunking
        return getattr(chunking, name)

    if name == "ChunkerConfig":
        from rag_chunker.config.settings import ChunkerConfig
        return ChunkerConfig

    if name == "ChunkIndexer":
        from rag_chunker.ingestion.indexer import ChunkIndexer
        return ChunkIndexer

    if name in ("safe_truncate", "sanitize_for_embedding", "prepare_embedding_input"):
        from rag_chunker import utils
        return getattr(utils, name)

    # Types
    if name in (
        "ChunkType",
        "ChunkSize",
        "ParentChunk",
        "ChildChunk",
        "Chunk",
        "HierarchicalChunks",
        "IndexPoint",
    ):
        from rag_chunker import types
        return getattr(types, name)

    raise AttributeError(f"module 'rag_chunker' has no attribute {name!r}")


__all__ = [
    # Segmentation
    "segment_document",
    "segment_children",
    "segment_multi_scale",
    "segment_sections",
    "create_summary",
    "chunk_statistics",

    # Configuration and indexing
    "ChunkerConfig",
    "ChunkIndexer",

    # Text helpers
    "safe_truncate",
    "sanitize_for_embedding",
    "prepare_embedding_input",

    # Types
    "ChunkType",
    "ChunkSize",
    "ParentChunk",
    "ChildChunk",
    "Chunk",
    "HierarchicalChunks",
    "IndexPoint",

    # Version
    "__version__",
]
