"""
Document Chunking

Transforms Markdown documents into structure-aware chunks for retrieval.

Modules:
    parents: Hierarchical parent chunks (runs the child segmenter per parent)
    children: Typed child chunks inside one parent
    multi_scale: Three overlapping tiers (small/medium/large)
    sections: Single-tier section-aligned chunks
    summary: Header breadcrumb + excerpt descriptors

Key Features:
    - Fenced code blocks are never split across chunks
    - Header context (up to 3 levels) travels with every chunk
    - Size thresholds in UTF-8 bytes, excerpts in characters
    - Pure functions: no I/O, no network
"""

from rag_chunker.chunking.children import segment_children
from rag_chunker.chunking.multi_scale import segment_multi_scale, segment_tier
from rag_chunker.chunking.parents import segment_document
from rag_chunker.chunking.sections import segment_sections
from rag_chunker.chunking.stats import chunk_statistics
from rag_chunker.chunking.summary import create_summary

__all__ = [
    "segment_document",
    "segment_children",
    "segment_multi_scale",
    "segment_tier",
    "segment_sections",
    "create_summary",
    "chunk_statistics",
]
