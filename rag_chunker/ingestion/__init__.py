"""
Ingestion

Embeds segmentation output and assembles vector-store points.

Modules:
    indexer: ChunkIndexer (prepare payloads, embed, build IndexPoints)
"""

from rag_chunker.ingestion.indexer import ChunkIndexer, group_by_collection

__all__ = ["ChunkIndexer", "group_by_collection"]
