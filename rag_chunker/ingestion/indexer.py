"""
Chunk Indexer

Turns segmentation output into vector-store points.

Steps:
    1. Prepare: build the embedding text and payload for every chunk
    2. Embed: sanitize, truncate and embed in order, in batches
    3. Assemble: pair vectors with payloads as IndexPoints

Collections:
    - Hierarchical parents and children share the base collection
    - Multi-scale chunks go to "<base>_small", "<base>_medium", "<base>_large"
    - Section chunks go to the base collection

Writing the points is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from rag_chunker.providers.base import EmbeddingProvider
from rag_chunker.types import Chunk, EmbeddingInput, HierarchicalChunks, IndexPoint
from rag_chunker.utils import (
    format_child_text,
    format_multi_scale_text,
    format_parent_text,
    prepare_embedding_input,
    utf8_len,
)

if TYPE_CHECKING:
    from rag_chunker.config import ChunkerConfig

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 32


def group_by_collection(points: Sequence[IndexPoint]) -> dict[str, list[IndexPoint]]:
    """Group points by collection, keeping input order inside each group."""
    groups: dict[str, list[IndexPoint]] = {}
    for point in points:
        groups.setdefault(point.collection, []).append(point)
    return groups


class ChunkIndexer:
    """
    Embeds chunks and builds index points with payloads.

    Usage:
        indexer = ChunkIndexer(provider, source="guide.md", collection="docs")
        points = await indexer.index_hierarchical(segment_document(text))
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        config: "ChunkerConfig | None" = None,
        *,
        source: str,
        collection: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if config is None:
            from rag_chunker.config import ChunkerConfig
            config = ChunkerConfig()
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.embeddings = embedding_provider
        self.config = config
        self.source = source
        self.collection = collection
        self.batch_size = batch_size

    # ------------------------------------------------------------------
    # Preparation
    # ------------------------------------------------------------------

    def _input(self, point_id: str, text: str, collection: str, payload: dict[str, Any]) -> EmbeddingInput:
        return EmbeddingInput(
            point_id=point_id,
            text=prepare_embedding_input(text, self.config.max_embedding_chars),
            collection=collection,
            payload=payload,
        )

    def prepare_hierarchical(self, result: HierarchicalChunks) -> list[EmbeddingInput]:
        """Embedding inputs for all parents followed by all children."""
        inputs = []
        for parent in result.parents:
            payload = {
                "text": parent.content,
                "source": self.source,
                "chunk_type": "parent",
                "summary": parent.summary,
                "headers": list(parent.headers),
                "child_ids": list(parent.child_ids),
                "start_line": parent.start_line,
                "end_line": parent.end_line,
                "char_count": utf8_len(parent.content),
            }
            text = format_parent_text(parent.summary, parent.content)
            inputs.append(self._input(parent.id, text, self.collection, payload))

        parents = result.parent_index()
        for child in result.children:
            index = parents.get(child.parent_id)
            parent = None if index is None else result.parents[index]
            payload = {
                "text": child.content,
                "source": self.source,
                "chunk_type": f"child_{child.chunk_type.value}",
                "parent_id": child.parent_id,
                "parent_summary": parent.summary if parent else "",
                "index_in_parent": child.index_in_parent,
                "start_line": child.start_line,
                "end_line": child.end_line,
                "char_count": utf8_len(child.content),
            }
            text = format_child_text(child.content, parent.headers if parent else None)
            inputs.append(self._input(child.id, text, self.collection, payload))
        return inputs

    def prepare_chunks(
        self,
        chunks: Sequence[Chunk],
        *,
        per_tier_collections: bool = True,
    ) -> list[EmbeddingInput]:
        """
        Embedding inputs for multi-scale or section chunks.

        Args:
            chunks: Chunks in output order
            per_tier_collections: Route each chunk to "<base>_<tier>";
                otherwise everything goes to the base collection
        """
        inputs = []
        total = len(chunks)
        for i, chunk in enumerate(chunks):
            collection = (
                f"{self.collection}_{chunk.chunk_size.value}"
                if per_tier_collections
                else self.collection
            )
            payload = {
                "text": chunk.content,
                "source": self.source,
                "chunk_index": i,
                "total_chunks": total,
                "chunk_size": chunk.chunk_size.value,
                "has_code": chunk.has_code,
                "headers": list(chunk.headers),
                "start_line": chunk.start_line,
                "end_line": chunk.end_line,
                "char_count": utf8_len(chunk.content),
            }
            text = format_multi_scale_text(chunk.content, chunk.headers, chunk.has_code)
            inputs.append(self._input(str(uuid4()), text, collection, payload))
        return inputs

    # ------------------------------------------------------------------
    # Embedding
    # ------------------------------------------------------------------

    async def embed_inputs(self, inputs: Sequence[EmbeddingInput]) -> list[IndexPoint]:
        """
        Embed prepared inputs in order and pair vectors with payloads.

        Raises:
            ValueError: If the provider returns the wrong number of vectors
            EmbeddingError: If the provider fails
        """
        if not inputs:
            return []

        vectors: list[list[float]] = []
        for start in range(0, len(inputs), self.batch_size):
            batch = [item.text for item in inputs[start:start + self.batch_size]]
            batch_vectors = await self.embeddings.embed(batch)
            self._validate_embedding_counts(batch, batch_vectors)
            vectors.extend(batch_vectors)
            logger.debug(
                f"Embedded {min(start + self.batch_size, len(inputs))}/{len(inputs)} chunks"
            )

        return [
            IndexPoint(
                id=item.point_id,
                vector=vector,
                payload=item.payload,
                collection=item.collection,
            )
            for item, vector in zip(inputs, vectors)
        ]

    def _validate_embedding_counts(self, texts: list[str], embeddings: list[list[float]]) -> None:
        """Validate that embedding count matches text count."""
        if len(embeddings) != len(texts):
            raise ValueError(
                f"embedding count mismatch: "
                f"got {len(embeddings)} embeddings for {len(texts)} chunks"
            )

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    async def index_hierarchical(self, result: HierarchicalChunks) -> list[IndexPoint]:
        """Embed parents and children of a hierarchical result."""
        points = await self.embed_inputs(self.prepare_hierarchical(result))
        logger.info(
            f"Indexed {len(result.parents)} parents and {len(result.children)} children "
            f"from {self.source} into {self.collection}"
        )
        return points

    async def index_chunks(
        self,
        chunks: Sequence[Chunk],
        *,
        per_tier_collections: bool = True,
    ) -> dict[str, list[IndexPoint]]:
        """Embed multi-scale or section chunks, grouped by collection."""
        inputs = self.prepare_chunks(chunks, per_tier_collections=per_tier_collections)
        groups = group_by_collection(await self.embed_inputs(inputs))
        for collection, points in groups.items():
            logger.info(f"Indexed {len(points)} chunks from {self.source} into {collection}")
        return groups
