"""Tests for chunk statistics."""

from rag_chunker.chunking.stats import chunk_statistics
from rag_chunker.types import (
    Chunk,
    ChunkSize,
    ChunkType,
    ChildChunk,
    HierarchicalChunks,
    ParentChunk,
)


class TestChunkStatistics:
    """Test reporting counts and averages."""

    def test_hierarchical(self):
        result = HierarchicalChunks(
            parents=[ParentChunk(id="p", content="a" * 100, start_line=0, end_line=3)],
            children=[
                ChildChunk(
                    id=f"c{k}",
                    parent_id="p",
                    content="b" * 40,
                    start_line=k,
                    end_line=k,
                    chunk_type=chunk_type,
                    index_in_parent=k,
                )
                for k, chunk_type in enumerate([ChunkType.TEXT, ChunkType.TEXT, ChunkType.MIXED])
            ],
        )

        stats = chunk_statistics(result)

        assert stats["parents"] == 1
        assert stats["children"] == 3
        assert stats["avg_parent_chars"] == 100
        assert stats["avg_child_chars"] == 40
        assert stats["children_text"] == 2
        assert stats["children_mixed"] == 1

    def test_flat_chunks(self):
        chunks = [
            Chunk(content="x" * 10, start_line=0, end_line=0, chunk_size=ChunkSize.SMALL),
            Chunk(content="y" * 30, start_line=0, end_line=0, chunk_size=ChunkSize.SMALL, has_code=True),
            Chunk(content="z" * 20, start_line=0, end_line=0, chunk_size=ChunkSize.LARGE),
        ]

        stats = chunk_statistics(chunks)

        assert stats == {
            "chunks": 3,
            "with_code": 1,
            "avg_chars": 20,
            "large": 1,
            "small": 2,
        }

    def test_empty(self):
        assert chunk_statistics([]) == {"chunks": 0, "with_code": 0, "avg_chars": 0}
        assert chunk_statistics(HierarchicalChunks())["parents"] == 0
