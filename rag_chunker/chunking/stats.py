"""Chunk statistics for reporting."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from rag_chunker.types import Chunk, HierarchicalChunks


def _average(sizes: Sequence[int]) -> int:
    return sum(sizes) // len(sizes) if sizes else 0


def chunk_statistics(result: HierarchicalChunks | Sequence[Chunk]) -> dict[str, int]:
    """
    Count chunks and average sizes (in characters).

    Hierarchical results report parents, children and children per type;
    flat chunk lists report per-tier counts and chunks with code.
    """
    if isinstance(result, HierarchicalChunks):
        stats = {
            "parents": len(result.parents),
            "children": len(result.children),
            "avg_parent_chars": _average([len(p.content) for p in result.parents]),
            "avg_child_chars": _average([len(c.content) for c in result.children]),
        }
        types = Counter(child.chunk_type.value for child in result.children)
        for name, count in sorted(types.items()):
            stats[f"children_{name}"] = count
        return stats

    stats = {
        "chunks": len(result),
        "with_code": sum(1 for chunk in result if chunk.has_code),
        "avg_chars": _average([len(chunk.content) for chunk in result]),
    }
    tiers = Counter(chunk.chunk_size.value for chunk in result)
    for name, count in sorted(tiers.items()):
        stats[name] = count
    return stats
