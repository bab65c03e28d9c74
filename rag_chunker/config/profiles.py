"""
Chunking Profiles

Named threshold sets for hierarchical chunking, and the multi-scale tiers.

Two threshold revisions exist for hierarchical chunking. ``compact`` keeps
every child well under the ~2000 character limit of small local embedding
models; ``extended`` produces larger sections for models with a bigger
context window:
    >>> config = ChunkerConfig.from_profile("extended")
    >>> # child_target_size=1600, parent_target_size=4000, min_parent_size=2000
"""

from __future__ import annotations

from dataclasses import dataclass

from rag_chunker.types import ChunkSize

DEFAULT_PROFILE = "compact"

# Hierarchical thresholds, all in UTF-8 bytes
HIERARCHICAL_PROFILES = {
    "compact": {
        "child_target_size": 1200,
        "parent_target_size": 1800,
        "min_parent_size": 800,
    },
    "extended": {
        "child_target_size": 1600,
        "parent_target_size": 4000,
        "min_parent_size": 2000,
    },
}


@dataclass(frozen=True)
class ScaleTier:
    """Target size and overlap (both UTF-8 bytes) for one multi-scale tier."""

    size: ChunkSize
    target_size: int
    overlap: int

    def __post_init__(self) -> None:
        if self.target_size <= 0:
            raise ValueError(f"{self.size.value} tier target_size must be positive")
        if not 0 <= self.overlap < self.target_size:
            raise ValueError(
                f"{self.size.value} tier overlap ({self.overlap}) must be in "
                f"[0, target_size={self.target_size})"
            )
