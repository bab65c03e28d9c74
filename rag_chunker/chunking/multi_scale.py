"""
Multi-Scale Segmenter

Produces three independent, overlapping chunk sets (small, medium, large)
from the same document. The tiers are indexed as separate collections so a
query can be matched at several granularities.

Per tier:
    1. Track header context and fence state line by line
    2. Close a chunk once it reaches the tier's target size, no fence is
       open, and the line is a natural break (blank, before a header, or
       the last line)
    3. Seed the next chunk with the trailing ``overlap`` bytes of the one
       just closed, so a passage on the boundary appears in both

The overlap seed is cut on a character boundary and clamps to the whole
chunk when the chunk is shorter than the overlap.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rag_chunker.chunking._scan import (
    HeaderContext,
    LineBuffer,
    header_level,
    is_fence,
    is_natural_break,
)
from rag_chunker.config.profiles import ScaleTier
from rag_chunker.types import Chunk
from rag_chunker.utils.text import split_lines, tail_by_bytes

if TYPE_CHECKING:
    from rag_chunker.config.settings import ChunkerConfig

logger = logging.getLogger(__name__)


@dataclass
class _TierState:
    buffer: LineBuffer = field(default_factory=LineBuffer)
    headers: HeaderContext = field(default_factory=HeaderContext)
    in_code_block: bool = False
    has_code: bool = False
    fresh: bool = False


def segment_multi_scale(
    text: str,
    config: "ChunkerConfig | None" = None,
    *,
    tiers: Sequence[ScaleTier] | None = None,
) -> list[Chunk]:
    """
    Chunk a document once per tier.

    Args:
        text: Full document text
        config: Supplies the tiers and header depth (defaults to ``ChunkerConfig()``)
        tiers: Explicit tiers, overriding the config

    Returns:
        Chunks of all tiers, grouped by tier in the order given
    """
    if config is None:
        from rag_chunker.config.settings import ChunkerConfig

        config = ChunkerConfig()

    lines = split_lines(text)
    chunks: list[Chunk] = []
    for tier in tiers if tiers is not None else config.tiers():
        tier_chunks = segment_tier(lines, tier, max_header_depth=config.max_header_depth)
        logger.debug(f"{tier.size.value}: {len(tier_chunks)} chunks")
        chunks.extend(tier_chunks)
    return chunks


def segment_tier(lines: list[str], tier: ScaleTier, *, max_header_depth: int = 3) -> list[Chunk]:
    """Overlapping chunks of a pre-split document for a single tier."""
    state = _TierState(headers=HeaderContext(max_depth=max_header_depth))
    chunks: list[Chunk] = []

    def emit(end_line: int) -> None:
        chunks.append(
            Chunk(
                content=state.buffer.text,
                start_line=state.buffer.start_line,
                end_line=end_line,
                chunk_size=tier.size,
                has_code=state.has_code,
                headers=state.headers.snapshot(),
            )
        )

    for i, line in enumerate(lines):
        if not state.in_code_block:
            state.headers.update(line, header_level(line))

        if is_fence(line):
            state.in_code_block = not state.in_code_block
            if state.in_code_block:
                state.has_code = True

        state.buffer.append(line)
        state.fresh = True

        if (
            state.buffer.size >= tier.target_size
            and not state.in_code_block
            and is_natural_break(lines, i, end_is_break=True)
        ):
            emit(i)
            seed = tail_by_bytes(state.buffer.text, tier.overlap)
            # The seed ends with a newline, so it spans the last count("\n") lines
            state.buffer.reset(i + 1 - seed.count("\n"), seed)
            state.has_code = state.in_code_block
            state.fresh = False

    if state.fresh and not state.buffer.is_blank():
        emit(len(lines) - 1)

    return chunks
