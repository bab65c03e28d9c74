"""
Section Segmenter

Single-tier chunking that follows document sections: a new chunk starts at
each H1/H2 once the current one is substantial, fenced code blocks are held
aside until they close and then appended whole, and long sections are cut at
natural breaks once they reach the target size.

All chunks are tagged ``ChunkSize.MEDIUM``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rag_chunker.chunking._scan import (
    HeaderContext,
    LineBuffer,
    header_level,
    is_fence,
    is_natural_break,
)
from rag_chunker.types import Chunk, ChunkSize
from rag_chunker.utils.text import split_lines

if TYPE_CHECKING:
    from rag_chunker.config.settings import ChunkerConfig

logger = logging.getLogger(__name__)


@dataclass
class _SectionState:
    buffer: LineBuffer = field(default_factory=LineBuffer)
    code: LineBuffer = field(default_factory=LineBuffer)
    headers: HeaderContext = field(default_factory=HeaderContext)
    in_code_block: bool = False
    has_code: bool = False


def segment_sections(text: str, config: "ChunkerConfig | None" = None) -> list[Chunk]:
    """
    Split a document into section-aligned chunks.

    Args:
        text: Full document text
        config: Supplies section sizes (defaults to ``ChunkerConfig()``)

    Returns:
        Chunks in document order
    """
    if config is None:
        from rag_chunker.config.settings import ChunkerConfig

        config = ChunkerConfig()

    lines = split_lines(text)
    state = _SectionState(headers=HeaderContext(max_depth=config.max_header_depth))
    chunks: list[Chunk] = []

    def emit(end_line: int) -> None:
        chunks.append(
            Chunk(
                content=state.buffer.text,
                start_line=state.buffer.start_line,
                end_line=end_line,
                chunk_size=ChunkSize.MEDIUM,
                has_code=state.has_code,
                headers=state.headers.snapshot(),
            )
        )
        state.has_code = False

    for i, line in enumerate(lines):
        level = 0 if state.in_code_block else header_level(line)
        if level in (1, 2) and state.buffer.size > config.section_min_size:
            emit(i - 1)
            state.buffer.reset(i)
        state.headers.update(line, level)

        if is_fence(line):
            if not state.in_code_block:
                if state.buffer.size > config.code_flush_min_size:
                    emit(i - 1)
                    state.buffer.reset(i)
                state.in_code_block = True
                state.has_code = True
                state.code.reset(i)
            else:
                state.in_code_block = False
                state.code.append(line)
                state.buffer.absorb(state.code)
                continue

        if state.in_code_block:
            state.code.append(line)
        else:
            state.buffer.append(line)

        if (
            not state.in_code_block
            and state.buffer.size >= config.section_target_size
            and is_natural_break(lines, i, end_is_break=True)
        ):
            emit(i)
            state.buffer.reset(i + 1)

    if not state.buffer.is_blank() or not state.code.is_empty():
        state.buffer.absorb(state.code)
        emit(len(lines) - 1)

    logger.debug(f"Section chunking: {len(lines)} lines -> {len(chunks)} chunks")
    return chunks
