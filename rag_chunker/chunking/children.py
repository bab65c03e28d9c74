"""
Child Segmenter

Splits one parent's content into small, typed child chunks.

Algorithm:
    1. Walk the parent's lines, toggling an in-code-block flag on fence lines
    2. Before a fence opens, flush pending prose if it is already substantial
    3. Classify prose lines (header / list / text) to guess the chunk type
    4. Once the buffer reaches the target size, flush at the next natural
       break (blank line, or the line before a header)
    5. Flush whatever remains at the end of the span

Flushes only ever happen while no fence is open, so a fenced block always
opens and closes inside a single child. A fence that never closes keeps the
child open until the end of the span.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from rag_chunker.chunking._scan import (
    LineBuffer,
    is_fence,
    is_header,
    is_list_item,
    is_natural_break,
)
from rag_chunker.types import ChildChunk, ChunkType
from rag_chunker.utils.text import split_lines

logger = logging.getLogger(__name__)

DEFAULT_CHILD_TARGET_SIZE = 1200
DEFAULT_CODE_FLUSH_MIN_SIZE = 300


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class _ChildState:
    """Scanner state: prose vs code mode, running type guess, pending buffer."""

    buffer: LineBuffer = field(default_factory=LineBuffer)
    in_code_block: bool = False
    chunk_type: ChunkType = ChunkType.TEXT
    has_code: bool = False

    def emitted_type(self) -> ChunkType:
        return ChunkType.MIXED if self.has_code else self.chunk_type


def segment_children(
    content: str,
    parent_id: str,
    parent_start_line: int,
    *,
    target_size: int = DEFAULT_CHILD_TARGET_SIZE,
    code_flush_min_size: int = DEFAULT_CODE_FLUSH_MIN_SIZE,
    id_factory: Callable[[], str] | None = None,
) -> list[ChildChunk]:
    """
    Split a parent's content into sequentially indexed child chunks.

    Args:
        content: The parent's text
        parent_id: Id of the owning parent (stored as a back-reference)
        parent_start_line: Line of the original document the content starts at
        target_size: Size in UTF-8 bytes at which a child may be flushed
        code_flush_min_size: Pending prose larger than this is flushed before a fence
        id_factory: Optional id generator (defaults to uuid4 strings)

    Returns:
        Children in emission order, ``index_in_parent`` counting from 0
    """
    make_id = id_factory or _new_id
    lines = split_lines(content)
    state = _ChildState()
    children: list[ChildChunk] = []

    def flush(end_line: int) -> None:
        children.append(
            ChildChunk(
                id=make_id(),
                parent_id=parent_id,
                content=state.buffer.text,
                start_line=parent_start_line + state.buffer.start_line,
                end_line=parent_start_line + end_line,
                chunk_type=state.emitted_type(),
                index_in_parent=len(children),
            )
        )

    for i, line in enumerate(lines):
        if is_fence(line):
            if not state.in_code_block:
                if state.buffer.size > code_flush_min_size:
                    flush(i - 1)
                    state.buffer.reset(i)
                    state.has_code = False
                state.in_code_block = True
                state.chunk_type = ChunkType.CODE
            else:
                state.in_code_block = False
                state.has_code = True

        if not state.in_code_block:
            if is_header(line):
                state.chunk_type = ChunkType.HEADER
            elif is_list_item(line):
                state.chunk_type = ChunkType.LIST
            elif state.chunk_type == ChunkType.CODE:
                state.chunk_type = ChunkType.TEXT

        state.buffer.append(line)

        if (
            not state.in_code_block
            and state.buffer.size >= target_size
            and is_natural_break(lines, i)
        ):
            flush(i)
            state.buffer.reset(i + 1)
            state.chunk_type = ChunkType.TEXT
            state.has_code = False

    if not state.buffer.is_blank():
        flush(len(lines) - 1)

    logger.debug(f"Parent {parent_id}: {len(lines)} lines -> {len(children)} children")
    return children
