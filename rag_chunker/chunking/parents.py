"""
Parent Segmenter

Hierarchical parent/child chunking for Markdown documents.

Parents are section-scoped spans (~1000 tokens) that give an LLM enough
context; children (~400 tokens) are carved out of each parent for precise
matching. Each child stores its parent's id, and each parent lists its
children's ids in order.

Algorithm:
    1. Walk the document line by line, accumulating a parent buffer
    2. H1 closes a non-blank buffer; H2 closes it once it exceeds the
       minimum parent size. Both reset the header context
    3. H3 and deeper headers extend the header context (up to 3 entries)
    4. When the buffer reaches the parent target size, close at the last
       blank line within the lookback window (or the current line) and
       resume scanning right after it
    5. Close whatever is left at the end of the document
    6. Every closed parent runs the child segmenter over its content

Lines inside a fenced code block are never treated as headers, and size
splits wait for open fences to close.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rag_chunker.chunking._scan import HeaderContext, LineBuffer, header_level, is_blank, is_fence
from rag_chunker.chunking.children import segment_children
from rag_chunker.chunking.summary import create_summary
from rag_chunker.types import ChildChunk, ChunkType, HierarchicalChunks, ParentChunk
from rag_chunker.utils.text import split_lines

if TYPE_CHECKING:
    from rag_chunker.config.settings import ChunkerConfig

logger = logging.getLogger(__name__)


@dataclass
class _ParentState:
    """Running accumulator threaded through the scan."""

    buffer: LineBuffer = field(default_factory=LineBuffer)
    headers: HeaderContext = field(default_factory=HeaderContext)
    in_code_block: bool = False


@dataclass(frozen=True)
class _LineMark:
    """Scanner state right after a line was consumed."""

    in_code_block: bool
    headers: tuple[str, ...]


def segment_document(
    text: str,
    config: "ChunkerConfig | None" = None,
    *,
    id_factory: Callable[[], str] | None = None,
) -> HierarchicalChunks:
    """
    Split a Markdown document into parent chunks and their children.

    Args:
        text: Full document text
        config: Thresholds to use (defaults to ``ChunkerConfig()``)
        id_factory: Optional id generator (defaults to uuid4 strings)

    Returns:
        HierarchicalChunks with parents in document order and all children
        in the order they were emitted
    """
    if config is None:
        from rag_chunker.config.settings import ChunkerConfig

        config = ChunkerConfig()

    make_id = id_factory or (lambda: str(uuid.uuid4()))
    lines = split_lines(text)
    state = _ParentState(headers=HeaderContext(max_depth=config.max_header_depth))
    marks: list[_LineMark] = []
    parents: list[ParentChunk] = []
    children: list[ChildChunk] = []

    def close(start: int, end: int, content: str, headers: list[str]) -> None:
        parent_id = make_id()
        kids = segment_children(
            content,
            parent_id,
            start,
            target_size=config.child_target_size,
            code_flush_min_size=config.code_flush_min_size,
            id_factory=make_id,
        )
        parents.append(
            ParentChunk(
                id=parent_id,
                content=content,
                start_line=start,
                end_line=end,
                headers=headers,
                child_ids=[kid.id for kid in kids],
                summary=create_summary(
                    content,
                    headers,
                    min_line_chars=config.summary_min_line_chars,
                    max_excerpt_chars=config.summary_max_chars,
                ),
            )
        )
        children.extend(kids)

    def find_break(i: int) -> int:
        start = state.buffer.start_line
        lower = max(start + 1, i - config.natural_break_lookback)
        for j in range(i, lower - 1, -1):
            if (
                is_blank(lines[j])
                and not marks[j].in_code_block
                and any(not is_blank(prior) for prior in lines[start:j])
            ):
                return j
        return i

    i = 0
    while i < len(lines):
        line = lines[i]
        level = 0 if state.in_code_block else header_level(line)

        if level in (1, 2) and not state.buffer.is_blank():
            if level == 1 or state.buffer.size > config.min_parent_size:
                close(state.buffer.start_line, i - 1, state.buffer.text, state.headers.snapshot())
                state.buffer.reset(i)
        state.headers.update(line, level)

        if is_fence(line):
            state.in_code_block = not state.in_code_block

        state.buffer.append(line)
        mark = _LineMark(state.in_code_block, tuple(state.headers.headers))
        if i < len(marks):
            marks[i] = mark
        else:
            marks.append(mark)

        if not state.in_code_block and state.buffer.size >= config.parent_target_size:
            start = state.buffer.start_line
            break_point = find_break(i)
            headers = list(marks[break_point].headers)
            close(start, break_point, "\n".join(lines[start : break_point + 1]), headers)

            # Rewind to the state after the break; lines past it are scanned again
            state.in_code_block = False
            state.headers.headers = headers.copy()
            state.buffer.reset(break_point + 1)
            i = break_point + 1
            continue

        i += 1

    if not state.buffer.is_blank():
        close(state.buffer.start_line, len(lines) - 1, state.buffer.text, state.headers.snapshot())

    _log_summary(parents, children)
    return HierarchicalChunks(parents=parents, children=children)


def _log_summary(parents: list[ParentChunk], children: list[ChildChunk]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    avg_parent = sum(len(p.content) for p in parents) // max(len(parents), 1)
    avg_child = sum(len(c.content) for c in children) // max(len(children), 1)
    code = sum(1 for c in children if c.chunk_type == ChunkType.CODE)
    mixed = sum(1 for c in children if c.chunk_type == ChunkType.MIXED)
    logger.debug(
        f"Created {len(parents)} parents (avg {avg_parent} chars) and "
        f"{len(children)} children (avg {avg_child} chars); "
        f"code={code}, mixed={mixed}"
    )
