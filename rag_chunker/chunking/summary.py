"""
Chunk Summaries

Short descriptor for a chunk: header breadcrumb plus an excerpt of the first
substantial line, e.g. ``"# Guide > ## Setup | Install the package with..."``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rag_chunker.utils.text import safe_truncate, split_lines

HEADER_SEPARATOR = " > "
EXCERPT_SEPARATOR = " | "


def create_summary(
    content: str,
    headers: Sequence[str],
    *,
    min_line_chars: int = 50,
    max_excerpt_chars: int = 200,
) -> str:
    """
    Build the summary for a chunk.

    The excerpt is the first line that is not a header, is non-blank and is
    longer than ``min_line_chars`` characters. It is cut to
    ``max_excerpt_chars`` characters with ``...`` appended when cut.

    Args:
        content: Chunk text
        headers: Header context, most significant first
        min_line_chars: Lines this short or shorter are skipped
        max_excerpt_chars: Character cap for the excerpt

    Returns:
        Joined headers, followed by ``" | excerpt"`` when a line qualifies
    """
    summary = HEADER_SEPARATOR.join(headers)

    for line in split_lines(content):
        if line.startswith("#") or not line.strip() or len(line) <= min_line_chars:
            continue
        excerpt = safe_truncate(line, max_excerpt_chars)
        if len(line) > max_excerpt_chars:
            excerpt += "..."
        return f"{summary}{EXCERPT_SEPARATOR}{excerpt}"

    return summary
