"""
Line Scanner Primitives

Shared building blocks for the line-by-line segmenters: fence and header
detection, the header-context stack, natural-break tests and the byte-sized
line buffer every segmenter accumulates into.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rag_chunker.utils.text import utf8_len

FENCE_TOKEN = "```"

_HEADER_PATTERN = re.compile(r"^(#{1,6})(?:\s|$)")
_LIST_PATTERN = re.compile(r"^(?:[-*+]|\d+[.)])(?:\s|$)")


def is_fence(line: str) -> bool:
    """A fence line opens or closes a verbatim code block."""
    return line.strip().startswith(FENCE_TOKEN)


def header_level(line: str) -> int:
    """ATX header level of ``line`` (1-6), or 0 if it is not a header."""
    match = _HEADER_PATTERN.match(line)
    return len(match.group(1)) if match else 0


def is_header(line: str) -> bool:
    return header_level(line) > 0


def is_blank(line: str) -> bool:
    return not line.strip()


def is_list_item(line: str) -> bool:
    """Bullet (``-``, ``*``, ``+``) or ordered (``1.``, ``1)``) list item."""
    return _LIST_PATTERN.match(line.strip()) is not None


def is_natural_break(lines: list[str], i: int, *, end_is_break: bool = False) -> bool:
    """
    Whether a chunk may end after line ``i``.

    A natural break is a blank line, or a line whose successor is a header.
    With ``end_is_break`` the last line of the document also counts.
    """
    if is_blank(lines[i]):
        return True
    if i + 1 < len(lines):
        return is_header(lines[i + 1])
    return end_is_break


@dataclass
class HeaderContext:
    """
    Header breadcrumb for the current position.

    H1 and H2 replace the whole stack; deeper headers are appended while
    fewer than ``max_depth`` entries are held.
    """

    max_depth: int = 3
    headers: list[str] = field(default_factory=list)

    def update(self, line: str, level: int) -> None:
        if level <= 0:
            return
        if level <= 2:
            self.headers = [line]
        elif len(self.headers) < self.max_depth:
            self.headers.append(line)

    def snapshot(self) -> list[str]:
        return list(self.headers)


@dataclass
class LineBuffer:
    """Accumulated lines plus their size in UTF-8 bytes (newlines included)."""

    start_line: int = 0
    size: int = 0
    parts: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.parts)

    def append(self, line: str) -> None:
        self.parts.append(line + "\n")
        self.size += utf8_len(line) + 1

    def absorb(self, other: "LineBuffer") -> None:
        """Move the contents of ``other`` onto the end of this buffer."""
        self.parts.extend(other.parts)
        self.size += other.size
        other.reset(other.start_line)

    def reset(self, start_line: int, seed: str = "") -> None:
        self.start_line = start_line
        self.parts = [seed] if seed else []
        self.size = utf8_len(seed)

    def is_empty(self) -> bool:
        return self.size == 0

    def is_blank(self) -> bool:
        return all(not part.strip() for part in self.parts)
