"""
Helpers for deterministic embedding input text formatting.

Small embedding models (nomic-embed-text in particular) degrade or fail on
decorative unicode such as box drawing and emoji, so every text sent for
embedding is sanitized to ASCII equivalents and capped in length first.
Keeping the formats here ensures parents, children and multi-scale chunks
are embedded with the same text representation everywhere.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from rag_chunker.utils.text import safe_truncate

DEFAULT_MAX_EMBEDDING_CHARS = 2000


def _build_translation_table() -> dict[int, str]:
    table: dict[int, str] = {}

    def assign(chars: str, replacement: str) -> None:
        for ch in chars:
            table[ord(ch)] = replacement

    # Box drawing: straight and dashed lines
    assign("═─━╌╍┄┅┈┉", "-")
    assign("│┃║╎╏┆┇┊┋", "|")
    # Box drawing: corners, tees and crosses (light, heavy, double, rounded)
    for code in range(0x250C, 0x254C):
        table[code] = "+"
    for code in range(0x2552, 0x2571):
        table[code] = "+"

    # Block elements
    assign("█▓▒░▀▄▌▐", "*")

    # Arrows
    assign("→⇒➔➜➝➞", ">")
    assign("←⇐", "<")
    assign("↑⇑", "^")
    assign("↓⇓", "v")

    # Check marks, crosses, stars
    assign("✓✔☑", "Y")
    assign("✗✘☒", "X")
    assign("★☆⭐", "*")

    # Bullets
    assign("•◦‣⁃", "-")

    # Smart quotes
    assign("‘’‚‛", "'")
    assign("“”„‟", '"')

    # Dashes and ellipsis
    assign("–—―", "-")
    assign("…", ".")

    # Status/UI emoji become a space so neighbouring words stay apart
    assign(
        "\U0001f50d\U0001f4e6\U0001f3af✅❌⚠\U0001f4ad\U0001f4c4"
        "\U0001f4ca\U0001f4da\U0001f680\U0001f4a1⏳✨\U0001f5a5\U0001f528"
        "\U0001f527\U0001f3f7\U0001f504▶\U0001f501\U0001f5d1\U0001f4dc⚙"
        "\U0001f3e5\U0001f9ee\U0001f4e4\U0001f6d1",
        " ",
    )
    return table


_EMBEDDING_TRANSLATION = _build_translation_table()
_SPACE_RUN = re.compile(r" {2,}")


def sanitize_for_embedding(text: str) -> str:
    """
    Replace decorative unicode with ASCII equivalents.

    Box drawing, block shading, arrows, check marks, bullets, smart quotes,
    long dashes and the ellipsis glyph map to ASCII; status emoji map to a
    single space. Runs of spaces are collapsed. Everything else is kept.

    Args:
        text: Arbitrary text

    Returns:
        New sanitized string
    """
    return _SPACE_RUN.sub(" ", text.translate(_EMBEDDING_TRANSLATION))


def prepare_embedding_input(
    text: str,
    max_chars: int = DEFAULT_MAX_EMBEDDING_CHARS,
) -> str:
    """Sanitize ``text`` and cap it at ``max_chars`` characters."""
    return safe_truncate(sanitize_for_embedding(text), max_chars)


def format_parent_text(summary: str, content: str) -> str:
    """Embedding text for a parent chunk: summary first, then the content."""
    return f"{summary}\n\n{content}"


def format_child_text(content: str, parent_headers: Sequence[str] | None) -> str:
    """
    Embedding text for a child chunk.

    The owning parent's header breadcrumb is prefixed when the parent is
    known; otherwise the child content is used alone.
    """
    if parent_headers is None:
        return content
    return f"{' > '.join(parent_headers)}\n\n{content}"


def format_multi_scale_text(content: str, headers: Sequence[str], has_code: bool) -> str:
    """Embedding text for a multi-scale chunk; code chunks carry their headers."""
    if has_code and headers:
        return "\n".join(headers) + f"\n\n{content}"
    return content
