"""
Text Processing Utilities

Character- and byte-aware helpers shared by the segmenters.

Size thresholds are measured in UTF-8 bytes while excerpts are measured in
characters, so both views are provided here.
"""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """
    Split a document into lines on ``\\n``.

    A trailing newline does not produce an extra empty line, and a trailing
    ``\\r`` is dropped from each line. Other unicode line separators are
    kept as ordinary characters.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def utf8_len(text: str) -> int:
    """Length of ``text`` in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def safe_truncate(text: str, max_chars: int) -> str:
    """
    Return the longest prefix of ``text`` with at most ``max_chars`` characters.

    Args:
        text: Input text
        max_chars: Maximum number of characters (code points) to keep

    Returns:
        ``text`` unchanged if it is short enough, otherwise its prefix
    """
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def tail_by_bytes(text: str, max_bytes: int) -> str:
    """
    Return the longest suffix of ``text`` whose UTF-8 size is <= ``max_bytes``.

    The suffix always starts on a character boundary, so a multi-byte
    character straddling the cut is dropped rather than split. Returns ``""``
    when ``max_bytes`` is not positive.
    """
    if max_bytes <= 0 or not text:
        return ""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text

    start = len(encoded) - max_bytes
    # Skip UTF-8 continuation bytes (10xxxxxx) to land on a character start
    while start < len(encoded) and (encoded[start] & 0xC0) == 0x80:
        start += 1
    return encoded[start:].decode("utf-8")
