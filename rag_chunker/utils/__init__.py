"""
Utility Functions

Helper functions used throughout the package.

Modules:
    text: Line splitting, unicode-safe truncation and UTF-8 byte helpers
    embedding_text: Sanitization and formatting of embedding inputs
"""

from rag_chunker.utils.embedding_text import (
    format_child_text,
    format_multi_scale_text,
    format_parent_text,
    prepare_embedding_input,
    sanitize_for_embedding,
)
from rag_chunker.utils.text import safe_truncate, split_lines, tail_by_bytes, utf8_len

__all__ = [
    "safe_truncate",
    "split_lines",
    "tail_by_bytes",
    "utf8_len",
    "sanitize_for_embedding",
    "prepare_embedding_input",
    "format_parent_text",
    "format_child_text",
    "format_multi_scale_text",
]
