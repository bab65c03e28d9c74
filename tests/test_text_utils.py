"""Tests for line splitting, byte sizing and unicode-safe truncation."""

import pytest

from rag_chunker.utils.text import safe_truncate, split_lines, tail_by_bytes, utf8_len


class TestSplitLines:
    """Test document line splitting."""

    def test_empty_text(self):
        """Empty text has no lines."""
        assert split_lines("") == []

    def test_trailing_newline_adds_no_line(self):
        """A final newline does not produce an empty last line."""
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_without_trailing_newline(self):
        """Text without a final newline keeps its last line."""
        assert split_lines("a\nb") == ["a", "b"]

    def test_blank_lines_kept(self):
        """Interior blank lines are preserved."""
        assert split_lines("a\n\n\nb\n") == ["a", "", "", "b"]

    def test_carriage_returns_dropped(self):
        """CRLF line endings lose their carriage return."""
        assert split_lines("a\r\nb\r\n") == ["a", "b"]


class TestUtf8Len:
    """Test UTF-8 byte length."""

    def test_ascii(self):
        assert utf8_len("abc") == 3

    def test_multibyte(self):
        """2-, 3- and 4-byte characters are counted in bytes."""
        assert utf8_len("é") == 2
        assert utf8_len("日") == 3
        assert utf8_len("😀") == 4


class TestSafeTruncate:
    """Test character-based truncation."""

    SAMPLES = ["", "hello", "héllo wörld", "日本語のテキスト", "emoji 😀😃😄 end", "a😀b日c"]

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("limit", [0, 1, 2, 3, 5, 8, 100])
    def test_prefix_within_limit(self, text, limit):
        """Result is a prefix of at most ``limit`` characters."""
        result = safe_truncate(text, limit)
        assert len(result) <= limit
        assert text.startswith(result)
        # Always valid UTF-8
        result.encode("utf-8")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_short_text_unchanged(self, text):
        """Text within the limit is returned as-is."""
        assert safe_truncate(text, len(text)) == text
        assert safe_truncate(text, len(text) + 10) == text

    def test_counts_characters_not_bytes(self):
        """Multi-byte characters count once each."""
        assert safe_truncate("日本語", 2) == "日本"
        assert safe_truncate("héllo", 2) == "hé"

    def test_non_positive_limit(self):
        """Zero or negative limits give an empty string."""
        assert safe_truncate("abc", 0) == ""
        assert safe_truncate("abc", -1) == ""


class TestTailByBytes:
    """Test byte-bounded suffixes."""

    def test_whole_text_when_short(self):
        assert tail_by_bytes("abc", 10) == "abc"

    def test_exact_cut(self):
        assert tail_by_bytes("abcdef", 3) == "def"

    def test_non_positive_limit(self):
        assert tail_by_bytes("abc", 0) == ""
        assert tail_by_bytes("", 5) == ""

    def test_never_splits_a_character(self):
        """A character straddling the cut is dropped."""
        assert tail_by_bytes("héllo", 4) == "llo"
        assert tail_by_bytes("😀x", 3) == "x"

    @pytest.mark.parametrize("limit", range(1, 12))
    def test_suffix_within_limit(self, limit):
        """Result is a suffix whose UTF-8 size fits the limit."""
        text = "a😀b日cé"
        result = tail_by_bytes(text, limit)
        assert text.endswith(result)
        assert utf8_len(result) <= limit
