"""Tests for hierarchical parent/child segmentation."""

import itertools

import pytest

from rag_chunker.chunking._scan import is_fence
from rag_chunker.chunking.parents import segment_document
from rag_chunker.config import ChunkerConfig
from rag_chunker.types import ChunkType
from rag_chunker.utils.text import split_lines, utf8_len


def _ids():
    counter = itertools.count()
    return lambda: f"id-{next(counter)}"


def _fence_count(text: str) -> int:
    return sum(1 for line in text.split("\n") if is_fence(line))


def _document(sections: int = 6) -> str:
    """A realistic handbook with headers, prose, lists and code."""
    parts = ["# Handbook", ""]
    for s in range(sections):
        parts += [f"## Section {s}", ""]
        for p in range(4):
            parts += [f"Paragraph {s}.{p} " + "lorem ipsum " * 25, ""]
        parts += ["### Example", "", "```python", "# configure the client"]
        parts += [f"value_{k} = {k}" for k in range(40)]
        if s == 2:
            # Long block with blank lines that must not become split points
            for k in range(120):
                parts += [f"    step_{k}()", "" if k % 10 == 0 else "    # ..."]
        parts += ["", "print('done')", "```", ""]
        parts += ["- item one", "- item two", "1. step", ""]
    return "\n".join(parts) + "\n"


@pytest.fixture
def config(monkeypatch):
    for name in ("RAG_CHUNKER_PROFILE", "RAG_CHUNKER_CHILD_TARGET_SIZE",
                 "RAG_CHUNKER_PARENT_TARGET_SIZE", "RAG_CHUNKER_MIN_PARENT_SIZE"):
        monkeypatch.delenv(name, raising=False)
    return ChunkerConfig()


class TestScenarios:
    """Test small documents with known output."""

    def test_title_and_short_content(self, config):
        """A tiny document yields one parent with one child."""
        result = segment_document("# Title\n\nShort content.\n", config, id_factory=_ids())

        assert len(result.parents) == 1
        assert len(result.children) == 1
        parent, child = result.parents[0], result.children[0]
        assert parent.headers == ["# Title"]
        assert parent.summary == "# Title"
        assert (parent.start_line, parent.end_line) == (0, 2)
        assert child.content.endswith("Short content.\n")
        assert child.content.strip().endswith("Short content.")
        assert child.index_in_parent == 0
        assert parent.child_ids == [child.id]

    def test_document_is_one_unterminated_fence(self, config):
        """A fence left open to the end folds everything into one code child."""
        body = "\n".join(f"x_{k} = {k}" for k in range(10))
        text = "```\n" + body + "\n"

        result = segment_document(text, config, id_factory=_ids())

        assert len(result.parents) == 1
        assert result.parents[0].end_line == 10
        last = result.children[-1]
        assert last.chunk_type in (ChunkType.CODE, ChunkType.MIXED)
        assert last.end_line == 10
        assert last.content.startswith("```\n")

    def test_prose_then_unterminated_fence(self, config):
        """Prose is flushed on its own and the open fence runs to the last line."""
        body = "\n".join(f"x_{k} = {k}" for k in range(300))
        text = f"# A\n\n{'prose ' * 80}\n\n```\n{body}\n"
        last_line = len(split_lines(text)) - 1

        result = segment_document(text, config, id_factory=_ids())

        assert last_line == 304
        assert len(result.parents) == 1
        assert result.parents[0].end_line == last_line
        first, last = result.children[0], result.children[-1]
        assert "```" not in first.content
        assert last.chunk_type in (ChunkType.CODE, ChunkType.MIXED)
        assert last.end_line == last_line
        assert last.content.rstrip().endswith("x_299 = 299")

    def test_three_padded_sections(self, config):
        """Sections over the minimum size each become a parent."""
        paragraph = "x" * 450
        parts = []
        for k in range(3):
            parts += [f"## Section {k}", paragraph, "", paragraph, ""]
        text = "\n".join(parts) + "\n"

        result = segment_document(text, config, id_factory=_ids())

        assert len(result.parents) >= 3
        assert all(parent.headers for parent in result.parents)
        assert [p.headers for p in result.parents[:3]] == [
            ["## Section 0"],
            ["## Section 1"],
            ["## Section 2"],
        ]

    def test_empty_document(self, config):
        result = segment_document("", config)
        assert result.parents == []
        assert result.children == []

    def test_blank_document(self, config):
        result = segment_document("\n\n  \n", config)
        assert result.parents == []


class TestHeaderHandling:
    """Test header-driven parent boundaries."""

    def test_h1_always_closes(self, config):
        result = segment_document("# A\nshort\n# B\nshort\n", config)

        assert [p.headers for p in result.parents] == [["# A"], ["# B"]]
        assert result.parents[0].content == "# A\nshort\n"
        assert result.parents[0].end_line == 1
        assert result.parents[1].start_line == 2

    def test_h2_below_minimum_does_not_close(self, config):
        result = segment_document("## A\nshort\n## B\nshort\n", config)

        assert len(result.parents) == 1
        assert result.parents[0].headers == ["## B"]

    def test_header_depth_capped(self, config):
        text = "# A\n## B\n### C\n#### D\n##### E\ntext\n"

        result = segment_document(text, config)

        assert result.parents[0].headers == ["## B", "### C", "#### D"]

    def test_headers_inside_code_ignored(self, config):
        """A '#' comment inside a fence never closes a parent."""
        intro = "intro text " * 80
        text = f"# Doc\n\n{intro}\n\n```python\n# not a header\nprint(1)\n```\n"

        result = segment_document(text, config)

        assert len(result.parents) == 1
        assert result.parents[0].headers == ["# Doc"]

    def test_hashtag_is_not_header(self, config):
        result = segment_document("# A\ntext\n#tag line\n", config)
        assert len(result.parents) == 1


class TestSizeSplitting:
    """Test splitting of oversized sections."""

    def test_split_at_blank_lines(self, config):
        paragraph = "y" * 199
        lines = ["# Guide", ""]
        for _ in range(30):
            lines += [paragraph, ""]
        text = "\n".join(lines) + "\n"
        doc_lines = split_lines(text)

        result = segment_document(text, config, id_factory=_ids())

        assert len(result.parents) > 1
        for parent in result.parents[:-1]:
            assert doc_lines[parent.end_line] == ""
            assert utf8_len(parent.content) < config.parent_target_size + 250
        for prev, nxt in zip(result.parents, result.parents[1:]):
            assert nxt.start_line == prev.end_line + 1
        assert result.parents[0].start_line == 0
        assert result.parents[-1].end_line == len(doc_lines) - 1

    def test_split_keeps_header_context(self, config):
        lines = ["# Guide", "## Setup", ""]
        for _ in range(30):
            lines += ["z" * 199, ""]

        result = segment_document("\n".join(lines) + "\n", config)

        assert len(result.parents) > 1
        for parent in result.parents:
            assert parent.headers == ["## Setup"]

    def test_split_waits_for_fence_to_close(self, config):
        code = [f"line_{k} = {k}  # padding padding" for k in range(100)]
        text = "\n".join(["# Code", "", "```", *code, "", *code, "```", "", "after"]) + "\n"

        result = segment_document(text, config)

        for parent in result.parents:
            assert _fence_count(parent.content) % 2 == 0
        assert "```" in result.parents[0].content

    def test_single_oversized_line(self, config):
        """A line longer than the target still forms a parent."""
        text = "w" * 5000 + "\nnext\n"

        result = segment_document(text, config)

        assert result.parents[0].content == "w" * 5000
        assert result.parents[0].end_line == 0
        assert result.parents[1].start_line == 1


class TestProperties:
    """Structural invariants over a realistic document."""

    @pytest.fixture
    def result(self, config):
        return segment_document(_document(), config, id_factory=_ids())

    def test_child_ids_partition_children(self, result):
        listed = [cid for parent in result.parents for cid in parent.child_ids]
        emitted = [child.id for child in result.children]

        assert len(listed) == len(set(listed))
        assert set(listed) == set(emitted)
        parent_ids = {parent.id for parent in result.parents}
        assert all(child.parent_id in parent_ids for child in result.children)

    def test_index_in_parent_contiguous(self, result):
        for parent in result.parents:
            kids = result.children_of(parent)
            assert [kid.index_in_parent for kid in kids] == list(range(len(kids)))
            assert all(kid.parent_id == parent.id for kid in kids)

    def test_fences_balanced_in_children(self, result):
        for child in result.children:
            assert _fence_count(child.content) % 2 == 0, child.content

    def test_code_children_hold_whole_blocks(self, result):
        code_children = [
            c for c in result.children if c.chunk_type in (ChunkType.CODE, ChunkType.MIXED)
        ]
        assert code_children
        for child in code_children:
            assert child.content.count("```") >= 2

    def test_child_ranges_inside_parent(self, result):
        for child in result.children:
            parent = result.get_parent(child.parent_id)
            assert parent is not None
            assert parent.start_line <= child.start_line <= child.end_line <= parent.end_line

    def test_parents_cover_document(self, result):
        doc_lines = split_lines(_document())
        covered = sorted(
            line for p in result.parents for line in range(p.start_line, p.end_line + 1)
        )
        assert covered == list(range(len(doc_lines)))

    def test_every_parent_has_headers(self, result):
        assert all(parent.headers for parent in result.parents)

    def test_extended_profile_makes_larger_parents(self, config):
        compact = segment_document(_document(), config)
        extended = segment_document(_document(), ChunkerConfig.from_profile("extended"))

        assert len(extended.parents) < len(compact.parents)

    def test_default_ids_are_unique(self, config):
        result = segment_document(_document(), config)
        ids = [p.id for p in result.parents] + [c.id for c in result.children]
        assert len(ids) == len(set(ids))
