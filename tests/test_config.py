"""Tests for ChunkerConfig."""

import pytest

from rag_chunker.config import ChunkerConfig, ScaleTier
from rag_chunker.types import ChunkSize


class TestDefaults:
    """Test built-in defaults."""

    def test_hierarchical_defaults(self):
        config = ChunkerConfig()
        assert config.child_target_size == 1200
        assert config.parent_target_size == 1800
        assert config.min_parent_size == 800
        assert config.max_header_depth == 3

    def test_embedding_defaults(self):
        config = ChunkerConfig()
        assert config.embedding_provider == "ollama"
        assert config.embedding_model == "nomic-embed-text"
        assert config.max_embedding_chars == 2000
        assert config.embedding_max_attempts == 5
        assert config.embedding_base_delay == 0.5

    def test_default_tiers(self):
        assert ChunkerConfig().tiers() == [
            ScaleTier(ChunkSize.SMALL, 1000, 200),
            ScaleTier(ChunkSize.MEDIUM, 3000, 500),
            ScaleTier(ChunkSize.LARGE, 6000, 1000),
        ]


class TestOverrides:
    """Test keyword, environment and profile sources."""

    def test_keyword_override(self):
        config = ChunkerConfig(child_target_size=900)
        assert config.child_target_size == 900

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("RAG_CHUNKER_CHILD_TARGET_SIZE", "1000")
        monkeypatch.setenv("RAG_CHUNKER_EMBEDDING_MODEL", "all-minilm")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        config = ChunkerConfig()

        assert config.child_target_size == 1000
        assert config.embedding_model == "all-minilm"
        assert config.openai_api_key == "sk-test"

    def test_keyword_beats_environment(self, monkeypatch):
        monkeypatch.setenv("RAG_CHUNKER_CHILD_TARGET_SIZE", "1000")
        assert ChunkerConfig(child_target_size=700).child_target_size == 700

    def test_profile_from_environment(self, monkeypatch):
        monkeypatch.setenv("RAG_CHUNKER_PROFILE", "extended")

        config = ChunkerConfig()

        assert config.child_target_size == 1600
        assert config.parent_target_size == 4000
        assert config.min_parent_size == 2000

    def test_from_profile(self):
        config = ChunkerConfig.from_profile("extended", child_target_size=1500)

        assert config.parent_target_size == 4000
        assert config.child_target_size == 1500

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            ChunkerConfig.from_profile("huge")

    @pytest.mark.parametrize("key", ["no_such_option", "_load_from_env", "validate"])
    def test_unknown_option(self, key):
        with pytest.raises(ValueError, match="Unknown configuration option"):
            ChunkerConfig(**{key: 1})


class TestValidation:
    """Test threshold consistency checks."""

    def test_min_parent_must_be_below_target(self):
        with pytest.raises(ValueError, match="min_parent_size"):
            ChunkerConfig(min_parent_size=2000)

    def test_positive_sizes(self):
        with pytest.raises(ValueError, match="child_target_size"):
            ChunkerConfig(child_target_size=0)

    def test_overlap_below_target(self):
        with pytest.raises(ValueError, match="overlap"):
            ChunkerConfig(small_overlap=1000)


class TestFiles:
    """Test TOML loading and saving."""

    def test_from_file_sections(self, tmp_path):
        path = tmp_path / "chunker.toml"
        path.write_text(
            "\n".join([
                "[hierarchical]",
                "child_target_size = 1000",
                "",
                "[summary]",
                "max_chars = 120",
                "",
                "[multi_scale]",
                "small_target_size = 800",
                "small_overlap = 150",
                "",
                "[sections]",
                "target_size = 2500",
                "",
                "[embedding]",
                'provider = "openai"',
                'model = "text-embedding-3-small"',
                'ollama_url = "http://gpu:11434"',
                "",
                "[retry]",
                "max_attempts = 3",
                "probe = false",
                "",
            ])
        )

        config = ChunkerConfig.from_file(path)

        assert config.child_target_size == 1000
        assert config.summary_max_chars == 120
        assert config.small_target_size == 800
        assert config.small_overlap == 150
        assert config.section_target_size == 2500
        assert config.embedding_provider == "openai"
        assert config.embedding_model == "text-embedding-3-small"
        assert config.ollama_url == "http://gpu:11434"
        assert config.embedding_max_attempts == 3
        assert config.embedding_probe is False

    def test_from_file_profile(self, tmp_path):
        path = tmp_path / "chunker.toml"
        path.write_text('profile = "extended"\n\n[hierarchical]\nchild_target_size = 1400\n')

        config = ChunkerConfig.from_file(path)

        assert config.parent_target_size == 4000
        assert config.child_target_size == 1400

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ChunkerConfig.from_file(tmp_path / "missing.toml")

    def test_round_trip(self, tmp_path):
        path = tmp_path / "out" / "chunker.toml"
        original = ChunkerConfig(child_target_size=1100, embedding_base_delay=0.25)

        original.to_file(path)
        loaded = ChunkerConfig.from_file(path)

        assert loaded.to_dict() == original.to_dict()

    def test_api_key_not_written(self, tmp_path):
        path = tmp_path / "chunker.toml"
        ChunkerConfig(openai_api_key="sk-secret").to_file(path)
        assert "sk-secret" not in path.read_text()


class TestWithOverrides:
    """Test copying with overrides."""

    def test_returns_new_config(self):
        base = ChunkerConfig()
        changed = base.with_overrides(child_target_size=1000)

        assert changed.child_target_size == 1000
        assert base.child_target_size == 1200

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            ChunkerConfig().with_overrides(bogus=1)

    def test_validates(self):
        with pytest.raises(ValueError):
            ChunkerConfig().with_overrides(parent_target_size=500)
