"""
ChunkerConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> result = segment_document(text)

    >>> # Explicit configuration
    >>> config = ChunkerConfig(child_target_size=1000, parent_target_size=2400)
    >>> result = segment_document(text, config)

    >>> # Named threshold profile
    >>> config = ChunkerConfig.from_profile("extended")

    >>> # From config file
    >>> config = ChunkerConfig.from_file("./chunker.toml")

Environment Variables:
    RAG_CHUNKER_PROFILE - Hierarchical threshold profile ("compact", "extended")
    RAG_CHUNKER_CHILD_TARGET_SIZE - Child flush size in bytes
    RAG_CHUNKER_PARENT_TARGET_SIZE - Parent split size in bytes
    RAG_CHUNKER_MIN_PARENT_SIZE - Minimum parent size before an H2 closes it
    RAG_CHUNKER_EMBEDDING_PROVIDER - Embedding provider name ("ollama", "openai")
    RAG_CHUNKER_EMBEDDING_MODEL - Embedding model name
    RAG_CHUNKER_OLLAMA_URL - Ollama base URL
    RAG_CHUNKER_MAX_EMBEDDING_CHARS - Character cap for embedding input
    RAG_CHUNKER_EMBEDDING_MAX_ATTEMPTS - Attempts per embedding request
    OPENAI_API_KEY - OpenAI API key (standard name)
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from rag_chunker.config.profiles import DEFAULT_PROFILE, HIERARCHICAL_PROFILES, ScaleTier
from rag_chunker.types import ChunkSize

# Environment variable -> (option, type)
_ENV_OPTIONS: dict[str, tuple[str, type]] = {
    "RAG_CHUNKER_CHILD_TARGET_SIZE": ("child_target_size", int),
    "RAG_CHUNKER_PARENT_TARGET_SIZE": ("parent_target_size", int),
    "RAG_CHUNKER_MIN_PARENT_SIZE": ("min_parent_size", int),
    "RAG_CHUNKER_EMBEDDING_PROVIDER": ("embedding_provider", str),
    "RAG_CHUNKER_EMBEDDING_MODEL": ("embedding_model", str),
    "RAG_CHUNKER_OLLAMA_URL": ("ollama_url", str),
    "RAG_CHUNKER_MAX_EMBEDDING_CHARS": ("max_embedding_chars", int),
    "RAG_CHUNKER_EMBEDDING_MAX_ATTEMPTS": ("embedding_max_attempts", int),
}


class ChunkerConfig:
    """Configuration for rag-chunker."""

    # === Hierarchical Chunking ===

    child_target_size: int = 1200
    """Bytes at which a child chunk is flushed at the next natural break"""

    parent_target_size: int = 1800
    """Bytes at which a parent is split at a nearby blank line"""

    min_parent_size: int = 800
    """Bytes a parent must exceed before an H2 header closes it"""

    code_flush_min_size: int = 300
    """Pending prose larger than this is flushed before a code fence opens"""

    natural_break_lookback: int = 5
    """Lines searched backward for a blank line when splitting a parent"""

    max_header_depth: int = 3
    """Maximum entries in the header context"""

    # === Summaries ===

    summary_min_line_chars: int = 50
    """Lines must be longer than this to be used as the summary excerpt"""

    summary_max_chars: int = 200
    """Character cap for the summary excerpt"""

    # === Multi-Scale Chunking ===

    small_target_size: int = 1000
    small_overlap: int = 200
    medium_target_size: int = 3000
    medium_overlap: int = 500
    large_target_size: int = 6000
    large_overlap: int = 1000

    # === Section Chunking ===

    section_target_size: int = 3000
    """Bytes at which a section chunk is closed at the next natural break"""

    section_min_size: int = 500
    """Bytes a section must exceed before an H1/H2 header closes it"""

    # === Embedding ===

    embedding_provider: str = "ollama"
    """Embedding provider: "ollama", "openai" """

    embedding_model: str = "nomic-embed-text"
    """Embedding model name"""

    embedding_dimensions: int = 768
    """Embedding vector dimensions (model-dependent)"""

    ollama_url: str = "http://localhost:11434"
    """Base URL of the Ollama server"""

    openai_api_key: str | None = None

    max_embedding_chars: int = 2000
    """Character cap applied to sanitized embedding input"""

    # === Retry ===

    embedding_max_attempts: int = 5
    """Attempts per embedding request before giving up"""

    embedding_base_delay: float = 0.5
    """Seconds before the first retry; doubles on every further retry"""

    embedding_probe: bool = True
    """Send a tiny wake-up request to the model before each retry"""

    embedding_probe_settle_delay: float = 0.1
    """Seconds to wait after the wake-up probe"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option

        Raises:
            ValueError: If an option is unknown or thresholds are inconsistent
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if key.startswith("_") or not hasattr(self, key) or callable(getattr(self, key)):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

        self.validate()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.openai_api_key = os.getenv("OPENAI_API_KEY")

        if profile := os.getenv("RAG_CHUNKER_PROFILE"):
            self._apply_profile(profile)

        for env_name, (option, cast) in _ENV_OPTIONS.items():
            if value := os.getenv(env_name):
                setattr(self, option, cast(value))

    def _apply_profile(self, name: str) -> None:
        if name not in HIERARCHICAL_PROFILES:
            raise ValueError(
                f"Unknown profile: {name} (expected one of {sorted(HIERARCHICAL_PROFILES)})"
            )
        for key, value in HIERARCHICAL_PROFILES[name].items():
            setattr(self, key, value)

    def validate(self) -> None:
        """
        Check that thresholds are internally consistent.

        Raises:
            ValueError: On a non-positive size or an inconsistent pairing
        """
        for name in (
            "child_target_size",
            "parent_target_size",
            "section_target_size",
            "max_header_depth",
            "max_embedding_chars",
            "embedding_max_attempts",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.min_parent_size >= self.parent_target_size:
            raise ValueError(
                f"min_parent_size ({self.min_parent_size}) must be smaller than "
                f"parent_target_size ({self.parent_target_size})"
            )
        if self.natural_break_lookback < 0:
            raise ValueError("natural_break_lookback must not be negative")
        if self.embedding_base_delay < 0:
            raise ValueError("embedding_base_delay must not be negative")
        # Building the tiers validates each target/overlap pair
        self.tiers()

    def tiers(self) -> list[ScaleTier]:
        """Multi-scale tiers in small, medium, large order."""
        return [
            ScaleTier(ChunkSize.SMALL, self.small_target_size, self.small_overlap),
            ScaleTier(ChunkSize.MEDIUM, self.medium_target_size, self.medium_overlap),
            ScaleTier(ChunkSize.LARGE, self.large_target_size, self.large_overlap),
        ]

    @classmethod
    def from_profile(cls, name: str = DEFAULT_PROFILE, **kwargs: Any) -> "ChunkerConfig":
        """
        Build a configuration from a named hierarchical profile.

        Explicit keyword arguments still take precedence over the profile.
        """
        if name not in HIERARCHICAL_PROFILES:
            raise ValueError(
                f"Unknown profile: {name} (expected one of {sorted(HIERARCHICAL_PROFILES)})"
            )
        return cls(**{**HIERARCHICAL_PROFILES[name], **kwargs})

    @classmethod
    def from_file(cls, path: str | Path) -> "ChunkerConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened into option names.

        Example TOML:
            profile = "extended"

            [hierarchical]
            child_target_size = 1000

            [multi_scale]
            small_target_size = 800
            small_overlap = 150

            [embedding]
            provider = "ollama"
            model = "nomic-embed-text"

            [retry]
            max_attempts = 3

        Args:
            path: Path to TOML configuration file

        Returns:
            ChunkerConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)

        flat_config: dict[str, Any] = {}

        # Map section names to config key prefixes
        section_mapping = {
            "hierarchical": "",
            "summary": "summary_",
            "multi_scale": "",
            "sections": "section_",
            "embedding": "embedding_",
            "retry": "embedding_",
        }
        # Embedding keys that are not prefixed with "embedding_"
        unprefixed = {"ollama_url", "openai_api_key", "max_embedding_chars"}

        for section, prefix in section_mapping.items():
            for key, value in data.get(section, {}).items():
                if section == "embedding" and key in unprefixed:
                    flat_config[key] = value
                elif key.startswith(prefix):
                    flat_config[key] = value
                else:
                    flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and key != "profile" and not isinstance(value, dict):
                flat_config[key] = value

        if profile := data.get("profile"):
            return cls.from_profile(profile, **flat_config)
        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "ChunkerConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """All public options as a flat dict."""
        return {
            key: getattr(self, key)
            for key in dir(self)
            if not key.startswith("_") and not callable(getattr(self, key))
        }

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        API keys are excluded for security.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float | bool | None]] = {
            "hierarchical": {
                "child_target_size": self.child_target_size,
                "parent_target_size": self.parent_target_size,
                "min_parent_size": self.min_parent_size,
                "code_flush_min_size": self.code_flush_min_size,
                "natural_break_lookback": self.natural_break_lookback,
                "max_header_depth": self.max_header_depth,
            },
            "summary": {
                "min_line_chars": self.summary_min_line_chars,
                "max_chars": self.summary_max_chars,
            },
            "multi_scale": {
                "small_target_size": self.small_target_size,
                "small_overlap": self.small_overlap,
                "medium_target_size": self.medium_target_size,
                "medium_overlap": self.medium_overlap,
                "large_target_size": self.large_target_size,
                "large_overlap": self.large_overlap,
            },
            "sections": {
                "target_size": self.section_target_size,
                "min_size": self.section_min_size,
            },
            "embedding": {
                "provider": self.embedding_provider,
                "model": self.embedding_model,
                "dimensions": self.embedding_dimensions,
                "ollama_url": self.ollama_url,
                "max_embedding_chars": self.max_embedding_chars,
            },
            "retry": {
                "max_attempts": self.embedding_max_attempts,
                "base_delay": self.embedding_base_delay,
                "probe": self.embedding_probe,
                "probe_settle_delay": self.embedding_probe_settle_delay,
            },
        }

        # Build TOML string manually (avoids extra dependency)
        lines = ["# rag-chunker configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
            lines.append("")

        lines.extend([
            "# API keys should be set via environment variables:",
            "# OPENAI_API_KEY",
            "",
        ])

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "ChunkerConfig":
        """Return new config with specified overrides."""
        new_config = ChunkerConfig.__new__(ChunkerConfig)
        for key, value in self.to_dict().items():
            setattr(new_config, key, value)
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config.validate()
        return new_config
