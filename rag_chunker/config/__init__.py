"""
Configuration System

Manages configuration for rag-chunker with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to ChunkerConfig())
    2. Config file (ChunkerConfig.from_file)
    3. Environment variables (RAG_CHUNKER_* prefix)
    4. Built-in defaults

Modules:
    settings: ChunkerConfig class
    profiles: Named hierarchical threshold sets and multi-scale tiers
"""

from rag_chunker.config.profiles import HIERARCHICAL_PROFILES, ScaleTier
from rag_chunker.config.settings import ChunkerConfig

__all__ = ["ChunkerConfig", "ScaleTier", "HIERARCHICAL_PROFILES"]
