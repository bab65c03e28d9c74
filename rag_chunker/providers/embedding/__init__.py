"""
Embedding Provider Implementations

Modules:
    ollama: Local Ollama embeddings (nomic-embed-text)
    openai: OpenAI embeddings (text-embedding-3-small)
    retry: Exponential-backoff wrapper with a wake-up probe

Client failures surface as TransientEmbeddingError (retried) or
EmbeddingRequestError (not retried). Only providers with needs_wake_up
get the wake-up request before a retry.

Each provider implements the EmbeddingProvider interface with:
    - embed(): Batch embedding generation
    - embed_single(): Single text embedding
    - dimensions: Vector dimensionality
    - model_name: Current model identifier

Sync LangChain clients are wrapped with asyncio.to_thread for async
compatibility.

Example:
    >>> from rag_chunker.providers.embedding import get_embedding_provider
    >>> provider = get_embedding_provider(ChunkerConfig())
    >>> vectors = await provider.embed(["Hello", "World"])
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rag_chunker.config import ChunkerConfig
    from rag_chunker.providers.base import EmbeddingProvider
    from rag_chunker.providers.embedding.ollama import OllamaEmbeddingProvider
    from rag_chunker.providers.embedding.openai import OpenAIEmbeddingProvider
    from rag_chunker.providers.embedding.retry import RetryingEmbeddingProvider


def get_embedding_provider(config: "ChunkerConfig") -> "EmbeddingProvider":
    """
    Build the configured embedding provider, wrapped with retries.

    Raises:
        ValueError: If the provider name is unknown
    """
    from rag_chunker.providers.embedding.retry import RetryingEmbeddingProvider

    name = config.embedding_provider.lower()
    inner: EmbeddingProvider
    if name == "ollama":
        from rag_chunker.providers.embedding.ollama import OllamaEmbeddingProvider
        inner = OllamaEmbeddingProvider(
            model=config.embedding_model,
            base_url=config.ollama_url,
            dimensions=config.embedding_dimensions,
        )
    elif name == "openai":
        from rag_chunker.providers.embedding.openai import OpenAIEmbeddingProvider
        inner = OpenAIEmbeddingProvider(
            api_key=config.openai_api_key,
            model=config.embedding_model,
            dimensions=config.embedding_dimensions,
        )
    else:
        raise ValueError(f"Unknown embedding provider: {config.embedding_provider}")

    return RetryingEmbeddingProvider(
        inner,
        max_attempts=config.embedding_max_attempts,
        base_delay=config.embedding_base_delay,
        probe=config.embedding_probe and inner.needs_wake_up,
        probe_settle_delay=config.embedding_probe_settle_delay,
    )


def __getattr__(name: str):
    """Lazy import of providers to avoid requiring all dependencies."""
    if name == "OllamaEmbeddingProvider":
        from rag_chunker.providers.embedding.ollama import OllamaEmbeddingProvider
        return OllamaEmbeddingProvider
    if name == "OpenAIEmbeddingProvider":
        from rag_chunker.providers.embedding.openai import OpenAIEmbeddingProvider
        return OpenAIEmbeddingProvider
    if name == "RetryingEmbeddingProvider":
        from rag_chunker.providers.embedding.retry import RetryingEmbeddingProvider
        return RetryingEmbeddingProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "get_embedding_provider",
    "OllamaEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "RetryingEmbeddingProvider",
]
