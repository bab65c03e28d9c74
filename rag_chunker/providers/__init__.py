"""
Embedding Providers

Provider-agnostic interface for embedding chunk text.

Modules:
    base: Abstract provider interface and vector validation
    errors: Embedding error hierarchy
    embedding/: Provider implementations and the retry wrapper

Supported Embedding Providers:
    - Ollama (nomic-embed-text) via LangChain
    - OpenAI (text-embedding-3-small) via LangChain

Example:
    >>> from rag_chunker.providers import EmbeddingProvider
    >>> from rag_chunker.providers.embedding import OllamaEmbeddingProvider
"""

from rag_chunker.providers.base import EmbeddingProvider, check_vector
from rag_chunker.providers.errors import (
    EmbeddingError,
    EmbeddingRequestError,
    EmbeddingRetryError,
    MalformedEmbeddingError,
    TransientEmbeddingError,
)

__all__ = [
    "EmbeddingProvider",
    "check_vector",
    "EmbeddingError",
    "EmbeddingRequestError",
    "EmbeddingRetryError",
    "MalformedEmbeddingError",
    "TransientEmbeddingError",
]
