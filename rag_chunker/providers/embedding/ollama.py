"""
Ollama Embedding Provider (LangChain-based)

Implements EmbeddingProvider interface using LangChain's OllamaEmbeddings
against a local Ollama server.

Models:
    - nomic-embed-text: 768 dimensions (default)
    - mxbai-embed-large: 1024 dimensions
    - all-minilm: 384 dimensions

Example:
    >>> provider = OllamaEmbeddingProvider(model="nomic-embed-text")
    >>> vectors = await provider.embed(["Hello world", "Goodbye world"])
    >>> print(len(vectors[0]))
    768
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from rag_chunker.providers.base import EmbeddingProvider, check_vector, client_error

if TYPE_CHECKING:
    from langchain_ollama import OllamaEmbeddings


# Model dimensions mapping
MODEL_DIMENSIONS = {
    "nomic-embed-text": 768,
    "mxbai-embed-large": 1024,
    "all-minilm": 384,
}

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"


def _get_ollama_embeddings(
    model: str = DEFAULT_MODEL,
    base_url: str = DEFAULT_BASE_URL,
) -> "OllamaEmbeddings":
    """
    Get an OllamaEmbeddings instance.

    Uses lazy import to avoid requiring langchain-ollama unless actually used.

    Raises:
        ImportError: If langchain-ollama package is not installed
    """
    try:
        from langchain_ollama import OllamaEmbeddings
    except ImportError:
        raise ImportError(
            "Ollama embedding provider requires the 'langchain-ollama' package. "
            "Install with: pip install rag-chunker[ollama]"
        )

    return OllamaEmbeddings(model=model, base_url=base_url)


class OllamaEmbeddingProvider(EmbeddingProvider):
    """
    Ollama embedding provider implementation using LangChain.

    The server unloads idle models, so retries send a wake-up request first.

    Args:
        model: Model to use (default: "nomic-embed-text")
        base_url: Ollama server URL
        dimensions: Override for models missing from MODEL_DIMENSIONS
    """

    needs_wake_up = True

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimensions: int | None = None,
    ) -> None:
        self._model = model
        self._base_url = base_url
        self._dimensions = dimensions or MODEL_DIMENSIONS.get(model, 768)
        # Lazy initialization
        self._client: OllamaEmbeddings | None = None

    def _get_client(self) -> "OllamaEmbeddings":
        """Get or create the OllamaEmbeddings client."""
        if self._client is None:
            self._client = _get_ollama_embeddings(model=self._model, base_url=self._base_url)
        return self._client

    @property
    def dimensions(self) -> int:
        """Embedding dimensions for the current model."""
        return self._dimensions

    @property
    def model_name(self) -> str:
        """Current model name."""
        return self._model

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts.

        Args:
            texts: List of texts to embed

        Returns:
            List of embedding vectors (same order as input)

        Raises:
            TransientEmbeddingError: If the server is unreachable or fails
            EmbeddingRequestError: If the server refuses the request
            MalformedEmbeddingError: If a vector is missing or not numeric
        """
        if not texts:
            return []

        client = self._get_client()

        # LangChain's embed_documents is synchronous, run in thread pool
        try:
            embeddings = await asyncio.to_thread(client.embed_documents, texts)
        except Exception as e:
            raise client_error(self._model, e) from e
        return [check_vector(vector, self._model) for vector in embeddings]

    async def embed_single(self, text: str) -> list[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector
        """
        client = self._get_client()

        # LangChain's embed_query is synchronous, run in thread pool
        try:
            embedding = await asyncio.to_thread(client.embed_query, text)
        except Exception as e:
            raise client_error(self._model, e) from e
        return check_vector(embedding, self._model)
