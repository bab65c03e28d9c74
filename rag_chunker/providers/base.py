"""
Abstract Provider Interfaces

Base class for embedding providers, plus the checks every provider applies
to what its client returns.
"""

from abc import ABC, abstractmethod

from rag_chunker.providers.errors import (
    EmbeddingError,
    EmbeddingRequestError,
    MalformedEmbeddingError,
    TransientEmbeddingError,
)

# HTTP statuses meaning the request itself is wrong
REFUSED_STATUSES = frozenset({400, 401, 403, 404, 422})


class EmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    needs_wake_up: bool = False
    """Whether the model may be unloaded between requests (local servers)."""

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts."""
        ...

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Embedding dimensions."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Current model name."""
        ...


def check_vector(vector: object, model: str) -> list[float]:
    """
    Validate one embedding returned by a provider.

    Raises:
        MalformedEmbeddingError: If the value is not a non-empty list of numbers
    """
    if not isinstance(vector, list) or not vector:
        raise MalformedEmbeddingError(f"{model} returned no embedding vector")
    if not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in vector):
        raise MalformedEmbeddingError(f"{model} returned a non-numeric embedding vector")
    return [float(x) for x in vector]


def client_error(model: str, exc: Exception) -> EmbeddingError:
    """
    Classify a failure raised by an embedding client.

    Errors carrying a refused HTTP status (``status_code`` on both the
    Ollama and OpenAI client exceptions) become EmbeddingRequestError.
    Everything else (connection resets, timeouts, 429 and 5xx) is transient.
    """
    if getattr(exc, "status_code", None) in REFUSED_STATUSES:
        return EmbeddingRequestError(f"{model}: {exc}")
    return TransientEmbeddingError(f"{model}: {exc}")
