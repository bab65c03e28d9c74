"""
OpenAI Embedding Provider (LangChain-based)

Hosted alternative to a local Ollama server.

Differences from the Ollama provider:
    - No wake-up request on retry: the model is always loaded and the
      request would be billed
    - The client's own retries are disabled so RetryingEmbeddingProvider
      is the only place attempts are counted
    - text-embedding-3 models can be shortened to a collection's vector
      size through the API's ``dimensions`` parameter
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from rag_chunker.providers.base import EmbeddingProvider, check_vector, client_error
from rag_chunker.providers.errors import MalformedEmbeddingError

if TYPE_CHECKING:
    from langchain_openai import OpenAIEmbeddings


# Native vector size per model
MODEL_DIMENSIONS = {
    "text-embedding-3-large": 3072,
    "text-embedding-3-small": 1536,
    "text-embedding-ada-002": 1536,
}

# Models accepting a shorter ``dimensions`` request
SHORTENABLE_MODELS = frozenset({"text-embedding-3-large", "text-embedding-3-small"})

DEFAULT_MODEL = "text-embedding-3-small"


def _get_openai_embeddings(
    model: str,
    api_key: str | None,
    dimensions: int | None,
) -> "OpenAIEmbeddings":
    """
    Build the LangChain client with its internal retries turned off.

    Raises:
        ImportError: If langchain-openai package is not installed
    """
    try:
        from langchain_openai import OpenAIEmbeddings
    except ImportError:
        raise ImportError(
            "OpenAI embedding provider requires the 'langchain-openai' package. "
            "Install with: pip install rag-chunker[openai]"
        )

    kwargs: dict = {"model": model, "max_retries": 0}
    if api_key:
        from pydantic import SecretStr
        kwargs["api_key"] = SecretStr(api_key)
    if dimensions is not None:
        kwargs["dimensions"] = dimensions
    return OpenAIEmbeddings(**kwargs)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """
    Embeddings from the OpenAI API.

    Args:
        api_key: API key; falls back to OPENAI_API_KEY when None
        model: Embedding model (default: "text-embedding-3-small")
        dimensions: Requested vector size. None or the model's native size
            leaves the output unshortened; for models missing from
            MODEL_DIMENSIONS it declares the size the server returns.

    Raises:
        ValueError: If a shorter size is requested from a model that
            cannot produce one, or the size exceeds the native one
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        dimensions: int | None = None,
    ) -> None:
        native = MODEL_DIMENSIONS.get(model)
        self._requested: int | None = None
        if dimensions is not None and native is not None and dimensions != native:
            if model not in SHORTENABLE_MODELS:
                raise ValueError(f"{model} does not support a custom size ({dimensions})")
            if not 0 < dimensions < native:
                raise ValueError(f"{model} vectors must be between 1 and {native} long")
            self._requested = dimensions

        self._api_key = api_key
        self._model = model
        # None when neither the model nor the caller fixes the size
        self._expected = self._requested or native or dimensions
        self._dimensions = self._expected or 1536
        self._client: OpenAIEmbeddings | None = None

    def _get_client(self) -> "OpenAIEmbeddings":
        if self._client is None:
            self._client = _get_openai_embeddings(self._model, self._api_key, self._requested)
        return self._client

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model_name(self) -> str:
        return self._model

    def _check(self, vector: object) -> list[float]:
        checked = check_vector(vector, self._model)
        if self._expected is not None and len(checked) != self._expected:
            raise MalformedEmbeddingError(
                f"{self._model} returned {len(checked)} values, expected {self._expected}"
            )
        return checked

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        client = self._get_client()
        try:
            embeddings = await asyncio.to_thread(client.embed_documents, texts)
        except Exception as e:
            raise client_error(self._model, e) from e
        return [self._check(vector) for vector in embeddings]

    async def embed_single(self, text: str) -> list[float]:
        client = self._get_client()
        try:
            embedding = await asyncio.to_thread(client.embed_query, text)
        except Exception as e:
            raise client_error(self._model, e) from e
        return self._check(embedding)
