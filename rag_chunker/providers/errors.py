"""
Embedding Errors

    EmbeddingError
    ├── TransientEmbeddingError   network / HTTP / non-success status (retryable)
    ├── EmbeddingRequestError     request refused: bad key, unknown model (terminal)
    ├── MalformedEmbeddingError   response without a usable vector (terminal)
    └── EmbeddingRetryError       retries exhausted (terminal)

Providers wrap client failures in one of the first two.
"""

from __future__ import annotations


class EmbeddingError(Exception):
    """Base class for embedding acquisition failures."""


class TransientEmbeddingError(EmbeddingError):
    """A failure that may succeed on retry."""


class EmbeddingRequestError(EmbeddingError):
    """The provider refused the request itself; repeating it cannot help."""


class MalformedEmbeddingError(EmbeddingError):
    """The provider answered, but not with a usable embedding vector."""


class EmbeddingRetryError(EmbeddingError):
    """
    All attempts failed.

    Attributes:
        attempts: Number of attempts made
        last_error: The last underlying failure
    """

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        cause = str(last_error) if last_error is not None else "Unknown error"
        super().__init__(f"Failed after {attempts} attempts: {cause}")
