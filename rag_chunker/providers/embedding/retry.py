"""
Retrying Embedding Provider

Wraps any EmbeddingProvider with bounded exponential backoff.

Before every retry the wrapped model receives a tiny wake-up request
("test") followed by a short settle delay, so a local server that has
unloaded the model is warm again when the real request is repeated.

Schedule (defaults):
    attempt 1: immediate
    attempt 2: after 0.5s
    attempt 3: after 1.0s
    attempt 4: after 2.0s
    attempt 5: after 4.0s

TransientEmbeddingError and exceptions from outside the EmbeddingError
hierarchy are retried. Other EmbeddingErrors and ImportError are terminal.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from rag_chunker.providers.base import EmbeddingProvider
from rag_chunker.providers.errors import (
    EmbeddingError,
    EmbeddingRetryError,
    TransientEmbeddingError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROBE_TEXT = "test"


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, TransientEmbeddingError):
        return True
    return isinstance(exc, Exception) and not isinstance(exc, (EmbeddingError, ImportError))


class RetryingEmbeddingProvider(EmbeddingProvider):
    """
    Embedding provider decorator adding retries with a wake-up probe.

    Args:
        inner: Provider that performs the actual requests
        max_attempts: Total attempts per request (first try included)
        base_delay: Seconds before the first retry; doubles on every retry
        probe: Send a wake-up request before each retry
        probe_settle_delay: Seconds to wait after the wake-up request
        sleep: Awaitable sleep function (injectable for tests)
    """

    def __init__(
        self,
        inner: EmbeddingProvider,
        max_attempts: int = 5,
        base_delay: float = 0.5,
        probe: bool = True,
        probe_settle_delay: float = 0.1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._inner = inner
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._probe = probe
        self._probe_settle_delay = probe_settle_delay
        self._sleep = sleep

    @property
    def inner(self) -> EmbeddingProvider:
        return self._inner

    @property
    def dimensions(self) -> int:
        return self._inner.dimensions

    @property
    def model_name(self) -> str:
        return self._inner.model_name

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return await self._call(lambda: self._inner.embed(texts))

    async def embed_single(self, text: str) -> list[float]:
        return await self._call(lambda: self._inner.embed_single(text))

    def _log_failure(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"Embedding attempt {retry_state.attempt_number}/{self._max_attempts} "
            f"with {self.model_name} failed: {exc}; retrying in {wait:.2f}s"
        )

    async def _wake_up(self) -> None:
        try:
            await self._inner.embed_single(PROBE_TEXT)
        except Exception as e:
            logger.debug(f"Wake-up probe for {self.model_name} failed: {e}")
        await self._sleep(self._probe_settle_delay)

    async def _call(self, request: Callable[[], Awaitable[T]]) -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._base_delay, exp_base=2),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_failure,
            sleep=self._sleep,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1 and self._probe:
                        await self._wake_up()
                    return await request()
        except RetryError as e:
            last = e.last_attempt.exception()
            logger.error(
                f"Embedding with {self.model_name} failed after "
                f"{self._max_attempts} attempts: {last}"
            )
            raise EmbeddingRetryError(self._max_attempts, last) from last
        raise AssertionError("unreachable")
