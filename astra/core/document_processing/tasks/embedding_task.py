"""
Embedding generation task against an OpenAI-compatible embeddings API.

Batches chunk texts, posts one request per batch and reassembles the
vectors in input order. Rate-limit responses (HTTP 429) are retried with
exponential backoff; every other failure aborts the whole call.

Dependencies: httpx, tenacity, pydantic
System role: Embedding stage of document ingestion pipeline
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from astra.core.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


class EmbeddingRateLimitedError(Exception):
    """Provider answered HTTP 429; the only retryable condition."""

    def __init__(self, payload: str) -> None:
        self.payload = payload
        super().__init__("Embedding provider rate limited the request")


class EmbeddingItem(BaseModel):
    """One vector in the provider response."""

    embedding: list[float]
    index: int | None = None


class EmbeddingResponse(BaseModel):
    """Provider response body: {data: [{embedding, index?}]}."""

    data: list[EmbeddingItem]


class EmbeddingTask:
    """Generate embeddings for ordered text sequences."""

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        base_url: str = "https://api.openai.com/v1",
        batch_size: int = 100,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize embedding task with provider configuration.

        Args:
            api_key: Bearer token for the provider
            model: Embedding model ID
            base_url: API base URL (POST {base_url}/embeddings)
            batch_size: Maximum texts per request
            max_retries: Retries after the first attempt on HTTP 429
            initial_delay: First backoff delay in seconds, doubled per retry
            timeout: Request timeout in seconds
            http_client: Shared client (owned by the caller)
            sleep: Awaitable used between retries

        Raises:
            ValueError: When batch_size < 1 or max_retries < 0
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        self._api_key = api_key
        self._model = model
        self._endpoint = f"{base_url.rstrip('/')}/embeddings"
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._initial_delay = initial_delay
        self._timeout = timeout
        self._http_client = http_client
        self._sleep = sleep

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts, preserving input order.

        Args:
            texts: Ordered chunk texts

        Returns:
            list[list[float]]: One vector per input text, same order

        Raises:
            EmbeddingProviderError: Provider failure or rate limit outlasting retries
        """
        if not texts:
            return []
        if not self._api_key:
            raise EmbeddingProviderError("Embedding provider API key not configured")

        embeddings: list[list[float]] = []
        async with self._client() as client:
            for offset in range(0, len(texts), self._batch_size):
                batch = texts[offset : offset + self._batch_size]
                embeddings.extend(await self._embed_with_retry(client, batch, offset))

        logger.info(
            f"{__name__}:embed_batch - Generated embeddings",
            extra={"text_count": len(texts), "model": self._model},
        )
        return embeddings

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def _embed_with_retry(
        self,
        client: httpx.AsyncClient,
        batch: list[str],
        offset: int,
    ) -> list[list[float]]:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(EmbeddingRateLimitedError),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._initial_delay, exp_base=2),
            sleep=self._sleep,
            before_sleep=self._log_rate_limited,
            reraise=True,
        )
        try:
            return await retrying(self._request_embeddings, client, batch)
        except EmbeddingRateLimitedError as e:
            raise EmbeddingProviderError(
                f"Embedding provider still rate limiting after {self._max_retries} retries",
                provider_status=429,
                payload=e.payload,
                details={"batch_offset": offset, "batch_size": len(batch)},
            ) from e

    def _log_rate_limited(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"{__name__}:embed_batch - Rate limited, retry "
            f"{retry_state.attempt_number}/{self._max_retries} in {delay:.1f}s"
        )

    async def _request_embeddings(
        self,
        client: httpx.AsyncClient,
        batch: list[str],
    ) -> list[list[float]]:
        """
        Issue one provider call for a batch.

        Raises:
            EmbeddingRateLimitedError: HTTP 429
            EmbeddingProviderError: Any other failure
        """
        try:
            response = await client.post(
                self._endpoint,
                json={"model": self._model, "input": batch},
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            raise EmbeddingProviderError(f"Embedding request failed: {e}") from e

        if response.status_code == 429:
            raise EmbeddingRateLimitedError(response.text)

        if response.is_error:
            raise EmbeddingProviderError(
                f"Embedding provider error: HTTP {response.status_code}",
                provider_status=response.status_code,
                payload=response.text,
            )

        try:
            parsed = EmbeddingResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise EmbeddingProviderError(
                "Malformed embedding response",
                provider_status=response.status_code,
                payload=response.text,
            ) from e

        if len(parsed.data) != len(batch):
            raise EmbeddingProviderError(
                f"Embedding provider returned {len(parsed.data)} vectors for {len(batch)} inputs",
                provider_status=response.status_code,
            )

        items = parsed.data
        if all(item.index is not None for item in items):
            items = sorted(items, key=lambda item: item.index)
        return [item.embedding for item in items]
