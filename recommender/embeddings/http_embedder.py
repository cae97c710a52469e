"""Embedding client for a remote feature-extraction endpoint."""
import asyncio
import logging
from typing import Optional

import aiohttp

from recommender.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


def _mean_pool(token_vectors: list) -> list[float]:
    """Average token-level vectors into one sentence vector."""
    if not token_vectors:
        raise EmbeddingError("empty token matrix in response")
    dim = len(token_vectors[0])
    sums = [0.0] * dim
    for vector in token_vectors:
        if len(vector) != dim:
            raise EmbeddingError("ragged token matrix in response")
        for i, value in enumerate(vector):
            sums[i] += float(value)
    return [s / len(token_vectors) for s in sums]


def parse_embeddings(payload, expected: int) -> list[list[float]]:
    """
    Convert a feature-extraction response into one vector per input.

    Accepts either ``[[float, ...], ...]`` (pooled sentence vectors) or
    ``[[[float, ...], ...], ...]`` (per-token vectors, mean pooled here).

    Raises:
        EmbeddingError: If the payload shape or count is wrong
    """
    if not isinstance(payload, list):
        raise EmbeddingError(f"unexpected response type {type(payload).__name__}")
    if len(payload) != expected:
        raise EmbeddingError(f"expected {expected} vectors, got {len(payload)}")

    vectors: list[list[float]] = []
    for item in payload:
        if not isinstance(item, list) or not item:
            raise EmbeddingError("malformed vector in response")
        if isinstance(item[0], list):
            vectors.append(_mean_pool(item))
        else:
            try:
                vectors.append([float(v) for v in item])
            except (TypeError, ValueError) as e:
                raise EmbeddingError(f"non-numeric vector in response: {e}") from e
    return vectors


class HttpEmbedder:
    """Embeds a whole batch of texts with a single POST.

    No retries: a failed batch raises EmbeddingError and the caller
    decides whether to degrade or abort.
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: int = 30,
    ):
        """
        Initialize HTTP embedder.

        Args:
            api_url: Feature-extraction endpoint URL
            api_token: Optional bearer token
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = timeout

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        body = {"inputs": texts, "options": {"wait_for_model": True}}
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.api_url, json=body, headers=self._headers()
                ) as resp:
                    if resp.status != 200:
                        detail = await resp.text()
                        raise EmbeddingError(f"HTTP {resp.status}: {detail[:200]}")
                    payload = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise EmbeddingError(f"request to {self.api_url} failed: {e!r}") from e
        except ValueError as e:
            # json.JSONDecodeError from a 200 response with a broken body
            raise EmbeddingError(f"invalid JSON from {self.api_url}: {e}") from e

        vectors = parse_embeddings(payload, len(texts))
        logger.debug("Embedded %d texts via %s", len(vectors), self.api_url)
        return vectors

    def __repr__(self) -> str:
        return f"<HttpEmbedder {self.api_url}>"
