"""Embedding service clients."""
from config.settings import settings

from .base import Embedder
from .hashing_embedder import HashingEmbedder
from .http_embedder import HttpEmbedder


def get_embedder(backend: str | None = None) -> Embedder:
    """Factory: build the embedder selected by settings or ``backend``.

    Args:
        backend: 'http' or 'hashing'; defaults to settings.embedding_backend
    """
    backend = backend or settings.embedding_backend
    if backend == "hashing":
        return HashingEmbedder(dim=settings.hashing_dimensions)
    if backend == "http":
        return HttpEmbedder(
            api_url=settings.embedding_api_url,
            api_token=settings.embedding_api_token,
            timeout=settings.embedding_timeout_seconds,
        )
    raise ValueError(f"Unknown embedding backend: {backend}")


__all__ = ["Embedder", "HashingEmbedder", "HttpEmbedder", "get_embedder"]
