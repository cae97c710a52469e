"""Deterministic local embedder based on token hashing.

Useful offline and in tests. Each token contributes to every dimension
through a rotation of its md5 hash, then the vector is normalised to unit
length. Texts sharing tokens end up with correlated vectors.
"""
import hashlib
import logging

logger = logging.getLogger(__name__)


def _hash_to_float(value: str) -> float:
    """Deterministically hash a string into a float between 0 and 1."""
    h = hashlib.md5(value.encode("utf-8")).hexdigest()
    return int(h[:8], 16) / 0xFFFFFFFF


def embed_text(text: str, dim: int = 64) -> list[float]:
    """Embed one text; an empty text yields the zero vector."""
    vector = [0.0] * dim
    for token in text.lower().split():
        base = _hash_to_float(token)
        for i in range(dim):
            # Rotate hash for each dimension
            vector[i] += (base * (i + 1)) % 1.0

    norm = sum(v * v for v in vector) ** 0.5
    if norm == 0:
        return vector
    return [v / norm for v in vector]


class HashingEmbedder:
    """Embedder that never leaves the process."""

    def __init__(self, dim: int = 64):
        if dim <= 0:
            raise ValueError(f"dim must be positive, got {dim}")
        self.dim = dim

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        vectors = [embed_text(text, self.dim) for text in texts]
        logger.debug("Hashed %d texts into %d-dim vectors", len(vectors), self.dim)
        return vectors
