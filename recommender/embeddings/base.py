"""Embedding service interface."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class Embedder(Protocol):
    """Turns texts into fixed-length vectors.

    Implementations return one vector per input, in input order, and must
    accept empty strings. Any failure is raised, never papered over with
    placeholder vectors.
    """

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        ...
