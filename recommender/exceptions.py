"""Exceptions raised by the recommendation engine."""


class RecommendationError(Exception):
    """Base exception for recommendation errors."""

    pass


class EmbeddingError(RecommendationError):
    """Raised when the embedding service fails or breaks its contract."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Embedding failed: {reason}")


class VectorLengthMismatchError(RecommendationError, ValueError):
    """Raised when two vectors compared together differ in length."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vector length mismatch: {left} != {right}")
