"""Vector similarity."""
import math
from collections.abc import Sequence

from recommender.exceptions import VectorLengthMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two equal-length vectors.

    Returns 0.0 when either vector has zero norm (e.g. an empty text
    embedded to the zero vector), so such pairs rank on boost alone.

    Raises:
        VectorLengthMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise VectorLengthMismatchError(len(a), len(b))

    dot = math.fsum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(math.fsum(x * x for x in a))
    norm_b = math.sqrt(math.fsum(y * y for y in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    # Rounding can push the ratio just outside [-1, 1]
    return max(-1.0, min(1.0, dot / (norm_a * norm_b)))
