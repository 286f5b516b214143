"""Vector similarity calculation utilities."""

from collections.abc import Sequence

from ..errors import DimensionMismatchError


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1]. Zero-magnitude vectors score 0.0.

    Raises:
        DimensionMismatchError: If vectors have different dimensions
    """
    if len(vec1) != len(vec2):
        raise DimensionMismatchError(
            f"Vector dimension mismatch: {len(vec1)} != {len(vec2)}",
            details={"left": len(vec1), "right": len(vec2)},
        )

    dot_product = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for a, b in zip(vec1, vec2):
        dot_product += a * b
        norm1 += a * a
        norm2 += b * b

    if norm1 == 0.0 or norm2 == 0.0:
        return 0.0

    score = dot_product / ((norm1 ** 0.5) * (norm2 ** 0.5))

    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, score))
