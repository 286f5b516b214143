"""Utility functions for LangVec."""

from .cancellation import CancellationToken, check_cancelled
from .performance import timed, timer
from .similarity import cosine_similarity

__all__ = [
    "CancellationToken",
    "check_cancelled",
    "cosine_similarity",
    "timer",
    "timed",
]
