"""Embedder interface and text-corpus search."""

from .base import BaseEmbedder
from .search import find_closest_text

__all__ = ["BaseEmbedder", "find_closest_text"]
