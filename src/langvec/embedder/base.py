"""Base embedder interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class BaseEmbedder(ABC):
    """Abstract base class for embedding generation.

    Embedders convert text strings into vector representations. Model
    loading and inference live outside this package; implementations only
    need to return one vector per input text.
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> Sequence[Any]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            One vector per text (same order as input). Each vector may be a
            list of floats, a float buffer or an Embedding.
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension.

        Returns:
            Size of embedding vectors produced by this embedder
        """
        pass
