"""Vector store module for storage and retrieval.

This module provides the in-memory vector store, its typed collections,
record field markers and the similarity ranking helpers.
"""

from .collection import InMemoryVectorStoreCollection
from .metadata import RecordMetadata
from .ranking import (
    SemanticSearchResult,
    VectorSearchResult,
    find_closest,
    rank_by_similarity,
)
from .record import (
    DistanceFunction,
    VectorStoreData,
    VectorStoreKey,
    VectorStoreVector,
)
from .store import InMemoryVectorStore
from .vectors import Embedding, Vector

__all__ = [
    "InMemoryVectorStore",
    "InMemoryVectorStoreCollection",
    "RecordMetadata",
    "VectorStoreKey",
    "VectorStoreData",
    "VectorStoreVector",
    "DistanceFunction",
    "Embedding",
    "Vector",
    "VectorSearchResult",
    "SemanticSearchResult",
    "find_closest",
    "rank_by_similarity",
]
