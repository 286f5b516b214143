"""
LangVec - A typed in-memory vector store.

This package provides named, typed record collections holding fixed-length
float vectors, with cosine similarity search, filtering and pagination, plus
corpus-level nearest-neighbor helpers.
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, configure_logging, get_settings, load_settings

# Embedders
from .embedder import BaseEmbedder, find_closest_text

# Errors
from .errors import (
    ArgumentMismatchError,
    CollectionTypeConflictError,
    ConfigurationError,
    DimensionMismatchError,
    InvalidArgumentError,
    InvalidRecordShapeError,
    KeyTypeMismatchError,
    LangVecError,
    NotFoundError,
    OperationCancelledError,
    UnsupportedQueryTypeError,
    is_usage_error,
)

# Utilities
from .utils import CancellationToken, cosine_similarity

# Vector store
from .vector_store import (
    DistanceFunction,
    Embedding,
    InMemoryVectorStore,
    InMemoryVectorStoreCollection,
    RecordMetadata,
    SemanticSearchResult,
    VectorSearchResult,
    VectorStoreData,
    VectorStoreKey,
    VectorStoreVector,
    find_closest,
)

__all__ = [
    # Version
    "__version__",
    # Vector Store
    "InMemoryVectorStore",
    "InMemoryVectorStoreCollection",
    "RecordMetadata",
    "VectorStoreKey",
    "VectorStoreData",
    "VectorStoreVector",
    "DistanceFunction",
    "Embedding",
    "VectorSearchResult",
    "SemanticSearchResult",
    "find_closest",
    # Embedder
    "BaseEmbedder",
    "find_closest_text",
    # Errors
    "LangVecError",
    "InvalidArgumentError",
    "ArgumentMismatchError",
    "InvalidRecordShapeError",
    "KeyTypeMismatchError",
    "CollectionTypeConflictError",
    "DimensionMismatchError",
    "UnsupportedQueryTypeError",
    "NotFoundError",
    "OperationCancelledError",
    "ConfigurationError",
    "is_usage_error",
    # Config
    "Settings",
    "load_settings",
    "get_settings",
    "configure_logging",
    # Utilities
    "CancellationToken",
    "cosine_similarity",
]
