"""In-memory vector store - registry of named collections."""

from __future__ import annotations

import threading
from typing import Any, TypeVar

from loguru import logger

from ..errors import CollectionTypeConflictError, InvalidArgumentError
from ..utils.cancellation import CancellationToken, check_cancelled
from .collection import InMemoryVectorStoreCollection

TKey = TypeVar("TKey")
TRecord = TypeVar("TRecord")


def _validate_name(name: str) -> None:
    if name is None or not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(
            "Collection name cannot be None or whitespace",
            details={"name": name},
        )


class InMemoryVectorStore:
    """Registry of named in-memory collections.

    Features:
    - Collections are created on first request and reused afterwards
    - A name is bound to one (key type, record type) pair for its lifetime
    - Concurrent get_collection calls racing on a new name all receive
      the same instance
    - All state is lost when the store is discarded

    Example:
        >>> store = InMemoryVectorStore()
        >>> products = store.get_collection("products", int, Product)
        >>> store.list_collection_names()
        ['products']
    """

    def __init__(self, strict_dimensions: bool | None = None):
        """Initialize an empty store.

        Args:
            strict_dimensions: Default for collections created by this store;
                None defers to the LANGVEC_STRICT_DIMENSIONS setting
        """
        self._collections: dict[str, InMemoryVectorStoreCollection[Any, Any]] = {}
        self._lock = threading.RLock()
        self._strict_dimensions = strict_dimensions
        logger.info("InMemoryVectorStore initialized")

    def get_collection(
        self,
        name: str,
        key_type: type[TKey],
        record_type: type[TRecord],
    ) -> InMemoryVectorStoreCollection[TKey, TRecord]:
        """Get the collection registered under ``name``, creating it if needed.

        Args:
            name: Collection name
            key_type: Type of the record keys
            record_type: Record class with VectorStoreKey/VectorStoreVector fields

        Returns:
            The typed collection

        Raises:
            InvalidArgumentError: If name is blank
            InvalidRecordShapeError: If record_type is not a valid record type
            KeyTypeMismatchError: If the record key is not assignable to key_type
            CollectionTypeConflictError: If name exists with a different type pair
        """
        _validate_name(name)

        with self._lock:
            existing = self._collections.get(name)
            if existing is None:
                # Resolves record metadata; shape errors surface before registration
                created = InMemoryVectorStoreCollection(
                    name,
                    key_type,
                    record_type,
                    strict_dimensions=self._strict_dimensions,
                )
                self._collections[name] = created
                logger.info(
                    f"Created collection '{name}' "
                    f"(key_type={getattr(key_type, '__name__', key_type)}, "
                    f"record_type={record_type.__name__})"
                )
                return created

        if existing.key_type is not key_type or existing.record_type is not record_type:
            raise CollectionTypeConflictError(
                f"Collection '{name}' was already created with a different key or record type",
                details={
                    "name": name,
                    "existing_key_type": getattr(existing.key_type, "__name__", repr(existing.key_type)),
                    "existing_record_type": existing.record_type.__name__,
                    "requested_key_type": getattr(key_type, "__name__", repr(key_type)),
                    "requested_record_type": getattr(record_type, "__name__", repr(record_type)),
                },
            )
        return existing

    def collection_exists(self, name: str, cancellation: CancellationToken | None = None) -> bool:
        """Check whether a collection is registered under ``name``."""
        check_cancelled(cancellation)
        with self._lock:
            return name in self._collections

    def list_collection_names(self, cancellation: CancellationToken | None = None) -> list[str]:
        """List collection names in ordinal (lexicographic) order."""
        check_cancelled(cancellation)
        with self._lock:
            names = list(self._collections)
        return sorted(names)

    def delete_collection(self, name: str, cancellation: CancellationToken | None = None) -> None:
        """Remove and clear the collection registered under ``name``.

        A later get_collection with the same name starts a new, empty
        collection. No-op if the name is not registered.
        """
        check_cancelled(cancellation)
        with self._lock:
            collection = self._collections.pop(name, None)

        if collection is None:
            logger.debug(f"Collection '{name}' not found, nothing to delete")
            return

        collection._detach()
        logger.info(f"Deleted collection '{name}'")

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._collections

    def __len__(self) -> int:
        with self._lock:
            return len(self._collections)

    def __repr__(self) -> str:
        return f"InMemoryVectorStore(collections={len(self)})"
