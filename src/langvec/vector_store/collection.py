"""In-memory vector store collection."""

import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from loguru import logger

from ..config.settings import get_settings
from ..errors import DimensionMismatchError, InvalidArgumentError
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.performance import timer
from .metadata import RecordMetadata
from .ranking import VectorSearchResult, rank_by_similarity, validate_window
from .vectors import to_query_vector

TKey = TypeVar("TKey")
TRecord = TypeVar("TRecord")


class InMemoryVectorStoreCollection(Generic[TKey, TRecord]):
    """Named, typed key -> record store with cosine similarity search.

    All records live in a dict guarded by a reentrant lock. Reads that scan
    the collection (``get_many``, ``search``) copy the records under the
    lock and work on that snapshot, so concurrent writers never expose a
    half-written entry.

    Attributes:
        name: Collection name (immutable)
        key_type: Type of the record keys
        record_type: Type of the stored records
        strict_dimensions: Validate vector length on upsert against the
            dimensions declared by the record's VectorStoreVector field

    Example:
        >>> collection = InMemoryVectorStoreCollection("products", int, Product)
        >>> collection.upsert(Product(id=1, name="Keyboard", vector=[1.0, 0.0]))
        1
        >>> [r.record.id for r in collection.search([1.0, 0.0], top=1)]
        [1]
    """

    def __init__(
        self,
        name: str,
        key_type: type[TKey],
        record_type: type[TRecord],
        strict_dimensions: bool | None = None,
    ):
        if name is None or not str(name).strip():
            raise InvalidArgumentError("Collection name cannot be None or whitespace")

        self._name = name
        self._key_type = key_type
        self._record_type = record_type
        self._metadata = RecordMetadata.get_or_create(record_type, key_type)
        self.strict_dimensions = (
            get_settings().STRICT_DIMENSIONS if strict_dimensions is None else strict_dimensions
        )

        self._records: dict[TKey, TRecord] = {}
        self._lock = threading.RLock()
        self._deleted = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def key_type(self) -> type[TKey]:
        return self._key_type

    @property
    def record_type(self) -> type[TRecord]:
        return self._record_type

    @property
    def metadata(self) -> RecordMetadata:
        return self._metadata

    def collection_exists(self, cancellation: CancellationToken | None = None) -> bool:
        """Return False once the owning store has deleted this collection."""
        check_cancelled(cancellation)
        return not self._deleted

    def ensure_collection_exists(self, cancellation: CancellationToken | None = None) -> None:
        """No-op: an in-memory collection exists as soon as it is created."""
        check_cancelled(cancellation)

    def ensure_collection_deleted(self, cancellation: CancellationToken | None = None) -> None:
        """Remove every record. The collection stays registered in its store."""
        check_cancelled(cancellation)
        with self._lock:
            removed = len(self._records)
            self._records.clear()
        logger.info(f"Cleared collection '{self._name}' ({removed} records)")

    def _detach(self) -> None:
        """Called by the owning store when it deletes this collection."""
        with self._lock:
            self._records.clear()
            self._deleted = True

    def get(self, key: TKey, cancellation: CancellationToken | None = None) -> TRecord | None:
        """Get the record stored under ``key``.

        Returns:
            The record, or None if the key is absent
        """
        check_cancelled(cancellation)
        with self._lock:
            return self._records.get(key)

    def get_many(
        self,
        filter: Callable[[TRecord], bool],
        top: int,
        skip: int = 0,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[TRecord]:
        """Iterate over records matching ``filter``.

        Args:
            filter: Predicate over a record; exceptions it raises propagate
            top: Maximum number of records to yield (>= 1)
            skip: Number of matching records to skip first
            cancellation: Checked between records

        Raises:
            InvalidArgumentError: If filter is None, top < 1 or skip < 0
        """
        if filter is None:
            raise InvalidArgumentError("filter cannot be None")
        validate_window(top, skip)
        check_cancelled(cancellation)

        with self._lock:
            snapshot = list(self._records.values())

        return self._iter_matching(snapshot, filter, top, skip, cancellation)

    @staticmethod
    def _iter_matching(
        snapshot: list[TRecord],
        predicate: Callable[[TRecord], bool],
        top: int,
        skip: int,
        cancellation: CancellationToken | None,
    ) -> Iterator[TRecord]:
        taken = 0
        for record in snapshot:
            check_cancelled(cancellation)
            if not predicate(record):
                continue
            if skip > 0:
                skip -= 1
                continue
            yield record
            taken += 1
            if taken >= top:
                return

    def _prepare(self, record: TRecord) -> TKey:
        self._metadata.check_record(record)
        key = self._metadata.get_key(record, self._key_type)

        vector = self._metadata.get_vector(record)
        dimensions = self._metadata.vector_dimensions
        if self.strict_dimensions and dimensions is not None and len(vector) != dimensions:
            raise DimensionMismatchError(
                f"Record '{key}' has a {len(vector)}-dimensional vector; "
                f"collection '{self._name}' expects {dimensions}",
                details={"key": repr(key), "expected": dimensions, "actual": len(vector)},
            )
        return key

    def upsert(self, record: TRecord, cancellation: CancellationToken | None = None) -> TKey:
        """Insert or replace a record.

        Returns:
            The record's key

        Raises:
            InvalidArgumentError: If record is None or of the wrong type
            KeyTypeMismatchError: If the key value is not a ``key_type`` instance
            InvalidRecordShapeError: If the vector field is None or unsupported
            DimensionMismatchError: With strict dimensions, if the vector length is wrong
        """
        check_cancelled(cancellation)
        key = self._prepare(record)
        with self._lock:
            self._records[key] = record
        return key

    def upsert_many(
        self,
        records: Iterable[TRecord],
        cancellation: CancellationToken | None = None,
    ) -> list[TKey]:
        """Insert or replace a batch of records, in order.

        Records before a failing record (or before cancellation) stay applied.

        Returns:
            Keys of the upserted records
        """
        check_cancelled(cancellation)
        if records is None:
            raise InvalidArgumentError("records cannot be None")

        keys = []
        for record in records:
            check_cancelled(cancellation)
            key = self._prepare(record)
            with self._lock:
                self._records[key] = record
            keys.append(key)

        logger.debug(f"Upserted {len(keys)} records into '{self._name}' (total: {self.count()})")
        return keys

    def delete(self, key: TKey, cancellation: CancellationToken | None = None) -> None:
        """Delete the record under ``key``; no-op if absent."""
        check_cancelled(cancellation)
        with self._lock:
            self._records.pop(key, None)

    def delete_many(self, keys: Iterable[TKey], cancellation: CancellationToken | None = None) -> None:
        """Delete the records under ``keys``; absent keys are ignored."""
        check_cancelled(cancellation)
        for key in keys:
            check_cancelled(cancellation)
            with self._lock:
                self._records.pop(key, None)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()

    def search(
        self,
        query: Any,
        top: int,
        filter: Callable[[TRecord], bool] | None = None,
        skip: int = 0,
        min_score: float | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[VectorSearchResult[TRecord]]:
        """Search for the records most similar to ``query``.

        The record set is captured when this method is called; scoring and
        sorting run when the returned iterator is first advanced.

        Args:
            query: Query vector (Embedding, float buffer, or float sequence)
            top: Maximum number of results (>= 1)
            filter: Optional predicate restricting the candidates
            skip: Number of leading results to drop
            min_score: Optional inclusive lower bound on the score
            cancellation: Checked before starting and between results

        Returns:
            Iterator of results ordered by score descending, then key ascending

        Raises:
            InvalidArgumentError: If top < 1 or skip < 0
            UnsupportedQueryTypeError: If query is not a supported vector representation
        """
        validate_window(top, skip)
        query_vector = to_query_vector(query)
        check_cancelled(cancellation)

        with self._lock:
            snapshot = list(self._records.items())

        def results() -> Iterator[VectorSearchResult[TRecord]]:
            candidates = (
                (record, key, self._metadata.get_vector(record))
                for key, record in snapshot
                if filter is None or filter(record)
            )
            with timer(
                f"Search over {len(snapshot)} records in '{self._name}'",
                threshold_ms=None,
            ):
                ranked = rank_by_similarity(
                    query_vector,
                    candidates,
                    top=top,
                    skip=skip,
                    min_score=min_score,
                    cancellation=cancellation,
                )
            for match in ranked:
                check_cancelled(cancellation)
                yield VectorSearchResult(record=match.item, score=match.score)

        return results()

    def __repr__(self) -> str:
        return (
            f"InMemoryVectorStoreCollection(name={self._name!r}, "
            f"key_type={getattr(self._key_type, '__name__', self._key_type)}, record_type={self._record_type.__name__}, "
            f"records={self.count()})"
        )
