"""Record metadata resolution.

Maps a record type to accessors for its key field, its vector field and any
named payload field. Resolution inspects the record's type hints once per
record type; the result is cached for the lifetime of the process and shared
by every collection storing that type.
"""

from __future__ import annotations

import inspect
import threading
from typing import Annotated, Any, ClassVar, get_args, get_origin

from loguru import logger

from ..errors import (
    InvalidArgumentError,
    InvalidRecordShapeError,
    KeyTypeMismatchError,
    NotFoundError,
)
from .record import VectorStoreField, VectorStoreKey, VectorStoreVector
from .vectors import Vector, describe_vector_types, try_to_vector


def _type_name(tp: Any) -> str:
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return repr(tp)


def _collect_annotations(record_type: type) -> dict[str, Any]:
    # pydantic.BaseModel's own class-level annotations are skipped
    annotations: dict[str, Any] = {}
    for klass in reversed(record_type.__mro__):
        if klass is object or klass.__module__.split(".")[0] == "pydantic":
            continue
        annotations.update(inspect.get_annotations(klass, eval_str=True))
    return annotations


def _is_assignable(annotation: Any, key_type: Any) -> bool:
    if key_type is object or key_type is Any:
        return True
    if isinstance(annotation, type):
        return issubclass(annotation, key_type)
    origin = get_origin(annotation)
    if isinstance(origin, type):
        return issubclass(origin, key_type)
    return False


class RecordMetadata:
    """Resolved key/vector/field accessors for one record type.

    Use ``RecordMetadata.get_or_create(record_type, key_type)`` rather than
    the constructor.

    Attributes:
        record_type: The record class this descriptor was built for
        key_field: Attribute name of the key field
        vector_field: Attribute name of the vector field
        key_annotation: Declared type of the key field
        vector_dimensions: Declared vector length, if any
    """

    _cache: ClassVar[dict[type, RecordMetadata]] = {}
    _cache_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        record_type: type,
        key_field: str,
        key_annotation: Any,
        vector_field: str,
        vector_marker: VectorStoreVector,
        field_map: dict[str, str],
    ):
        self.record_type = record_type
        self.key_field = key_field
        self.key_annotation = key_annotation
        self.vector_field = vector_field
        self._vector_marker = vector_marker
        self._field_map = field_map

    @property
    def vector_dimensions(self) -> int | None:
        return self._vector_marker.dimensions

    @classmethod
    def get_or_create(cls, record_type: type, key_type: Any = object) -> RecordMetadata:
        """Resolve (or fetch from cache) the descriptor for ``record_type``.

        Args:
            record_type: Record class annotated with VectorStoreKey/VectorStoreVector markers
            key_type: Key type of the requesting collection

        Raises:
            InvalidArgumentError: If record_type or key_type is not a type
            InvalidRecordShapeError: If the record lacks exactly one key or vector field
            KeyTypeMismatchError: If the key field is not assignable to key_type
        """
        if not isinstance(record_type, type):
            raise InvalidArgumentError(
                f"record_type must be a class, got {record_type!r}",
                details={"record_type": repr(record_type)},
            )

        metadata = cls._cache.get(record_type)
        if metadata is None:
            with cls._cache_lock:
                metadata = cls._cache.get(record_type)
                if metadata is None:
                    metadata = cls._create(record_type)
                    cls._cache[record_type] = metadata
                    logger.debug(
                        f"Resolved record metadata for {_type_name(record_type)} "
                        f"(key={metadata.key_field}, vector={metadata.vector_field})"
                    )

        metadata.ensure_key_type(key_type)
        return metadata

    @classmethod
    def _create(cls, record_type: type) -> RecordMetadata:
        type_name = _type_name(record_type)
        try:
            hints = _collect_annotations(record_type)
        except Exception as e:
            raise InvalidRecordShapeError(
                f"Could not read type hints of record type '{type_name}'",
                details={"record_type": type_name},
                original_error=e,
            ) from e

        key_fields: list[tuple[str, Any, VectorStoreKey]] = []
        vector_fields: list[tuple[str, VectorStoreVector]] = []
        field_map: dict[str, str] = {}
        aliases: dict[str, str] = {}

        for name, hint in hints.items():
            if get_origin(hint) is ClassVar:
                continue
            field_map[name.casefold()] = name

            if get_origin(hint) is not Annotated:
                continue

            base, *extras = get_args(hint)
            for marker in extras:
                if not isinstance(marker, VectorStoreField):
                    continue
                if isinstance(marker, VectorStoreKey):
                    key_fields.append((name, base, marker))
                elif isinstance(marker, VectorStoreVector):
                    vector_fields.append((name, marker))
                if marker.storage_name and marker.storage_name.strip():
                    aliases[marker.storage_name.casefold()] = name

        if len(key_fields) != 1:
            problem = "must contain exactly one" if not key_fields else "contains multiple"
            raise InvalidRecordShapeError(
                f"Record type '{type_name}' {problem} VectorStoreKey field(s); found {len(key_fields)}",
                details={"record_type": type_name, "marker": "VectorStoreKey", "count": len(key_fields)},
            )

        if len(vector_fields) != 1:
            problem = "must contain exactly one" if not vector_fields else "contains multiple"
            raise InvalidRecordShapeError(
                f"Record type '{type_name}' {problem} VectorStoreVector field(s); found {len(vector_fields)}",
                details={"record_type": type_name, "marker": "VectorStoreVector", "count": len(vector_fields)},
            )

        # Storage names take precedence over attribute names
        field_map.update(aliases)

        key_field, key_annotation, _ = key_fields[0]
        vector_field, vector_marker = vector_fields[0]
        return cls(
            record_type=record_type,
            key_field=key_field,
            key_annotation=key_annotation,
            vector_field=vector_field,
            vector_marker=vector_marker,
            field_map=field_map,
        )

    def ensure_key_type(self, key_type: Any) -> None:
        """Check that the declared key field is assignable to ``key_type``."""
        if key_type is not Any and not isinstance(key_type, type):
            raise InvalidArgumentError(
                f"key_type must be a class, got {key_type!r}",
                details={"key_type": repr(key_type)},
            )
        if not _is_assignable(self.key_annotation, key_type):
            raise KeyTypeMismatchError(
                f"VectorStoreKey field '{self.key_field}' on '{_type_name(self.record_type)}' "
                f"must be assignable to key type '{_type_name(key_type)}'",
                details={
                    "record_type": _type_name(self.record_type),
                    "key_field": self.key_field,
                    "declared": repr(self.key_annotation),
                    "key_type": _type_name(key_type),
                },
            )

    def check_record(self, record: Any) -> None:
        if record is None:
            raise InvalidArgumentError("record cannot be None")
        if not isinstance(record, self.record_type):
            raise InvalidArgumentError(
                f"Expected a '{_type_name(self.record_type)}' record, got '{_type_name(type(record))}'",
                details={"expected": _type_name(self.record_type), "actual": _type_name(type(record))},
            )

    def get_key(self, record: Any, key_type: Any = object) -> Any:
        """Extract the key value of ``record``.

        Raises:
            KeyTypeMismatchError: If the runtime value is not a ``key_type`` instance
        """
        value = getattr(record, self.key_field)
        if key_type is not object and key_type is not Any and not isinstance(value, key_type):
            raise KeyTypeMismatchError(
                f"Key field '{self.key_field}' on '{_type_name(self.record_type)}' "
                f"must be assignable to '{_type_name(key_type)}', got {type(value).__name__}",
                details={"key_field": self.key_field, "value": repr(value)},
            )
        return value

    def get_vector(self, record: Any) -> Vector:
        """Extract and normalize the vector of ``record``.

        Raises:
            InvalidRecordShapeError: If the vector is None or not a supported representation
        """
        value = getattr(record, self.vector_field, None)
        if value is None:
            raise InvalidRecordShapeError(
                f"Vector field '{self.vector_field}' on '{_type_name(self.record_type)}' cannot be None",
                details={"vector_field": self.vector_field},
            )

        vector = try_to_vector(value)
        if vector is None:
            raise InvalidRecordShapeError(
                f"Vector field '{self.vector_field}' on '{_type_name(self.record_type)}' must be one of: "
                f"{describe_vector_types()}; got {type(value).__name__}",
                details={"vector_field": self.vector_field, "actual": type(value).__name__},
            )
        return vector

    def has_field(self, name: str) -> bool:
        return name.casefold() in self._field_map

    def get_value(self, record: Any, name: str) -> Any:
        """Read a field by attribute name or storage name (case-insensitive).

        Raises:
            NotFoundError: If no field is known under ``name``
        """
        field = self._field_map.get(name.casefold())
        if field is None:
            raise NotFoundError(
                f"Record type '{_type_name(self.record_type)}' has no field named '{name}'",
                details={"record_type": _type_name(self.record_type), "name": name},
            )
        return getattr(record, field)

    def __repr__(self) -> str:
        return (
            f"RecordMetadata(record_type={self.record_type.__name__}, "
            f"key_field={self.key_field!r}, vector_field={self.vector_field!r})"
        )
