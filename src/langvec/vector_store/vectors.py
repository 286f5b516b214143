"""Vector representations accepted by the store.

A vector can arrive as a float buffer (``array.array`` or a ``memoryview``
over one), a plain sequence of numbers (``list`` / ``tuple``), or an
``Embedding`` wrapper. All of them normalize to an immutable
``tuple[float, ...]``.
"""

from array import array
from collections.abc import Sequence
from datetime import datetime
from numbers import Real
from typing import Any

from pydantic import BaseModel, field_validator

from ..errors import UnsupportedQueryTypeError

Vector = tuple[float, ...]

_FLOAT_TYPECODES = frozenset("fd")


class Embedding(BaseModel):
    """Tagged embedding produced by an embedder.

    Attributes:
        vector: The embedding values
        model_id: Identifier of the model that produced the vector (optional)
        created_at: Generation timestamp (optional)
    """

    vector: tuple[float, ...]
    model_id: str | None = None
    created_at: datetime | None = None

    model_config = {
        "frozen": True,
        "protected_namespaces": (),
    }

    @field_validator("vector", mode="before")
    @classmethod
    def _coerce_vector(cls, value: Any) -> Vector:
        vector = try_to_vector(value)
        if vector is None:
            raise ValueError(f"Cannot build an embedding from {type(value).__name__}")
        return vector

    @property
    def dimensions(self) -> int:
        return len(self.vector)

    def __len__(self) -> int:
        return len(self.vector)


def _from_numbers(values: Sequence[Any]) -> Vector | None:
    result = []
    for value in values:
        # bool is a Real subclass but never a meaningful vector component
        if isinstance(value, bool) or not isinstance(value, Real):
            return None
        result.append(float(value))
    return tuple(result)


def try_to_vector(value: Any) -> Vector | None:
    """Normalize ``value`` to a vector, or return None if it is not one."""
    if isinstance(value, Embedding):
        return value.vector
    if isinstance(value, array):
        if value.typecode not in _FLOAT_TYPECODES:
            return None
        return tuple(value)
    if isinstance(value, memoryview):
        if value.format not in _FLOAT_TYPECODES or value.ndim != 1:
            return None
        return tuple(value.tolist())
    if isinstance(value, (list, tuple)):
        return _from_numbers(value)
    return None


def describe_vector_types() -> str:
    """Human readable list of the accepted representations."""
    return "Embedding, array.array('f'/'d'), memoryview over a float buffer, list[float], tuple[float, ...]"


def to_query_vector(value: Any) -> Vector:
    """Normalize a search query.

    Raises:
        UnsupportedQueryTypeError: If ``value`` is not an accepted vector representation
    """
    vector = try_to_vector(value)
    if vector is None:
        raise UnsupportedQueryTypeError(
            f"Search value type '{type(value).__name__}' is not supported. "
            f"Supported types are {describe_vector_types()}",
            details={"query_type": type(value).__name__},
        )
    return vector
