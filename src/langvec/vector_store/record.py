"""Declarative field markers for vector store records.

Records are ordinary classes (pydantic models, dataclasses or plain annotated
classes). Their fields are marked with ``typing.Annotated`` metadata:

    >>> from typing import Annotated
    >>> from pydantic import BaseModel
    >>> class Product(BaseModel):
    ...     id: Annotated[int, VectorStoreKey()]
    ...     name: Annotated[str, VectorStoreData(storage_name="title")]
    ...     vector: Annotated[list[float], VectorStoreVector(dimensions=384)]

Exactly one key field and exactly one vector field are required.
"""

from dataclasses import dataclass
from enum import Enum


class DistanceFunction(str, Enum):
    """Distance functions a vector field can declare."""
    COSINE_SIMILARITY = "cosine_similarity"


@dataclass(frozen=True, kw_only=True)
class VectorStoreField:
    """Common base for field markers.

    Attributes:
        storage_name: Alternate name used by external mappings. The store
            only uses it as a lookup alias.
    """
    storage_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class VectorStoreKey(VectorStoreField):
    """Marks the unique key field of a record."""


@dataclass(frozen=True, kw_only=True)
class VectorStoreData(VectorStoreField):
    """Marks an opaque payload field of a record."""


@dataclass(frozen=True, kw_only=True)
class VectorStoreVector(VectorStoreField):
    """Marks the vector field of a record.

    Attributes:
        dimensions: Declared vector length (checked on upsert only when
            strict dimensions are enabled)
        distance_function: Similarity used to rank this field
    """
    dimensions: int | None = None
    distance_function: DistanceFunction = DistanceFunction.COSINE_SIMILARITY

    def __post_init__(self):
        if self.dimensions is not None and self.dimensions < 1:
            raise ValueError(f"dimensions must be at least 1, got {self.dimensions}")
