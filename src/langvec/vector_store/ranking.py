"""Similarity ranking shared by collection search and corpus-level search.

``rank_by_similarity`` scores ``(item, tie_key, vector)`` candidates against a
query and keeps a window of the best matches, ordered by score descending and
``tie_key`` ascending. Collections use the record key as tie key;
``find_closest`` uses the position in the corpus.
"""

import heapq
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel

from ..errors import ArgumentMismatchError, InvalidArgumentError
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.performance import timed
from ..utils.similarity import cosine_similarity
from .vectors import Vector, to_query_vector, try_to_vector

TRecord = TypeVar("TRecord")
TItem = TypeVar("TItem")


class VectorSearchResult(BaseModel, Generic[TRecord]):
    """A record matched by a collection search.

    Attributes:
        record: The stored record
        score: Cosine similarity in [-1, 1]
    """

    record: TRecord
    score: float

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


class SemanticSearchResult(BaseModel, Generic[TItem]):
    """A corpus item matched by ``find_closest``.

    Attributes:
        item: The matched corpus item
        index: Zero-based position of the item in the original corpus
        score: Cosine similarity in [-1, 1]
    """

    item: TItem
    index: int
    score: float

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


@dataclass(frozen=True)
class RankedMatch:
    item: Any
    tie_key: Any
    score: float


def validate_window(top: int, skip: int = 0, name: str = "top") -> None:
    """Check paging arguments.

    Raises:
        InvalidArgumentError: If top < 1 or skip < 0
    """
    if isinstance(top, bool) or not isinstance(top, int) or top < 1:
        raise InvalidArgumentError(
            f"{name} must be greater than zero",
            details={name: top},
        )
    if isinstance(skip, bool) or not isinstance(skip, int) or skip < 0:
        raise InvalidArgumentError(
            "skip cannot be negative",
            details={"skip": skip},
        )


def _rank_order(match: RankedMatch) -> tuple[float, Any]:
    return (-match.score, match.tie_key)


def _typed_rank_order(match: RankedMatch) -> tuple[float, str, str, Any]:
    # Keys of different types never compare against each other
    key_type = type(match.tie_key)
    return (-match.score, key_type.__module__, key_type.__qualname__, match.tie_key)


def _score_order(match: RankedMatch) -> float:
    return -match.score


_RANK_ORDERS = (_rank_order, _typed_rank_order, _score_order)


def rank_by_similarity(
    query: Vector,
    candidates: Iterable[tuple[Any, Any, Vector]],
    top: int,
    skip: int = 0,
    min_score: float | None = None,
    cancellation: CancellationToken | None = None,
) -> list[RankedMatch]:
    """Score candidates against ``query`` and return the requested window.

    Ties on score are broken by ``tie_key`` ascending. Keys of mixed types
    are grouped by type (module, then qualified name) first; keys that still
    cannot be ordered keep their candidate order.

    Args:
        query: Normalized query vector
        candidates: ``(item, tie_key, vector)`` triples; tie keys should be unique
        top: Maximum number of matches to return
        skip: Number of leading matches to drop
        min_score: Inclusive lower bound on the score
        cancellation: Checked between candidates

    Returns:
        Matches ordered by score descending, then tie_key ascending

    Raises:
        DimensionMismatchError: If a candidate vector differs in length from the query
    """
    scored = []
    for item, tie_key, vector in candidates:
        check_cancelled(cancellation)
        score = cosine_similarity(query, vector)
        if min_score is not None and score < min_score:
            continue
        scored.append(RankedMatch(item=item, tie_key=tie_key, score=score))

    # Full materialization; only the window is sorted out of the heap
    for order in _RANK_ORDERS[:-1]:
        try:
            return heapq.nsmallest(skip + top, scored, key=order)[skip:]
        except TypeError:
            logger.debug(f"Tie keys not orderable with {order.__name__}, falling back")
    return heapq.nsmallest(skip + top, scored, key=_RANK_ORDERS[-1])[skip:]


@timed("find_closest")
def find_closest(
    query: Any,
    corpus: Sequence[TItem],
    corpus_vectors: Sequence[Any] | None = None,
    top_k: int = 3,
    min_score: float | None = None,
    embed: Callable[[list[TItem]], Sequence[Any]] | None = None,
    cancellation: CancellationToken | None = None,
) -> list[SemanticSearchResult[TItem]]:
    """Find the corpus items closest to a query vector.

    Linear scan, O(n) in the corpus size.

    Args:
        query: Query vector in any supported representation
        corpus: Items to rank
        corpus_vectors: Vectors aligned with ``corpus``. When omitted they are
            produced by ``embed(corpus)`` in a single call.
        top_k: Maximum number of results. Must be greater than zero.
        min_score: Optional inclusive minimum cosine similarity
        embed: Vector producer used when corpus_vectors is None
        cancellation: Optional cancellation token

    Returns:
        Matches ordered by descending score, then ascending corpus index

    Raises:
        InvalidArgumentError: If top_k < 1, corpus is None, or no vectors can be obtained
        ArgumentMismatchError: If corpus and corpus_vectors differ in length
        UnsupportedQueryTypeError: If query is not a vector

    Example:
        >>> find_closest([1.0, 0.0], ["a", "b"], [[1.0, 0.0], [0.0, 1.0]], top_k=1)[0].item
        'a'
    """
    validate_window(top_k, name="top_k")
    if corpus is None:
        raise InvalidArgumentError("corpus cannot be None")

    query_vector = to_query_vector(query)
    check_cancelled(cancellation)

    items = list(corpus)
    if not items:
        return []

    if corpus_vectors is None:
        if embed is None:
            raise InvalidArgumentError("Either corpus_vectors or embed must be provided")
        logger.debug(f"Generating vectors for {len(items)} corpus items")
        corpus_vectors = embed(items)

    vectors = list(corpus_vectors)
    if len(vectors) != len(items):
        raise ArgumentMismatchError(
            details={"corpus": len(items), "corpus_vectors": len(vectors)},
        )

    candidates = []
    for index, (item, value) in enumerate(zip(items, vectors)):
        vector = try_to_vector(value)
        if vector is None:
            raise InvalidArgumentError(
                f"Corpus vector at index {index} is not a vector: {type(value).__name__}",
                details={"index": index},
            )
        candidates.append((item, index, vector))

    ranked = rank_by_similarity(
        query_vector,
        candidates,
        top=top_k,
        min_score=min_score,
        cancellation=cancellation,
    )
    return [
        SemanticSearchResult(item=match.item, index=match.tie_key, score=match.score)
        for match in ranked
    ]
