"""Semantic search over an ad-hoc text corpus."""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from loguru import logger

from ..errors import ArgumentMismatchError, InvalidArgumentError
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.performance import timed
from ..vector_store.ranking import SemanticSearchResult, find_closest, validate_window
from .base import BaseEmbedder

T = TypeVar("T")


@timed("find_closest_text")
def find_closest_text(
    embedder: BaseEmbedder,
    query: str,
    corpus: Sequence[T],
    corpus_embeddings: Sequence[Any] | None = None,
    top_k: int = 3,
    min_score: float | None = None,
    text_selector: Callable[[T], str] | None = None,
    cancellation: CancellationToken | None = None,
) -> list[SemanticSearchResult[T]]:
    """Find the corpus entries closest to a text query.

    If ``corpus_embeddings`` is None, the whole corpus is embedded in one
    batch call before searching; the query is embedded with a second call.

    Args:
        embedder: Produces vectors for texts
        query: Query text (not blank)
        corpus: Strings, or arbitrary items when ``text_selector`` is given
        corpus_embeddings: Optional precomputed vectors aligned with corpus
        top_k: Maximum number of results. Must be greater than zero.
        min_score: Optional inclusive minimum cosine similarity
        text_selector: Extracts the searchable text from each corpus item
        cancellation: Optional cancellation token

    Returns:
        Matches carrying the original corpus item, its index and score,
        ordered by descending score then ascending index

    Raises:
        InvalidArgumentError: For a missing embedder, blank query, top_k < 1,
            or a corpus item whose text is blank
        ArgumentMismatchError: If corpus and corpus_embeddings differ in length

    Example:
        >>> corpus = ["C# for .NET", "JavaScript for browsers", "Swift for iOS"]
        >>> results = find_closest_text(embedder, "best language for web apps", corpus, top_k=2)
    """
    if embedder is None:
        raise InvalidArgumentError("embedder cannot be None")
    if query is None or not query.strip():
        raise InvalidArgumentError("Query cannot be None, empty, or whitespace")
    validate_window(top_k, name="top_k")
    if corpus is None:
        raise InvalidArgumentError("corpus cannot be None")
    check_cancelled(cancellation)

    items = list(corpus)
    if not items:
        return []

    texts = []
    for index, item in enumerate(items):
        text = text_selector(item) if text_selector is not None else item
        if not isinstance(text, str) or not text.strip():
            raise InvalidArgumentError(
                f"Corpus item at index {index} produced null or whitespace text",
                details={"index": index},
            )
        texts.append(text)

    if corpus_embeddings is None:
        logger.debug(f"Embedding corpus of {len(texts)} texts")
        corpus_embeddings = embedder.embed(texts)
        check_cancelled(cancellation)

    corpus_embeddings = list(corpus_embeddings)
    if len(corpus_embeddings) != len(items):
        raise ArgumentMismatchError(
            details={"corpus": len(items), "corpus_embeddings": len(corpus_embeddings)},
        )

    query_embedding = embedder.embed([query])[0]

    return find_closest(
        query_embedding,
        items,
        corpus_embeddings,
        top_k=top_k,
        min_score=min_score,
        cancellation=cancellation,
    )
