"""Unit tests for find_closest_text."""

from dataclasses import dataclass

import pytest

from langvec import find_closest_text
from langvec.errors import ArgumentMismatchError, InvalidArgumentError
from tests.utils.assertions import assert_scores_descending
from tests.utils.embedders import KeywordEmbedder


@dataclass
class Article:
    title: str
    body: str


@pytest.fixture
def embedder():
    return KeywordEmbedder(["web", "mobile", "desktop"])


@pytest.fixture
def corpus():
    return [
        "javascript for web browsers",
        "swift for mobile apps",
        "dotnet for desktop and web",
    ]


@pytest.mark.unit
class TestFindClosestText:

    def test_ranks_corpus(self, embedder, corpus):
        results = find_closest_text(embedder, "web", corpus, top_k=2)

        assert [r.item for r in results] == [corpus[0], corpus[2]]
        assert [r.index for r in results] == [0, 2]
        assert_scores_descending(results)

    def test_embeds_corpus_once_then_query(self, embedder, corpus):
        find_closest_text(embedder, "mobile", corpus, top_k=1)

        assert embedder.calls == [corpus, ["mobile"]]

    def test_precomputed_embeddings_skip_corpus_call(self, embedder, corpus):
        embeddings = embedder.embed(corpus)
        embedder.calls.clear()

        results = find_closest_text(embedder, "mobile", corpus, corpus_embeddings=embeddings, top_k=1)

        assert embedder.calls == [["mobile"]]
        assert results[0].index == 1

    def test_min_score(self, embedder, corpus):
        results = find_closest_text(embedder, "desktop", corpus, top_k=3, min_score=0.5)
        assert [r.index for r in results] == [2]

    def test_text_selector_returns_items(self, embedder):
        articles = [
            Article(title="Phones", body="mobile first"),
            Article(title="Sites", body="web first"),
        ]

        results = find_closest_text(embedder, "web", articles, top_k=1, text_selector=lambda a: a.body)

        assert results[0].item is articles[1]
        assert embedder.calls[0] == ["mobile first", "web first"]

    def test_empty_corpus_skips_embedder(self, embedder):
        assert find_closest_text(embedder, "web", [], top_k=3) == []
        assert embedder.calls == []

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query(self, embedder, corpus, query):
        with pytest.raises(InvalidArgumentError, match="Query"):
            find_closest_text(embedder, query, corpus)

    def test_missing_embedder(self, corpus):
        with pytest.raises(InvalidArgumentError, match="embedder"):
            find_closest_text(None, "web", corpus)

    def test_invalid_top_k(self, embedder, corpus):
        with pytest.raises(InvalidArgumentError, match="top_k"):
            find_closest_text(embedder, "web", corpus, top_k=0)

    def test_blank_corpus_text(self, embedder):
        with pytest.raises(InvalidArgumentError) as exc_info:
            find_closest_text(embedder, "web", ["web apps", "  "])

        assert exc_info.value.details["index"] == 1
        assert embedder.calls == []

    def test_selector_returning_none(self, embedder):
        articles = [Article(title="a", body="web")]
        with pytest.raises(InvalidArgumentError):
            find_closest_text(embedder, "web", articles, text_selector=lambda a: None)

    def test_embedding_count_mismatch(self, embedder, corpus):
        with pytest.raises(ArgumentMismatchError):
            find_closest_text(embedder, "web", corpus, corpus_embeddings=[[1.0, 0.0, 0.0]])

    def test_embedder_errors_propagate(self, mocker, corpus):
        failing = KeywordEmbedder(["web"])
        mocker.patch.object(failing, "embed", side_effect=RuntimeError("model unavailable"))

        with pytest.raises(RuntimeError, match="model unavailable"):
            find_closest_text(failing, "web", corpus)
