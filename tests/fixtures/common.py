"""Shared test fixtures for all test types."""

import pytest

from langvec import InMemoryVectorStore
from tests.utils.records import ProductRecord, product


@pytest.fixture
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def products(store):
    """Empty ``int -> ProductRecord`` collection named "products"."""
    return store.get_collection("products", int, ProductRecord)


@pytest.fixture
def sample_products() -> list[ProductRecord]:
    return [
        product(1, [1.0, 0.0], name="Web Browser", category="Software"),
        product(2, [0.0, 1.0], name="iOS Toolkit", category="Mobile"),
        product(3, [0.5, 0.5], name="Dotnet SDK", category="Software"),
    ]


@pytest.fixture
def populated_products(products, sample_products):
    products.upsert_many(sample_products)
    return products


@pytest.fixture
def sample_corpus() -> tuple[list[str], list[list[float]]]:
    return ["a", "b", "c"], [[1.0, 0.0], [0.0, 1.0], [0.5, 0.5]]
