"""Unit tests for vector normalization and the Embedding wrapper."""

from array import array

import pytest
from pydantic import ValidationError

from langvec import Embedding
from langvec.errors import UnsupportedQueryTypeError
from langvec.vector_store.vectors import to_query_vector, try_to_vector


@pytest.mark.unit
class TestTryToVector:

    def test_list(self):
        assert try_to_vector([1, 0.5]) == (1.0, 0.5)

    def test_tuple(self):
        assert try_to_vector((0.0, 1.0)) == (0.0, 1.0)

    def test_float_buffer(self):
        assert try_to_vector(array("f", [1.0, 0.5])) == (1.0, 0.5)
        assert try_to_vector(array("d", [0.25])) == (0.25,)

    def test_memoryview(self):
        assert try_to_vector(memoryview(array("d", [1.0, 2.0]))) == (1.0, 2.0)

    def test_embedding(self):
        assert try_to_vector(Embedding(vector=[1.0, 0.0])) == (1.0, 0.0)

    def test_empty_sequence(self):
        assert try_to_vector([]) == ()

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "1,0",
            b"\x00\x01",
            {"x": 1.0},
            [1.0, "a"],
            [True, False],
            array("i", [1, 2]),
            memoryview(b"ab"),
        ],
    )
    def test_rejected(self, value):
        assert try_to_vector(value) is None


@pytest.mark.unit
class TestToQueryVector:

    def test_supported(self):
        assert to_query_vector([1.0, 0.0]) == (1.0, 0.0)

    def test_unsupported_raises(self):
        with pytest.raises(UnsupportedQueryTypeError, match="str") as exc_info:
            to_query_vector("hello")
        assert exc_info.value.details["query_type"] == "str"


@pytest.mark.unit
class TestEmbedding:

    def test_coerces_ints(self):
        embedding = Embedding(vector=[1, 2, 3], model_id="fake-model")
        assert embedding.vector == (1.0, 2.0, 3.0)
        assert embedding.dimensions == 3
        assert len(embedding) == 3
        assert embedding.model_id == "fake-model"

    def test_from_buffer(self):
        assert Embedding(vector=array("f", [0.5])).vector == (0.5,)

    def test_frozen(self):
        embedding = Embedding(vector=[1.0])
        with pytest.raises(ValidationError):
            embedding.vector = (2.0,)

    def test_invalid_vector(self):
        with pytest.raises(ValidationError):
            Embedding(vector="not a vector")
