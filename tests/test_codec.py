import numpy as np
import pytest

from core.vector_store.codec import decode_vector, encode_vector


def test_encode_uses_eight_fractional_digits():
    assert encode_vector([0.5, -1, 0.123456789]) == "[0.50000000,-1.00000000,0.12345679]"


def test_encode_empty_vector():
    assert encode_vector([]) == "[]"


def test_round_trip_within_precision():
    rng = np.random.default_rng(7)
    vector = rng.normal(size=64)

    decoded = decode_vector(encode_vector(vector))

    assert decoded.shape == vector.shape
    assert np.allclose(decoded, vector, atol=5e-9, rtol=0)


def test_decode_rejects_malformed_literal():
    with pytest.raises(ValueError):
        decode_vector("0.1,0.2")
    with pytest.raises(ValueError):
        decode_vector("[0.1,abc]")
