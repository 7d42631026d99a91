# Path: core/vector_store/codec.py
# Purpose: Convert embedding vectors to and from the store's vector literal text form.
# Layer: core/vector_store.
# Details: Literals look like "[0.12345678,-0.50000000]" with eight fractional digits per value.

from __future__ import annotations

from typing import Iterable

import numpy as np

PRECISION = 8


def encode_vector(vector: Iterable[float]) -> str:
    """Render a vector as a bracketed, comma-separated list of fixed-precision decimals."""

    return "[" + ",".join(f"{float(value):.{PRECISION}f}" for value in vector) + "]"


def decode_vector(literal: str) -> np.ndarray:
    """Parse a vector literal produced by :func:`encode_vector`."""

    text = literal.strip()
    if not (text.startswith("[") and text.endswith("]")):
        raise ValueError(f"Malformed vector literal: {literal[:32]!r}")

    body = text[1:-1].strip()
    if not body:
        return np.empty(0, dtype=np.float64)
    try:
        return np.array([float(part) for part in body.split(",")], dtype=np.float64)
    except ValueError as exc:
        raise ValueError(f"Malformed vector literal: {literal[:32]!r}") from exc
