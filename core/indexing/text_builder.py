# Path: core/indexing/text_builder.py
# Purpose: Derive the canonical text embedded for each listing.
# Layer: core/indexing.
# Details: Field order is fixed so identical attributes always produce an identical string.

from __future__ import annotations

from typing import Any, List, Optional

from core.models.domain import ListingAttributes


def normalize_text(value: Optional[Any]) -> str:
    """Collapse whitespace runs into single spaces and trim; ``None`` becomes an empty string."""

    if value is None:
        return ""
    return " ".join(str(value).split())


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _quantity(value: Optional[Any], suffix: str) -> str:
    if value is None:
        return ""
    return f"{_format_number(value)} {suffix}"


def build_canonical_text(attrs: ListingAttributes) -> str:
    """
    Build the single normalized string that represents a listing in the index.

    An empty result means there is nothing to index.
    """

    amenities = " ".join(str(item) for item in attrs.amenities) if isinstance(attrs.amenities, list) else ""
    fields: List[Any] = [
        attrs.title,
        attrs.transaction_type,
        attrs.location_type,
        attrs.category,
        attrs.location,
        attrs.description,
        attrs.price,
        _quantity(attrs.beds, "beds chambres"),
        _quantity(attrs.baths, "baths salles"),
        _quantity(attrs.area, "m2 surface"),
        amenities,
    ]
    normalized = (normalize_text(value) for value in fields)
    return " ".join(value for value in normalized if value)
