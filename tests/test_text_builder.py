from core.indexing.text_builder import build_canonical_text, normalize_text
from core.models.domain import ListingAttributes


def test_normalize_text_collapses_whitespace():
    assert normalize_text("  Vue \n mer\t\tF3 ") == "Vue mer F3"
    assert normalize_text(None) == ""
    assert normalize_text(42) == "42"


def test_scenario_listing_contains_ordered_fields():
    listing = ListingAttributes(listing_id="1", ref="R1", title="Appartement F3", location="Oran", beds=3)

    assert "Appartement F3 Oran 3 beds chambres" in build_canonical_text(listing)


def test_full_field_order():
    listing = ListingAttributes(
        listing_id="1",
        ref="R1",
        title="Villa",
        transaction_type="vente",
        location_type="ville",
        category="maison",
        location="Alger  Centre",
        description="Belle\nvilla",
        price="25 000 000 DA",
        beds=4,
        baths=2.0,
        area=180.5,
        amenities=["piscine", "garage"],
    )

    assert build_canonical_text(listing) == (
        "Villa vente ville maison Alger Centre Belle villa 25 000 000 DA "
        "4 beds chambres 2 baths salles 180.5 m2 surface piscine garage"
    )


def test_zero_counts_are_kept_and_missing_ones_dropped():
    listing = ListingAttributes(listing_id="1", ref="R1", title="Studio", beds=0, baths=None)

    assert build_canonical_text(listing) == "Studio 0 beds chambres"


def test_empty_attributes_yield_empty_text():
    listing = ListingAttributes(listing_id="1", ref="R1", title="   ", amenities=[])

    assert build_canonical_text(listing) == ""


def test_deterministic_for_equal_normalized_fields():
    first = ListingAttributes(listing_id="1", ref="R1", title="Duplex  Oran", amenities=["wifi"])
    second = ListingAttributes(listing_id="2", ref="R2", title=" Duplex Oran ", amenities=["wifi"])

    assert build_canonical_text(first) == build_canonical_text(second)
    assert build_canonical_text(first) == build_canonical_text(first)


def test_from_row_maps_storage_columns():
    listing = ListingAttributes.from_row(
        {"id": 7, "ref": "ALG-7", "type": "location", "location_type": "quartier", "amenities": ["ascenseur"]}
    )

    assert listing.listing_id == "7"
    assert listing.transaction_type == "location"
    assert build_canonical_text(listing) == "location quartier ascenseur"
