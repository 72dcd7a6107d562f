from __future__ import annotations

from dataclasses import replace

from wearable_scraper.domain.models import ProductCandidate
from wearable_scraper.services.product_reconciler import find_match, normalize_title, reconcile


def _candidate(**overrides) -> ProductCandidate:
    base = ProductCandidate(
        title="Oura Ring",
        description="Smart ring",
        url="https://ouraring.com/",
        source="ouraring.com",
        category="Smart Ring",
        body_placement="Finger-Worn",
        sensory_inputs=("Biometric",),
        features=("Sleep Tracking",),
        is_always_on=True,
    )
    return replace(base, **overrides)


def test_insert_into_empty_catalog() -> None:
    result = reconcile(_candidate(), (), now_ms=1_000, id_factory=lambda: "product-1")

    assert result.is_new is True
    assert result.catalog == (result.product,)
    assert result.product.id == "product-1"
    assert result.product.timestamp == 1_000
    assert result.product.last_updated == 1_000
    assert result.product.price == "Unknown"
    assert result.product.pricing_model == "Unknown"
    assert result.product.headings == ()


def test_same_url_twice_updates_in_place() -> None:
    first = reconcile(_candidate(), (), now_ms=1_000)
    second = reconcile(_candidate(description="Updated"), first.catalog, now_ms=2_000)

    assert second.is_new is False
    assert len(second.catalog) == 1
    assert second.product.id == first.product.id
    assert second.product.timestamp == 1_000
    assert second.product.last_updated == 2_000
    assert second.product.description == "Updated"


def test_last_updated_strictly_increases_within_same_millisecond() -> None:
    first = reconcile(_candidate(), (), now_ms=5_000)
    second = reconcile(_candidate(), first.catalog, now_ms=5_000)
    third = reconcile(_candidate(), second.catalog, now_ms=4_000)

    assert second.product.last_updated == 5_001
    assert third.product.last_updated == 5_002
    assert third.product.timestamp == 5_000


def test_title_match_is_case_insensitive() -> None:
    first = reconcile(_candidate(), (), now_ms=1)
    second = reconcile(_candidate(title="  OURA RING ", url="https://elsewhere.example/"), first.catalog, now_ms=2)

    assert second.is_new is False
    assert second.product.url == "https://elsewhere.example/"
    assert len(second.catalog) == 1


def test_near_duplicate_titles_stay_distinct() -> None:
    first = reconcile(_candidate(), (), now_ms=1)
    second = reconcile(_candidate(title="Oura Ring Pro", url="https://ouraring.com/pro"), first.catalog, now_ms=2)

    assert second.is_new is True
    assert len(second.catalog) == 2


def test_first_match_wins() -> None:
    a = reconcile(_candidate(title="A", url="https://a.example/"), (), now_ms=1, id_factory=lambda: "a")
    b = reconcile(_candidate(title="B", url="https://b.example/"), a.catalog, now_ms=1, id_factory=lambda: "b")

    # Title matches "a", URL matches "b": the earlier catalog entry is updated.
    merged = reconcile(_candidate(title="a", url="https://b.example/"), b.catalog, now_ms=2)
    assert merged.product.id == "a"
    assert [p.id for p in merged.catalog] == ["a", "b"]


def test_missing_optional_fields_keep_existing_values() -> None:
    first = reconcile(_candidate(price="$299", headings=("Oura",)), (), now_ms=1)
    second = reconcile(_candidate(), first.catalog, now_ms=2)

    assert second.product.price == "$299"
    assert second.product.headings == ("Oura",)


def test_reconcile_does_not_mutate_input_catalog() -> None:
    first = reconcile(_candidate(), (), now_ms=1)
    catalog = list(first.catalog)
    reconcile(_candidate(description="changed"), catalog, now_ms=2)
    assert catalog[0].description == "Smart ring"


def test_empty_keys_never_match() -> None:
    first = reconcile(_candidate(title="", url=""), (), now_ms=1)
    assert find_match("", "", first.catalog) is None
    assert normalize_title("  Mixed Case ") == "mixed case"
