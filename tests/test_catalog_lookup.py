"""
Tests for resolving free text to catalog entries.
"""

from __future__ import annotations

from quotebot.application.use_cases.catalog_lookup import CatalogLookup, compact, spelling_variants
from quotebot.domain.entities.catalog_entry import CatalogEntry, CatalogKind
from quotebot.infrastructure.catalog.catalog_data import MYLOR_BAG


def test_separator_insensitive_product_names(lookup: CatalogLookup):
    found = {lookup.find_product(name).id for name in ("standup pouch", "stand up pouch", "Stand-up Pouch")}
    assert found == {"prod-stand-up-pouch"}


def test_compact():
    assert compact("Stand-up Pouch") == compact("standup pouch") == "standuppouch"


def test_spelling_correction(lookup: CatalogLookup):
    assert spelling_variants("Mylar bag") == ["Mylar bag", "mylor bag"]
    assert spelling_variants("pouch") == ["pouch"]
    assert lookup.find_category("mylar bag").name == "Mylor Bag"


def test_material_tokens_in_any_order(lookup: CatalogLookup):
    assert lookup.find_material("White PE + PET", MYLOR_BAG).name == "PET + White PE"


def test_token_plurality_fallback(lookup: CatalogLookup):
    assert lookup.find_material("pet mpet foil", MYLOR_BAG).name == "PET + MPET + PE"


def test_description_match(lookup: CatalogLookup):
    assert lookup.find_material("rainbow holographic film", MYLOR_BAG).name == "Holographic + PE"


def test_numeric_input_only_matches_external_id(lookup: CatalogLookup):
    assert lookup.find_product("2002").name == "Stand Up Pouch"
    # never a position in the displayed list
    assert lookup.find_product("2") is None


def test_unknown_name(lookup: CatalogLookup):
    assert lookup.find_material("unobtainium", MYLOR_BAG) is None
    assert lookup.match("", []) is None


def test_category_scoping(lookup: CatalogLookup):
    assert lookup.find_product("Stand Up Pouch", "cat-label") is None
    assert lookup.find_finish("matte", "cat-folding-carton").id == "fin-carton-matte"


def test_find_mentioned_in_sentence(catalog, lookup: CatalogLookup):
    product = lookup.find_mentioned("I need quote on flat pouch", catalog.list_all_products())
    assert product.name == "Flat Pouch (3 side seal)"
    assert lookup.find_mentioned("hi there", catalog.list_all_products()) is None


def test_find_mentioned_prefers_longest_name(catalog):
    pouch = CatalogEntry(id="p1", kind=CatalogKind.PRODUCT, name="Pouch", sort_order=1)
    stand_up = CatalogEntry(id="p2", kind=CatalogKind.PRODUCT, name="Stand Up Pouch", sort_order=2)
    lookup = CatalogLookup(catalog)
    assert lookup.find_mentioned("need a stand up pouch", [pouch, stand_up]) == stand_up


def test_ties_break_on_sort_order(catalog):
    first = CatalogEntry(id="a", kind=CatalogKind.MATERIAL, name="Clear Film", sort_order=2)
    second = CatalogEntry(id="b", kind=CatalogKind.MATERIAL, name="Clear Foil", sort_order=1)
    lookup = CatalogLookup(catalog)
    assert lookup.match("clear", [first, second]) == second


def test_deterministic(lookup: CatalogLookup):
    results = {lookup.find_material("kraft paper", MYLOR_BAG).id for _ in range(5)}
    assert results == {"mat-kraft-pe"}


def test_names_match_whole_words_only(lookup: CatalogLookup):
    assert lookup.find_finish("doesn't matter", MYLOR_BAG) is None
    assert lookup.find_finish("matt", MYLOR_BAG).id == "fin-mylor-matte"
    assert lookup.find_product("stand up").id == "prod-stand-up-pouch"
