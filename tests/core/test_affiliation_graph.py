"""Affiliation Graph - pure pair derivation from store categories.

Tests:
    - Every distinct differing-category pair appears exactly once, sorted
    - Same category, same id and missing category never pair
    - Output is independent of input orientation (no reversed duplicates)
"""

from itertools import combinations
from uuid import UUID, uuid4

import pytest

from coupon_exchange.core.affiliation_graph import (
    build_affiliations, canonical_pair, chunked, is_eligible_pair,
)
from coupon_exchange.core.domain_types import AffiliationPair, StoreId, StoreRecord


def _store(category, name="Store", store_id=None):
    return StoreRecord(
        id=StoreId(store_id or uuid4()), store_name=name, category=category,
    )


def test_empty_store_set_returns_empty_list():
    assert build_affiliations([]) == []


def test_single_store_has_no_pairs():
    assert build_affiliations([_store("cafe")]) == []


def test_differing_categories_form_one_canonical_pair():
    low = _store("cafe", store_id=UUID("00000000-0000-0000-0000-000000000001"))
    high = _store("bakery", store_id=UUID("ffffffff-0000-0000-0000-000000000001"))

    pairs = build_affiliations([high, low])

    assert pairs == [AffiliationPair(store_a_id=low.id, store_b_id=high.id)]


def test_same_category_never_pairs():
    assert build_affiliations([_store("cafe"), _store("cafe"), _store("cafe")]) == []


def test_self_pair_rejected():
    store = _store("cafe")
    assert not is_eligible_pair(store, store)


@pytest.mark.parametrize("missing", [None, "", "   "])
def test_missing_category_never_pairs(missing):
    stores = [_store(missing), _store("cafe"), _store(missing)]
    pairs = build_affiliations(stores)
    assert pairs == []


def test_every_qualifying_pair_appears_exactly_once():
    categories = ["cafe", "cafe", "nail", "bakery", "bakery", "florist", None]
    stores = [_store(c) for c in categories]

    pairs = build_affiliations(stores)

    expected = {
        tuple(sorted((str(a.id), str(b.id))))
        for a, b in combinations(stores, 2)
        if a.category and b.category and a.category != b.category
    }
    got = [(str(p.store_a_id), str(p.store_b_id)) for p in pairs]
    assert len(got) == len(set(got))
    assert set(got) == expected


def test_pairs_are_sorted_by_identity_string():
    stores = [_store(c) for c in ("cafe", "nail", "bakery", "gym", "florist")]
    for pair in build_affiliations(stores):
        assert str(pair.store_a_id) < str(pair.store_b_id)


def test_canonical_pair_is_orientation_independent():
    a, b = _store("cafe"), _store("nail")
    assert canonical_pair(a, b) == canonical_pair(b, a)


def test_pair_key_and_partner_lookup():
    a, b = _store("cafe"), _store("nail")
    pair = canonical_pair(a, b)
    assert pair.key == f"{pair.store_a_id}-{pair.store_b_id}"
    assert pair.partner_of(a.id) == b.id
    assert pair.partner_of(b.id) == a.id


def test_chunked_splits_into_batches():
    stores = [_store(c) for c in ("a", "b", "c", "d", "e")]
    pairs = build_affiliations(stores)  # 10 pairs
    batches = chunked(pairs, 4)
    assert [len(b) for b in batches] == [4, 4, 2]
    assert [p for batch in batches for p in batch] == pairs


def test_chunked_rejects_non_positive_size():
    with pytest.raises(ValueError):
        chunked([], 0)
