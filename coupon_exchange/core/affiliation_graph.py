"""Affiliation Graph - pure derivation of cross-promotion pairs from store categories.

Invariants:
    - A pair is emitted iff the ids differ and both categories are present and differ
    - Orientation is canonical: the lexicographically smaller id string is store A
    - Each unordered pair is emitted exactly once (dedup keyed on "storeA-storeB")
    - Empty input yields an empty list, never an error

Design Decisions:
    - Full ordered-pair scan with a seen-key set: O(n^2) over a few hundred
      neighborhood stores; output order follows input order
    - Null or blank category excludes the store entirely: a missing classifier
      must not make a store look "different" from every other store
"""

from typing import Iterable

from coupon_exchange.core.domain_types import AffiliationPair, StoreRecord


def has_category(store: StoreRecord) -> bool:
    return bool(store.category and store.category.strip())


def is_eligible_pair(origin: StoreRecord, target: StoreRecord) -> bool:
    """Distinct stores with present, differing categories."""
    if origin.id == target.id:
        return False
    if not (has_category(origin) and has_category(target)):
        return False
    return origin.category.strip() != target.category.strip()


def canonical_pair(origin: StoreRecord, target: StoreRecord) -> AffiliationPair:
    """Order the pair by string comparison of identities."""
    if str(origin.id) < str(target.id):
        return AffiliationPair(store_a_id=origin.id, store_b_id=target.id)
    return AffiliationPair(store_a_id=target.id, store_b_id=origin.id)


def build_affiliations(stores: Iterable[StoreRecord]) -> list[AffiliationPair]:
    """Derive every qualifying unordered pair exactly once. Pure, no IO."""
    store_list = list(stores)
    pairs: list[AffiliationPair] = []
    seen: set[str] = set()

    for origin in store_list:
        for target in store_list:
            if not is_eligible_pair(origin, target):
                continue
            pair = canonical_pair(origin, target)
            if pair.key in seen:
                continue
            seen.add(pair.key)
            pairs.append(pair)

    return pairs


def chunked(pairs: list[AffiliationPair], size: int) -> list[list[AffiliationPair]]:
    """Split pairs into write batches of at most `size` rows."""
    if size < 1:
        raise ValueError("batch size must be positive")
    return [pairs[i:i + size] for i in range(0, len(pairs), size)]
