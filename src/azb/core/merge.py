"""Combination of the ranked and fallback query partitions."""

from typing import Iterable, List, TypeVar

T = TypeVar("T")


def merge_prioritized(ranked: Iterable[T], fallback: Iterable[T]) -> List[T]:
    """Concatenate the ranked partition and the fallback partition.

    Each partition keeps the order its query produced. Ranked items always
    precede fallback items regardless of recency; the partitions are never
    interleaved or re-sorted together. Either side may be empty.

    Args:
        ranked: Items of ranked types, already ordered by StackRank
        fallback: Remaining items, already ordered by most recent change

    Returns:
        A new list holding all ranked items followed by all fallback items
    """
    merged = list(ranked)
    merged.extend(fallback)
    return merged
