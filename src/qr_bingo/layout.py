from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

from .rng import RandomSource

T = TypeVar("T")


def fisher_yates(items: List[T], rng: RandomSource) -> List[T]:
    """Shuffle ``items`` in place and return it."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffled_with_length(catalog: Sequence[T], length: int, rng: RandomSource) -> List[T]:
    """Concatenate fresh shuffles of ``catalog`` until ``length`` items are drawn.

    Each entry then occurs at least ``length // len(catalog)`` times and
    counts differ by at most one.
    """
    if not catalog:
        raise ValueError("catalog must contain at least one variation")
    if length < 0:
        raise ValueError("length must be >= 0")
    dest: List[T] = []
    while len(dest) < length:
        dest.extend(fisher_yates(list(catalog), rng))
    return dest[:length]


def grid_position(index: int, width: int) -> Tuple[int, int]:
    """Row-major index to ``(x, y)``."""
    return index % width, index // width


def min_occurrences(length: int, catalog_size: int) -> int:
    return length // catalog_size
