"""
Sized container generators.

Sequences are filled with exactly the drawn number of elements. Key-based
containers (sets, dicts) insert until the drawn size is reached, but give up
after `max_try` consecutive insertions that did not grow the container, so a
value generator with a small universe still terminates.
"""
from __future__ import annotations

import logging
import random
from collections import deque
from typing import Any, Callable, Deque, Dict, FrozenSet, Hashable, List, Set, Tuple, TypeVar

from randcheck.generators.base import Generator

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_MAX_TRY = 100


def _draw_size(size_gen: Generator[int], rng: random.Random) -> int:
    size = size_gen.get(rng)
    if size < 0:
        raise ValueError(f"Collection size must be >= 0, got {size}")
    return size


def list_gen(value_gen: Generator[T], size_gen: Generator[int]) -> Generator[List[T]]:
    def _draw(rng: random.Random) -> List[T]:
        size = _draw_size(size_gen, rng)
        return [value_gen.get(rng) for _ in range(size)]

    return Generator(_draw)


def deque_gen(value_gen: Generator[T], size_gen: Generator[int]) -> Generator[Deque[T]]:
    return list_gen(value_gen, size_gen).map(deque)


def mutable_key_based_collection_gen(
    factory: Callable[[], C],
    mutator: Callable[[C, T], Any],
    size_fn: Callable[[C], int],
    value_gen: Generator[T],
    size_gen: Generator[int],
    max_try: int = DEFAULT_MAX_TRY,
) -> Generator[C]:
    """
    Build a container by repeated insertion.

    `mutator` inserts one drawn value into the container and `size_fn`
    reports its size. The container is returned as soon as it reaches the
    drawn size, or as is after `max_try` consecutive insertions that left its
    size unchanged.
    """
    if max_try <= 0:
        raise ValueError("max_try must be > 0")

    def _draw(rng: random.Random) -> C:
        target = _draw_size(size_gen, rng)
        container = factory()
        failures = 0
        while size_fn(container) < target:
            before = size_fn(container)
            mutator(container, value_gen.get(rng))
            if size_fn(container) > before:
                failures = 0
                continue
            failures += 1
            if failures >= max_try:
                logger.debug(
                    "Stopped filling %s at %d/%d elements after %d failed insertions",
                    type(container).__name__,
                    size_fn(container),
                    target,
                    failures,
                )
                break
        return container

    return Generator(_draw)


def set_gen(value_gen: Generator[K], size_gen: Generator[int], max_try: int = DEFAULT_MAX_TRY) -> Generator[Set[K]]:
    return mutable_key_based_collection_gen(set, set.add, len, value_gen, size_gen, max_try)


def frozenset_gen(
    value_gen: Generator[K], size_gen: Generator[int], max_try: int = DEFAULT_MAX_TRY
) -> Generator[FrozenSet[K]]:
    return set_gen(value_gen, size_gen, max_try).map(frozenset)


def _put_entry(container: Dict[K, V], entry: Tuple[K, V]) -> None:
    key, value = entry
    container[key] = value


def dict_gen(
    entry_gen: Generator[Tuple[K, V]],
    size_gen: Generator[int],
    max_try: int = DEFAULT_MAX_TRY,
    factory: Callable[[], Dict[K, V]] = dict,
) -> Generator[Dict[K, V]]:
    """Dicts filled from `(key, value)` entries; a repeated key overwrites without growing."""
    return mutable_key_based_collection_gen(factory, _put_entry, len, entry_gen, size_gen, max_try)
