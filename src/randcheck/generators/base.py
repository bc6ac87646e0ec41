"""
Generator algebra.

A generator is a pure function from a `random.Random` to a value. All the
randomness comes from the source handed to `get`, so two calls on sources in
the same state always produce the same value.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

from randcheck.exceptions import MaxFilterLoopError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

MAX_FILTER_LOOP = 1000


class Generator(Generic[T]):
    """Wraps a `(random.Random) -> T` function and exposes the combinators."""

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[random.Random], T]):
        self._fn = fn

    def get(self, rng: random.Random) -> T:
        return self._fn(rng)

    def __call__(self, rng: random.Random) -> T:
        return self._fn(rng)

    def map(self, mapper: Callable[[T], R]) -> "Generator[R]":
        return map_gen(self, mapper)

    def flat_map(self, mapper: Callable[[T], "Generator[R]"]) -> "Generator[R]":
        return flat_map_gen(self, mapper)

    def filter(self, predicate: Callable[[T], bool], max_loop: int = MAX_FILTER_LOOP) -> "Generator[T]":
        return filter_gen(self, predicate, max_loop)

    def nullable(self, rate: float) -> "Generator[Optional[T]]":
        return nullable(self, rate)


def const_gen(value: T) -> Generator[T]:
    return Generator(lambda rng: value)


def one_of(universe: Sequence[T]) -> Generator[T]:
    """Pick one element of `universe` uniformly."""
    items = tuple(universe)
    if not items:
        raise ValueError("Cannot pick from an empty universe")
    if len(items) == 1:
        return const_gen(items[0])
    size = len(items)
    return Generator(lambda rng: items[rng.randrange(size)])


def one_gen_of(generators: Sequence[Generator[T]]) -> Generator[T]:
    """Pick one generator of `generators` uniformly and draw from it."""
    return one_of(generators).flat_map(lambda gen: gen)


def coin(probability: float) -> Generator[bool]:
    """True with the given probability."""
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be within [0, 1], got {probability}")
    return Generator(lambda rng: rng.random() <= probability)


def nullable(gen: Generator[T], rate: float) -> Generator[Optional[T]]:
    """None with probability `rate`, otherwise a value from `gen`."""
    is_null = coin(rate)

    def _draw(rng: random.Random) -> Optional[T]:
        if is_null.get(rng):
            return None
        return gen.get(rng)

    return Generator(_draw)


def selection(true_gen: Generator[T], false_gen: Generator[T], bool_gen: Generator[bool]) -> Generator[T]:
    def _draw(rng: random.Random) -> T:
        if bool_gen.get(rng):
            return true_gen.get(rng)
        return false_gen.get(rng)

    return Generator(_draw)


def filter_gen(gen: Generator[T], predicate: Callable[[T], bool], max_loop: int = MAX_FILTER_LOOP) -> Generator[T]:
    """
    Redraw from `gen` until `predicate` holds.

    Raises `MaxFilterLoopError` once `max_loop` draws were rejected: a
    predicate that almost never matches is a setup problem, not a check
    failure.
    """
    if max_loop <= 0:
        raise ValueError("max_loop must be > 0")

    def _draw(rng: random.Random) -> T:
        for _ in range(max_loop):
            value = gen.get(rng)
            if predicate(value):
                return value
        logger.debug("Filter rejected %d consecutive values", max_loop)
        raise MaxFilterLoopError(max_loop)

    return Generator(_draw)


def map_gen(gen: Generator[T], mapper: Callable[[T], R]) -> Generator[R]:
    return Generator(lambda rng: mapper(gen.get(rng)))


def flat_map_gen(gen: Generator[T], mapper: Callable[[T], Generator[R]]) -> Generator[R]:
    return Generator(lambda rng: mapper(gen.get(rng)).get(rng))


def _seed_of(value: Any) -> int:
    try:
        return hash(value)
    except TypeError:
        # lists, dicts and other unhashables
        return hash(repr(value))


def co_generator(value: Any, output_gen: Generator[R]) -> Generator[R]:
    """
    Draw from `output_gen` on a source reseeded from `value`.

    The same input always yields the same output, and the caller's source is
    restored afterwards so the draw leaves no trace on it.
    """
    seed = _seed_of(value)

    def _draw(rng: random.Random) -> R:
        state = rng.getstate()
        try:
            rng.seed(seed)
            return output_gen.get(rng)
        finally:
            rng.setstate(state)

    return Generator(_draw)


def tuple_gen(*generators: Generator[Any]) -> Generator[Tuple[Any, ...]]:
    """Draw each generator in order."""
    gens = tuple(generators)
    return Generator(lambda rng: tuple(gen.get(rng) for gen in gens))
