"""
Generated callables.

A generated function is deterministic: it answers the same output for the
same arguments, for as long as it lives. Calling it does not disturb the
random source it was generated from.
"""
from __future__ import annotations

import random
from typing import Any, Callable, Optional, TypeVar

from randcheck.generators.base import Generator, co_generator, coin

R = TypeVar("R")


def supplier_gen(output_gen: Generator[R]) -> Generator[Callable[[], R]]:
    """Zero-argument functions returning one drawn value."""

    def _supplier(value: R) -> Callable[[], R]:
        return lambda: value

    return output_gen.map(_supplier)


def function_gen(output_gen: Generator[R], arity: Optional[int] = None) -> Generator[Callable[..., R]]:
    """
    Functions whose output is co-generated from their arguments.

    Each generated function draws its own salt, so two functions generated
    from the same `output_gen` do not answer the same outputs. When `arity`
    is given, calling with another number of positional arguments raises
    `TypeError`.
    """
    if arity is not None and arity < 0:
        raise ValueError("arity must be >= 0")

    def _draw(rng: random.Random) -> Callable[..., R]:
        salt = rng.getrandbits(64)

        def _function(*args: Any) -> R:
            if arity is not None and len(args) != arity:
                raise TypeError(f"Generated function takes {arity} arguments but {len(args)} were given")
            return co_generator((salt,) + args, output_gen).get(rng)

        return _function

    return Generator(_draw)


def predicate_gen(arity: Optional[int] = None, probability: float = 0.5) -> Generator[Callable[..., bool]]:
    return function_gen(coin(probability), arity)
