"""
Default registry: generators for builtins and common standard-library types.

Container rules look up the `Size` shape in the root registry, so overriding
`Size` in front of the default registry changes the size of every container.
"""
from __future__ import annotations

import collections
import collections.abc
import decimal
import random
import uuid
from decimal import Decimal
from typing import Any, Callable, Optional

from randcheck.generators.base import Generator, coin, const_gen, one_of, tuple_gen
from randcheck.generators.collections import (
    DEFAULT_MAX_TRY,
    deque_gen,
    dict_gen,
    frozenset_gen,
    list_gen,
    set_gen,
)
from randcheck.generators.functions import function_gen, supplier_gen
from randcheck.generators.numbers import (
    big_decimal_gen,
    big_integer_gen,
    double_gen,
    integer_gen,
    long_gen,
)
from randcheck.generators.text import bytes_gen, word_gen
from randcheck.identifiers import BigInt, Identifier, Int32, Int64, NoneType, Size, param_id
from randcheck.ranges import IntRange
from randcheck.registry.base import DynamicRule, Registry, RegistryBuilder, all_resolved, from_hierarchy

DEFAULT_MAX_SIZE = 100


def _ieee_context(prec: int, emax: int) -> decimal.Context:
    return decimal.Context(prec=prec, Emax=emax, Emin=1 - emax, rounding=decimal.ROUND_HALF_EVEN)


def ieee_context_gen() -> Generator[decimal.Context]:
    """Fresh decimal32, decimal64 or decimal128 contexts."""
    return one_of([(7, 96), (16, 384), (34, 6144)]).map(lambda bounds: _ieee_context(*bounds))


def _sized(builder: Callable[..., Generator[Any]]) -> DynamicRule:
    """Rule calling `builder(*parameter_generators, size_gen)`."""

    def _rule(root: Registry, *parameters: Identifier) -> Optional[Generator[Any]]:
        size_gen = root.lookup(Size)
        if size_gen is None:
            return None
        return all_resolved(lambda *gens: builder(*gens, size_gen))(root, *parameters)

    return _rule


def _mapping_rule(factory: Callable[[], Any], max_try: int) -> DynamicRule:
    def _rule(root: Registry, key: Identifier, value: Identifier) -> Optional[Generator[Any]]:
        size_gen = root.lookup(Size)
        entry_gen = root.lookup(param_id(tuple, key, value))
        if size_gen is None or entry_gen is None:
            return None
        return dict_gen(entry_gen, size_gen, max_try, factory)

    return _rule


def _callable_rule(root: Registry, *parameters: Identifier) -> Optional[Generator[Any]]:
    # the last parameter is the return shape
    output_gen = root.lookup(parameters[-1])
    if output_gen is None:
        return None
    arity = len(parameters) - 1
    if arity == 0:
        return supplier_gen(output_gen)
    return function_gen(output_gen, arity)


def _iterator_rule(root: Registry, item: Identifier) -> Optional[Generator[Any]]:
    iterable_gen = root.lookup(param_id(collections.abc.Iterable, item))
    if iterable_gen is None:
        return None
    return iterable_gen.map(iter)


def _size_factory(root: Registry) -> Optional[Generator[Any]]:
    return root.lookup(Size)


def default_registry(max_size: int = DEFAULT_MAX_SIZE, max_try: int = DEFAULT_MAX_TRY) -> Registry:
    """
    Registry for ints, floats, decimals, bools, strings, bytes, UUIDs,
    decimal contexts, random sources, builtin and abstract collections and
    callables.

    `max_size` bounds every container and string; `max_try` bounds the
    failed insertions tolerated when filling sets and dicts.
    """
    if max_size < 0:
        raise ValueError("max_size must be >= 0")

    abc = collections.abc
    builder = RegistryBuilder()

    builder.put(Int32, integer_gen())
    builder.put(Int64, long_gen())
    builder.put(int, long_gen())
    builder.put(BigInt, big_integer_gen())
    builder.put(Size, integer_gen(IntRange.closed(0, max_size)))
    builder.put(float, double_gen())
    builder.put(Decimal, big_decimal_gen())
    builder.put(bool, coin(0.5))
    builder.put_factory(str, lambda root: _map_optional(_size_factory(root), word_gen))
    builder.put_factory(bytes, lambda root: _map_optional(_size_factory(root), bytes_gen))
    builder.put(NoneType, const_gen(None))
    builder.put(uuid.UUID, Generator(lambda rng: uuid.UUID(int=rng.getrandbits(128))))
    builder.put(decimal.Context, ieee_context_gen())
    builder.put(random.Random, long_gen().map(random.Random))

    builder.put_dynamic(list, _sized(list_gen), arity=1)
    builder.put_dynamic(tuple, all_resolved(tuple_gen))
    builder.put_dynamic(set, _sized(lambda value_gen, size_gen: set_gen(value_gen, size_gen, max_try)), arity=1)
    builder.put_dynamic(
        frozenset, _sized(lambda value_gen, size_gen: frozenset_gen(value_gen, size_gen, max_try)), arity=1
    )
    builder.put_dynamic(collections.deque, _sized(deque_gen), arity=1)
    builder.put_dynamic(dict, _mapping_rule(dict, max_try), arity=2)
    builder.put_dynamic(collections.OrderedDict, _mapping_rule(collections.OrderedDict, max_try), arity=2)
    builder.put_dynamic(abc.Callable, _callable_rule)

    builder.put_dynamic(abc.Iterator, _iterator_rule, arity=1)
    builder.put_dynamic(abc.Iterable, from_hierarchy(abc.Collection), arity=1)
    builder.put_dynamic(abc.Collection, from_hierarchy(abc.Sequence, abc.Set), arity=1)
    builder.put_dynamic(abc.Sequence, from_hierarchy(abc.MutableSequence), arity=1)
    builder.put_dynamic(abc.MutableSequence, from_hierarchy(list, collections.deque), arity=1)
    builder.put_dynamic(abc.Set, from_hierarchy(abc.MutableSet, frozenset), arity=1)
    builder.put_dynamic(abc.MutableSet, from_hierarchy(set), arity=1)
    builder.put_dynamic(abc.Mapping, from_hierarchy(abc.MutableMapping), arity=2)
    builder.put_dynamic(abc.MutableMapping, from_hierarchy(dict, collections.OrderedDict), arity=2)

    return builder.build()


def _map_optional(gen: Optional[Generator[Any]], mapper: Callable[[Generator[Any]], Generator[Any]]) -> Optional[Generator[Any]]:
    return None if gen is None else mapper(gen)
