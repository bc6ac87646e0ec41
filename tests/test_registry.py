from __future__ import annotations

import collections
import collections.abc
import decimal
import random
import uuid
from decimal import Decimal
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, OrderedDict, Sequence, Set, Tuple

import pytest

from randcheck.generators import const_gen
from randcheck.identifiers import BigInt, Int32, Size, param_id, type_id, wildcard
from randcheck.ranges import INT32_MAX, INT32_MIN
from randcheck.registry import (
    EMPTY_REGISTRY,
    AlternativeRegistry,
    DynamicRegistry,
    EmptyRegistry,
    MapRegistry,
    RegistryBuilder,
    all_resolved,
    alternatives,
    default_registry,
    from_hierarchy,
)


def _draws(gen, seed: int = 0, count: int = 100) -> list:
    rng = random.Random(seed)
    return [gen.get(rng) for _ in range(count)]


def _value(registry, shape, seed: int = 0):
    gen = registry.lookup(shape)
    assert gen is not None, f"no generator for {shape}"
    return gen.get(random.Random(seed))


def test_empty_registry_resolves_nothing() -> None:
    assert EmptyRegistry().lookup(int) is None


def test_map_registry_lookup() -> None:
    registry = MapRegistry({int: const_gen(1), param_id(list, int): const_gen([1])})
    assert _value(registry, int) == 1
    assert _value(registry, List[int]) == [1]
    assert registry.lookup(str) is None
    assert registry.lookup(wildcard("T")) is None


def test_map_registry_rejects_wildcard_keys() -> None:
    with pytest.raises(ValueError, match="cannot contain wildcards"):
        MapRegistry({param_id(list, wildcard("T")): const_gen([])})


def test_map_registry_is_immutable() -> None:
    entries = {int: const_gen(1)}
    registry = MapRegistry(entries)
    entries[str] = const_gen("a")
    assert registry.lookup(str) is None
    with pytest.raises(TypeError):
        registry.entries[type_id(str)] = const_gen("a")  # type: ignore[index]


def test_map_registry_factories_receive_root() -> None:
    inner = MapRegistry({str: lambda root: root.lookup(int).map(str)})
    root = alternatives(inner, MapRegistry({int: const_gen(3)}))
    assert _value(root, str) == "3"


def test_dynamic_registry_only_serves_parametrized_identifiers() -> None:
    calls = []

    def _rule(root, *parameters):
        calls.append(parameters)
        return const_gen(len(parameters))

    registry = DynamicRegistry({list: _rule})
    assert registry.lookup(list) is None
    assert _value(registry, List[int]) == 1
    assert calls == [(type_id(int),)]


def test_dynamic_registry_checks_arity() -> None:
    registry = RegistryBuilder().put_dynamic(tuple, lambda root, *params: const_gen("ok"), arity=2).build()
    assert registry.lookup(Tuple[int]) is None
    assert _value(registry, Tuple[int, int]) == "ok"


def test_alternative_registry_needs_two_delegates() -> None:
    with pytest.raises(ValueError, match="at least 2"):
        AlternativeRegistry([MapRegistry({})])


def test_alternative_registry_first_hit_wins() -> None:
    first = MapRegistry({int: const_gen(1)})
    second = MapRegistry({int: const_gen(2), str: const_gen("b")})
    registry = AlternativeRegistry([first, second])
    assert _value(registry, int) == 1
    assert _value(registry, str) == "b"
    assert _value(AlternativeRegistry([second, first]), int) == 2


def test_alternatives_collapses() -> None:
    single = MapRegistry({int: const_gen(1)})
    assert alternatives() is EMPTY_REGISTRY
    assert alternatives(EMPTY_REGISTRY, single) is single
    assert isinstance(alternatives(single, single), AlternativeRegistry)


def test_builder() -> None:
    assert RegistryBuilder().build() is EMPTY_REGISTRY
    assert isinstance(RegistryBuilder().put(int, const_gen(1)).build(), MapRegistry)
    assert isinstance(RegistryBuilder().put_dynamic(list, all_resolved(lambda gen: gen)).build(), DynamicRegistry)

    registry = (
        RegistryBuilder()
        .put(int, const_gen(1))
        .put_factory(str, lambda root: const_gen("s"))
        .put_dynamic(list, all_resolved(lambda gen: gen.map(lambda value: [value])))
        .build()
    )
    assert _value(registry, List[int]) == [1]
    assert _value(registry, str) == "s"


def test_all_resolved_needs_every_parameter() -> None:
    registry = RegistryBuilder().put(int, const_gen(1)).put_dynamic(
        tuple, all_resolved(lambda *gens: const_gen(len(gens)))
    ).build()
    assert _value(registry, Tuple[int, int]) == 2
    assert registry.lookup(Tuple[int, str]) is None


def test_from_hierarchy_returns_first_resolving_candidate() -> None:
    registry = (
        RegistryBuilder()
        .put(param_id(set, int), const_gen("set"))
        .put(param_id(frozenset, int), const_gen("frozenset"))
        .put(param_id(frozenset, str), const_gen("frozenset"))
        .put_dynamic(collections.abc.Set, from_hierarchy(set, frozenset))
        .build()
    )
    assert _value(registry, param_id(collections.abc.Set, int)) == "set"
    assert _value(registry, param_id(collections.abc.Set, str)) == "frozenset"
    assert registry.lookup(param_id(collections.abc.Set, bool)) is None


def test_default_registry_scalars() -> None:
    registry = default_registry()
    assert INT32_MIN <= _value(registry, Int32) <= INT32_MAX
    assert isinstance(_value(registry, int), int)
    assert isinstance(_value(registry, BigInt), int)
    assert 0 <= _value(registry, Size) <= 100
    assert isinstance(_value(registry, float), float)
    assert isinstance(_value(registry, Decimal), Decimal)
    assert isinstance(_value(registry, bool), bool)
    assert isinstance(_value(registry, str), str)
    assert isinstance(_value(registry, bytes), bytes)
    assert _value(registry, None) is None
    assert isinstance(_value(registry, uuid.UUID), uuid.UUID)
    assert _value(registry, decimal.Context).prec in (7, 16, 34)
    assert isinstance(_value(registry, random.Random), random.Random)


def test_default_registry_max_size_bounds_containers() -> None:
    registry = default_registry(max_size=3)
    for value in _draws(registry.lookup(List[str])):
        assert len(value) <= 3
        assert all(len(word) <= 3 for word in value)


def test_default_registry_containers() -> None:
    registry = default_registry(max_size=10)
    assert isinstance(_value(registry, List[int]), list)
    assert isinstance(_value(registry, Tuple[int, str, bool]), tuple)
    assert len(_value(registry, Tuple[int, str, bool])) == 3
    assert isinstance(_value(registry, Set[int]), set)
    assert isinstance(_value(registry, FrozenSet[int]), frozenset)
    assert isinstance(_value(registry, collections.deque[int]), collections.deque)
    assert isinstance(_value(registry, OrderedDict[str, int]), collections.OrderedDict)

    mapping = _value(registry, Dict[str, List[int]], seed=3)
    assert isinstance(mapping, dict)
    assert all(isinstance(key, str) and isinstance(value, list) for key, value in mapping.items())


def test_default_registry_abstract_collections() -> None:
    registry = default_registry(max_size=10)
    assert isinstance(_value(registry, Sequence[int]), list)
    assert isinstance(_value(registry, collections.abc.Set[int]), set)
    assert isinstance(_value(registry, Mapping[str, int]), dict)
    assert isinstance(_value(registry, Iterable[int]), list)

    iterator = _value(registry, Iterator[int])
    assert all(isinstance(value, int) for value in iterator)


def test_default_registry_callables() -> None:
    registry = default_registry()
    func = _value(registry, Callable[[int, str], int])
    assert func(1, "a") == func(1, "a")
    with pytest.raises(TypeError, match="takes 2 arguments"):
        func(1)

    supplier = _value(registry, Callable[[], str])
    assert supplier() == supplier()


def test_default_registry_unknown_shape() -> None:
    class Unknown:
        pass

    registry = default_registry()
    assert registry.lookup(Unknown) is None
    assert registry.lookup(List[Unknown]) is None
    assert registry.lookup(Sequence[Unknown]) is None


def test_default_registry_size_can_be_overridden() -> None:
    override = MapRegistry({Size: const_gen(2)})
    registry = alternatives(override, default_registry())
    assert all(len(value) == 2 for value in _draws(registry.lookup(List[int])))


def test_default_registry_rejects_negative_max_size() -> None:
    with pytest.raises(ValueError, match="max_size"):
        default_registry(max_size=-1)
