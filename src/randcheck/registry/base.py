"""
Type-directed generator registries.

A registry answers "how do I generate values of this shape?". Lookups never
raise for unknown shapes, they answer `None`. Registries compose: dynamic
rules receive the root registry of the lookup so they can resolve the
generators of their own parameter shapes through the whole composition.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from randcheck.generators.base import Generator
from randcheck.identifiers import (
    Identifier,
    TypeIdentifier,
    contains_wildcard,
    replace,
    to_identifier,
    wildcard,
)

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[["Registry"], Optional[Generator[Any]]]
DynamicRule = Callable[..., Optional[Generator[Any]]]
StaticEntry = Union[Generator[Any], GeneratorFactory]


class Registry(ABC):
    def lookup(self, identifier: Any) -> Optional[Generator[Any]]:
        """Generator for `identifier` (an identifier or a type hint), or None."""
        ident = to_identifier(identifier)
        gen = self.recursive_lookup(self, ident)
        if gen is None:
            logger.debug("No generator resolved for %s", ident)
        return gen

    @abstractmethod
    def recursive_lookup(self, root: "Registry", identifier: Identifier) -> Optional[Generator[Any]]:
        """Resolve `identifier`, using `root` for any nested lookup."""


class EmptyRegistry(Registry):
    def recursive_lookup(self, root: Registry, identifier: Identifier) -> Optional[Generator[Any]]:
        return None


EMPTY_REGISTRY = EmptyRegistry()


class MapRegistry(Registry):
    """
    Static registry keyed by concrete identifiers.

    Entries are generators, or factories called with the root registry at
    lookup time.
    """

    def __init__(self, entries: Mapping[Any, StaticEntry]):
        table: Dict[Identifier, StaticEntry] = {}
        for key, entry in entries.items():
            ident = to_identifier(key)
            if contains_wildcard(ident):
                raise ValueError(f"Static registry keys cannot contain wildcards: {ident}")
            table[ident] = entry
        self._entries = MappingProxyType(table)

    @property
    def entries(self) -> Mapping[Identifier, StaticEntry]:
        return self._entries

    def recursive_lookup(self, root: Registry, identifier: Identifier) -> Optional[Generator[Any]]:
        entry = self._entries.get(identifier) if not identifier.is_wildcard else None
        if entry is None:
            return None
        if isinstance(entry, Generator):
            return entry
        return entry(root)


@dataclass(frozen=True)
class DynamicEntry:
    rule: DynamicRule
    arity: Optional[int] = None


class DynamicRegistry(Registry):
    """
    Registry of rules keyed by base shape.

    A rule is called as `rule(root, *parameter_identifiers)` for parametrized
    identifiers whose base matches, and only when the arity matches if one is
    declared.
    """

    def __init__(self, rules: Mapping[Any, Union[DynamicRule, DynamicEntry]]):
        table: Dict[Any, DynamicEntry] = {}
        for base, rule in rules.items():
            table[base] = rule if isinstance(rule, DynamicEntry) else DynamicEntry(rule)
        self._rules = MappingProxyType(table)

    def recursive_lookup(self, root: Registry, identifier: Identifier) -> Optional[Generator[Any]]:
        if identifier.is_wildcard or not identifier.parameters:
            return None
        entry = self._rules.get(identifier.base)
        if entry is None:
            return None
        if entry.arity is not None and entry.arity != len(identifier.parameters):
            logger.debug(
                "Rule for %s expects %d parameters, got %s", identifier.base, entry.arity, identifier
            )
            return None
        return entry.rule(root, *identifier.parameters)


class AlternativeRegistry(Registry):
    """Tries its delegates in order; the first one resolving wins."""

    def __init__(self, registries: Sequence[Registry]):
        if len(registries) < 2:
            raise ValueError("AlternativeRegistry needs at least 2 registries")
        self._registries = tuple(registries)

    def recursive_lookup(self, root: Registry, identifier: Identifier) -> Optional[Generator[Any]]:
        for registry in self._registries:
            gen = registry.recursive_lookup(root, identifier)
            if gen is not None:
                return gen
        return None


def alternatives(*registries: Registry) -> Registry:
    kept = [registry for registry in registries if not isinstance(registry, EmptyRegistry)]
    if not kept:
        return EMPTY_REGISTRY
    if len(kept) == 1:
        return kept[0]
    return AlternativeRegistry(kept)


class RegistryBuilder:
    def __init__(self) -> None:
        self._static: Dict[Any, StaticEntry] = {}
        self._dynamic: Dict[Any, DynamicEntry] = {}

    def put(self, identifier: Any, gen: Generator[Any]) -> "RegistryBuilder":
        self._static[to_identifier(identifier)] = gen
        return self

    def put_factory(self, identifier: Any, factory: GeneratorFactory) -> "RegistryBuilder":
        self._static[to_identifier(identifier)] = factory
        return self

    def put_dynamic(self, base: Any, rule: DynamicRule, arity: Optional[int] = None) -> "RegistryBuilder":
        self._dynamic[base] = DynamicEntry(rule, arity)
        return self

    def build(self) -> Registry:
        static = MapRegistry(self._static) if self._static else EMPTY_REGISTRY
        dynamic = DynamicRegistry(self._dynamic) if self._dynamic else EMPTY_REGISTRY
        return alternatives(static, dynamic)


def all_resolved(mapper: Callable[..., Generator[Any]]) -> DynamicRule:
    """Rule calling `mapper(*generators)` once every parameter resolves."""

    def _rule(root: Registry, *parameters: Identifier) -> Optional[Generator[Any]]:
        gens: List[Generator[Any]] = []
        for param in parameters:
            gen = root.lookup(param)
            if gen is None:
                return None
            gens.append(gen)
        return mapper(*gens)

    return _rule


def from_hierarchy(*candidate_bases: Any) -> DynamicRule:
    """
    Rule backing an abstract shape by the first concrete candidate resolving.

    Each candidate keeps the parameters of the requested identifier, e.g.
    `from_hierarchy(list, deque)` serves `Sequence[int]` with `list[int]`,
    then `deque[int]`.
    """
    bases = tuple(candidate_bases)

    def _rule(root: Registry, *parameters: Identifier) -> Optional[Generator[Any]]:
        holes = tuple(wildcard(f"T{index}") for index in range(len(parameters)))
        resolution = dict(zip(holes, parameters))
        for base in bases:
            candidate = replace(TypeIdentifier(base, holes), resolution)
            gen = root.lookup(candidate)
            if gen is not None:
                return gen
        return None

    return _rule
