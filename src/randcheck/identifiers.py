"""
Type identifiers.

An identifier names the shape of a value: a base (usually a class) plus
ordered parameter identifiers, e.g. `list[dict[str, int]]`. Identifiers are
compared structurally, so they can key a registry. Wildcards are named holes
used as templates; a wildcard only equals itself.
"""
from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, Mapping, NewType, Tuple, Union

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
BigInt = NewType("BigInt", int)
Size = NewType("Size", int)

NoneType = type(None)


@dataclass(frozen=True)
class TypeIdentifier:
    base: Any
    parameters: Tuple["Identifier", ...] = ()

    is_wildcard = False

    @property
    def nb_parameters(self) -> int:
        return len(self.parameters)

    def __str__(self) -> str:
        name = getattr(self.base, "__qualname__", None) or getattr(self.base, "__name__", None) or repr(self.base)
        if not self.parameters:
            return name
        return f"{name}[{', '.join(str(param) for param in self.parameters)}]"


class WildcardIdentifier:
    """Placeholder identifier, equal only to itself."""

    __slots__ = ("name",)

    is_wildcard = True

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"WildcardIdentifier({self.name!r})"

    def __str__(self) -> str:
        return f"?{self.name}"


Identifier = Union[TypeIdentifier, WildcardIdentifier]


def to_identifier(value: Any) -> Identifier:
    if isinstance(value, (TypeIdentifier, WildcardIdentifier)):
        return value
    return from_annotation(value)


def type_id(base: Any) -> TypeIdentifier:
    return TypeIdentifier(base)


def param_id(base: Any, *parameters: Any) -> TypeIdentifier:
    """Parametrized identifier; each parameter is a type hint or an identifier."""
    return TypeIdentifier(base, tuple(to_identifier(param) for param in parameters))


def wildcard(name: str) -> WildcardIdentifier:
    return WildcardIdentifier(name)


def contains_wildcard(identifier: Identifier) -> bool:
    if identifier.is_wildcard:
        return True
    return any(contains_wildcard(param) for param in identifier.parameters)


def replace(identifier: Identifier, resolution: Mapping[WildcardIdentifier, Identifier]) -> Identifier:
    """Substitute every wildcard of `identifier` by its resolution."""
    if isinstance(identifier, WildcardIdentifier):
        try:
            return resolution[identifier]
        except KeyError:
            raise KeyError(f"No resolution for wildcard {identifier}") from None
    if not identifier.parameters:
        return identifier
    return TypeIdentifier(identifier.base, tuple(replace(param, resolution) for param in identifier.parameters))


def fetch_wildcard_resolution(pattern: Identifier, concrete: Identifier) -> Dict[WildcardIdentifier, Identifier]:
    """
    Match `pattern` against `concrete` and return what each wildcard stands for.

    Raises `ValueError` when the trees differ outside wildcards, or when one
    wildcard would stand for two different identifiers.
    """
    resolution: Dict[WildcardIdentifier, Identifier] = {}
    _match(pattern, concrete, resolution)
    return resolution


def _match(pattern: Identifier, concrete: Identifier, resolution: Dict[WildcardIdentifier, Identifier]) -> None:
    if isinstance(pattern, WildcardIdentifier):
        known = resolution.get(pattern)
        if known is not None and known != concrete:
            raise ValueError(f"Wildcard {pattern} matches both {known} and {concrete}")
        resolution[pattern] = concrete
        return
    if (
        not isinstance(concrete, TypeIdentifier)
        or pattern.base != concrete.base
        or len(pattern.parameters) != len(concrete.parameters)
    ):
        raise ValueError(f"Identifier {concrete} does not match pattern {pattern}")
    for sub_pattern, sub_concrete in zip(pattern.parameters, concrete.parameters):
        _match(sub_pattern, sub_concrete, resolution)


def from_annotation(annotation: Any) -> TypeIdentifier:
    """
    Build an identifier from a type hint.

    `Callable[[A, B], R]` becomes `Callable` parametrized by `(A, B, R)`.
    `Annotated[T, ...]` is read as `T`.
    """
    if annotation is None or annotation is NoneType:
        return type_id(NoneType)

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return from_annotation(typing.get_args(annotation)[0])

    if origin is None:
        if isinstance(annotation, type) or isinstance(annotation, NewType):
            return type_id(annotation)
        raise TypeError(f"Unsupported type hint: {annotation!r}")

    if origin is typing.Union or origin is types.UnionType:
        raise TypeError(f"Union type hints are not supported: {annotation!r}")

    args = typing.get_args(annotation)
    if origin is collections.abc.Callable and args:
        inputs, output = args
        if inputs is Ellipsis:
            raise TypeError(f"Callable type hints need explicit parameters: {annotation!r}")
        return param_id(origin, *inputs, output)

    if Ellipsis in args:
        raise TypeError(f"Variadic type hints are not supported: {annotation!r}")
    return param_id(origin, *args)
