"""
Parameter modifiers.

Modifiers are attached to a check parameter through `typing.Annotated` and
reshape the generator resolved for it, e.g.

    def check(x: Annotated[float, InRange(DoubleRange.closed(0.0, 1.0)), Nullable(0.1)]) -> None: ...

They apply left to right: each one receives the generator produced by the
previous one.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence, Tuple

from randcheck.generators.base import Generator, coin, nullable, one_of, selection
from randcheck.generators.numbers import (
    big_decimal_gen,
    big_integer_gen,
    double_gen,
    integer_gen,
    long_gen,
)
from randcheck.identifiers import BigInt, Int32, Int64, TypeIdentifier, Identifier, to_identifier
from randcheck.ranges import FLOAT_MAX, DoubleRange, IntRange, LongRange, Range

SPECIAL_DOUBLES: Tuple[float, ...] = (
    math.nan,
    math.inf,
    -math.inf,
    5e-324,
    FLOAT_MAX,
    2.2250738585072014e-308,
    0.0,
    -0.0,
)

DEFAULT_RATE = 0.05


class Modifier(ABC):
    @abstractmethod
    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Nullable(Modifier):
    rate: float = DEFAULT_RATE

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return nullable(gen, self.rate)


def _same_value(left: Any, right: Any) -> bool:
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True
        # 0.0 and -0.0 are different values here
        return left == right and math.copysign(1.0, left) == math.copysign(1.0, right)
    return left == right


class Exclude(Modifier):
    """Reject the listed values. For floats, `-0.0` and `0.0` differ and NaN matches NaN."""

    def __init__(self, *values: Any):
        self.values: Tuple[Any, ...] = values

    def excludes(self, value: Any) -> bool:
        return any(_same_value(value, excluded) for excluded in self.values)

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return gen.filter(lambda value: not self.excludes(value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Exclude) and self.values == other.values

    def __hash__(self) -> int:
        return hash(("Exclude", self.values))

    def __repr__(self) -> str:
        return f"Exclude{self.values!r}"


def _range_gen(range_: Range[Any], identifier: Identifier) -> Optional[Generator[Any]]:
    if not isinstance(identifier, TypeIdentifier) or identifier.parameters:
        return None
    base = identifier.base
    bounds = (range_.min, range_.max, range_.min_closed, range_.max_closed)
    if base is float:
        return double_gen(DoubleRange(*bounds))
    if base is Int32:
        return integer_gen(IntRange(*bounds))
    if base is Int64:
        return long_gen(LongRange(*bounds))
    if base is int or base is BigInt:
        return big_integer_gen(Range(*bounds))
    if base is Decimal:
        return big_decimal_gen(Range(Decimal(range_.min), Decimal(range_.max), range_.min_closed, range_.max_closed))
    return None


@dataclass(frozen=True)
class InRange(Modifier):
    """
    Bound the values.

    Within a modifier chain, numeric shapes are generated directly in the
    range (see `apply_modifiers`); applied on its own, the modifier filters.
    `None` passes through so that a `Nullable` placed before it still shows.
    """

    range: Range[Any]

    def base_gen(self, identifier: Identifier) -> Optional[Generator[Any]]:
        """Generator drawing directly in the range, or None for non-numeric shapes."""
        return _range_gen(self.range, identifier)

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return gen.filter(lambda value: value is None or self.range.contains(value))


@dataclass(frozen=True)
class Filter(Modifier):
    predicate: Callable[[Any], bool]

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return gen.filter(self.predicate)


@dataclass(frozen=True)
class Extra(Modifier):
    """With probability `rate`, draw one of `values` instead of the generator."""

    values: Sequence[Any] = SPECIAL_DOUBLES
    rate: float = DEFAULT_RATE

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return selection(one_of(self.values), gen, coin(self.rate))


def IncludeNaN(rate: float = DEFAULT_RATE) -> Extra:
    return Extra((math.nan,), rate)


class Alias(Modifier):
    """Resolve the parameter as another shape."""

    def __init__(self, shape: Any):
        self.identifier: Identifier = to_identifier(shape)

    def apply(self, gen: Generator[Any], identifier: Identifier) -> Generator[Any]:
        return gen

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alias) and self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(("Alias", self.identifier))

    def __repr__(self) -> str:
        return f"Alias({self.identifier})"


def apply_modifiers(gen: Generator[Any], identifier: Identifier, modifiers: Sequence[Modifier]) -> Generator[Any]:
    """
    Apply `modifiers` left to right on `gen`.

    The first `InRange` bounding a numeric shape replaces `gen` before the
    chain runs, so the modifiers placed before it are kept.
    """
    for modifier in modifiers:
        if isinstance(modifier, InRange):
            bounded = modifier.base_gen(identifier)
            if bounded is not None:
                gen = bounded
                break
    for modifier in modifiers:
        gen = modifier.apply(gen, identifier)
    return gen
