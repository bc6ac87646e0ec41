"""
Immutable numeric ranges.

A range is a pair of bounds, each of them open or closed. `Range` works on any
totally ordered domain (ints, floats, decimals, fractions); `IntRange`,
`LongRange` and `DoubleRange` additionally enforce the bounds of their native
width (32-bit ints, 64-bit ints and finite-or-infinite doubles).
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
FLOAT_MAX = sys.float_info.max


def _is_nan(value: Any) -> bool:
    # NaN is the only value not equal to itself, for floats and decimals alike
    return value != value


@dataclass(frozen=True)
class Range(Generic[T]):
    min: T
    max: T
    min_closed: bool = True
    max_closed: bool = True

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if self.min is None or self.max is None:
            raise ValueError("Range bounds cannot be None")
        if _is_nan(self.min) or _is_nan(self.max):
            raise ValueError("Range bounds cannot be NaN")
        if self.min > self.max:
            raise ValueError(f"Invalid range: min ({self.min}) > max ({self.max})")
        if self.min == self.max and self.min_closed != self.max_closed:
            raise ValueError(f"Half-open range with equal bounds is not allowed: {self.min}")

    @classmethod
    def closed(cls, min: T, max: T):
        return cls(min, max, True, True)

    @classmethod
    def opened(cls, min: T, max: T):
        return cls(min, max, False, False)

    @classmethod
    def closed_open(cls, min: T, max: T):
        return cls(min, max, True, False)

    @classmethod
    def open_closed(cls, min: T, max: T):
        return cls(min, max, False, True)

    def contains(self, value: T) -> bool:
        above = value >= self.min if self.min_closed else value > self.min
        below = value <= self.max if self.max_closed else value < self.max
        return above and below

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def is_empty(self) -> bool:
        return self.min == self.max and not self.min_closed and not self.max_closed

    def boxed(self) -> "Range[T]":
        """Return the generic form of this range."""
        return Range(self.min, self.max, self.min_closed, self.max_closed)

    def map(self, mapper: Callable[[T], R]) -> "Range[R]":
        """
        Transform both bounds with `mapper`.

        The mapper must be monotonically increasing so that the mapped bounds
        stay ordered. A mapped half-open range whose bounds collapse becomes the
        explicit empty range.
        """
        left = mapper(self.min)
        right = mapper(self.max)
        collapsed = left == right and (not self.min_closed or not self.max_closed)
        return type(self)(
            left,
            right,
            not collapsed and self.min_closed,
            not collapsed and self.max_closed,
        )

    def __str__(self) -> str:
        return f"{'[' if self.min_closed else '('}{self.min} ; {self.max}{']' if self.max_closed else ')'}"


class _FixedWidthRange(Range[int]):
    _lower_limit: int
    _upper_limit: int

    def _validate(self) -> None:
        for bound in (self.min, self.max):
            if not isinstance(bound, int) or isinstance(bound, bool):
                raise ValueError(f"{type(self).__name__} bounds must be ints, got {bound!r}")
            if not self._lower_limit <= bound <= self._upper_limit:
                raise ValueError(
                    f"{type(self).__name__} bound {bound} is outside [{self._lower_limit}, {self._upper_limit}]"
                )
        super()._validate()

    def is_empty(self) -> bool:
        return (self.min == self.max or self.min == self.max - 1) and not self.min_closed and not self.max_closed


class IntRange(_FixedWidthRange):
    """Range over 32-bit signed integers."""

    _lower_limit = INT32_MIN
    _upper_limit = INT32_MAX


class LongRange(_FixedWidthRange):
    """Range over 64-bit signed integers."""

    _lower_limit = INT64_MIN
    _upper_limit = INT64_MAX


class DoubleRange(Range[float]):
    """Range over IEEE 754 doubles. `-0.0` bounds are normalized to `0.0`."""

    def _validate(self) -> None:
        for bound in (self.min, self.max):
            if not isinstance(bound, (int, float)) or isinstance(bound, bool):
                raise ValueError(f"DoubleRange bounds must be floats, got {bound!r}")
        # remove the distinction between -0.0 and 0.0
        object.__setattr__(self, "min", float(self.min) + 0.0)
        object.__setattr__(self, "max", float(self.max) + 0.0)
        super()._validate()

    def is_empty(self) -> bool:
        adjacent = self.min == self.max or math.nextafter(self.min, math.inf) == self.max
        return adjacent and not self.min_closed and not self.max_closed
