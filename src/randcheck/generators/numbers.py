"""
Bounded, bias-free numeric generators.

Every generator first turns its range into effective closed bounds, then picks
the cheapest exact strategy: a constant, a native full-width draw, a
magnitude/sign draw for symmetric ranges, a `randrange` over the delta, or a
promotion to a wider domain when the delta does not fit the native width.
"""
from __future__ import annotations

import decimal
import math
import random
import sys
from decimal import Decimal
from typing import Any, Callable, Optional, Type, TypeVar

from randcheck.generators.base import Generator, const_gen, one_of
from randcheck.ranges import (
    FLOAT_MAX,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    DoubleRange,
    IntRange,
    LongRange,
    Range,
)

R = TypeVar("R", bound=Range[Any])

DEFAULT_BIG_INTEGER_RANGE: Range[int] = Range.closed(INT64_MIN * 100, INT64_MAX * 100)
DEFAULT_BIG_DECIMAL_RANGE: Range[Decimal] = Range.closed(
    Decimal(-FLOAT_MAX) * 100, Decimal(FLOAT_MAX) * 100
)

# extra digits on top of the span of the bounds, covers the carry of a sum
_PRECISION_MARGIN = 10


def _signed_bits(rng: random.Random, bits: int) -> int:
    value = rng.getrandbits(bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _closed_int_bounds(range_: Range[int]) -> tuple[int, int]:
    if range_.is_empty():
        raise ValueError(f"Cannot generate values in empty range {range_}")
    low = range_.min if range_.min_closed else range_.min + 1
    high = range_.max if range_.max_closed else range_.max - 1
    if low > high:
        raise ValueError(f"Cannot generate values in empty range {range_}")
    return low, high


def _fixed_width_gen(
    range_: Range[int],
    bits: int,
    promote: Callable[[int, int], Generator[int]],
) -> Generator[int]:
    low, high = _closed_int_bounds(range_)
    width_min = -(1 << (bits - 1))
    width_max = (1 << (bits - 1)) - 1

    if low == high:
        return const_gen(low)

    if low == width_min and high == width_max:
        return Generator(lambda rng: _signed_bits(rng, bits))

    if low == -high:
        if high == width_max:
            return Generator(lambda rng: _signed_bits(rng, bits)).filter(lambda value: value != width_min)

        def _symmetric(rng: random.Random) -> int:
            magnitude = rng.randrange(high + 1)
            return -magnitude if rng.getrandbits(1) else magnitude

        return Generator(_symmetric)

    delta = high - low
    if delta < width_max:
        return Generator(lambda rng: rng.randrange(delta + 1) + low)

    return promote(low, high)


def _with_width(range_: Range[Any], width: Type[R]) -> R:
    if isinstance(range_, width):
        return range_
    # runs the width checks of the target range type
    return width(range_.min, range_.max, range_.min_closed, range_.max_closed)


def integer_gen(range_: Optional[IntRange] = None) -> Generator[int]:
    """Uniform 32-bit integers, the full width by default."""
    if range_ is None:
        range_ = IntRange.closed(INT32_MIN, INT32_MAX)
    range_ = _with_width(range_, IntRange)
    return _fixed_width_gen(range_, 32, lambda low, high: long_gen(LongRange.closed(low, high)))


def long_gen(range_: Optional[LongRange] = None) -> Generator[int]:
    """Uniform 64-bit integers, the full width by default."""
    if range_ is None:
        range_ = LongRange.closed(INT64_MIN, INT64_MAX)
    range_ = _with_width(range_, LongRange)
    return _fixed_width_gen(range_, 64, _wide_integer_gen)


def big_integer_gen(range_: Optional[Range[int]] = None) -> Generator[int]:
    """
    Arbitrary-precision integers.

    Ranges fitting in 64 bits are delegated to `long_gen`. Wider ranges draw
    uniformly over the delta with `randrange`, which works on ints of any size.
    """
    if range_ is None:
        range_ = DEFAULT_BIG_INTEGER_RANGE
    low, high = _closed_int_bounds(range_)

    if low == high:
        return const_gen(low)
    if INT64_MIN <= low and high <= INT64_MAX:
        return long_gen(LongRange.closed(low, high))

    return _wide_integer_gen(low, high)


def _wide_integer_gen(low: int, high: int) -> Generator[int]:
    delta = high - low
    return Generator(lambda rng: rng.randrange(delta + 1) + low)


def double_gen(range_: Optional[DoubleRange] = None) -> Generator[float]:
    """
    Uniform finite doubles.

    Ranges wider than the largest float are computed with `Decimal`
    arithmetic and clamped back into the range.
    """
    if range_ is None:
        range_ = DoubleRange.closed(-FLOAT_MAX, FLOAT_MAX)
    range_ = _with_width(range_, DoubleRange)
    if range_.is_empty():
        raise ValueError(f"Cannot generate values in empty range {range_}")
    if not (math.isfinite(range_.min) and math.isfinite(range_.max)):
        raise ValueError(f"Double range bounds must be finite: {range_}")

    low = range_.min if range_.min_closed else math.nextafter(range_.min, math.inf)
    high = range_.max if range_.max_closed else math.nextafter(range_.max, -math.inf)
    if low > high:
        raise ValueError(f"Cannot generate values in empty range {range_}")

    if low == high:
        return const_gen(low)

    if low == -high:
        def _symmetric(rng: random.Random) -> float:
            value = rng.random() * high
            return -value if rng.getrandbits(1) else value

        return Generator(_symmetric)

    delta = high - low
    if math.isfinite(delta):
        return Generator(lambda rng: min(rng.random() * delta + low, high))

    precision = 2 * sys.float_info.max_10_exp + _PRECISION_MARGIN
    b_low = Decimal(low)
    with decimal.localcontext() as ctx:
        ctx.prec = precision
        b_delta = Decimal(high) - b_low

    def _wide(rng: random.Random) -> float:
        with decimal.localcontext() as ctx:
            ctx.prec = precision
            value = float(Decimal(rng.random()) * b_delta + b_low)
        return max(low, min(value, high))

    return Generator(_wide)


def special_double_gen() -> Generator[float]:
    """Doubles that tend to break arithmetic code."""
    return one_of(
        [
            5e-324,
            FLOAT_MAX,
            sys.float_info.min,
            math.nan,
            0.0,
            -0.0,
            math.inf,
            -math.inf,
        ]
    )


def _unscaled(value: Decimal) -> tuple[int, int]:
    sign, digits, exponent = value.as_tuple()
    unscaled = int("".join(map(str, digits))) if digits else 0
    return (-unscaled if sign else unscaled), -exponent


def _from_unscaled(unscaled: int, scale: int) -> Decimal:
    digits = tuple(int(c) for c in str(abs(unscaled)))
    return Decimal((1 if unscaled < 0 else 0, digits, -scale))


def big_decimal_gen(range_: Optional[Range[Decimal]] = None) -> Generator[Decimal]:
    """
    Arbitrary-precision decimals.

    Both bounds are brought to the finest of their two scales and a value is
    drawn uniformly among the decimals of that scale within the range. Open
    bounds are left out; when that leaves no candidate, one more decimal
    place is used.
    """
    if range_ is None:
        range_ = DEFAULT_BIG_DECIMAL_RANGE
    if range_.is_empty():
        raise ValueError(f"Cannot generate values in empty range {range_}")
    low, high = Decimal(range_.min), Decimal(range_.max)
    if not (low.is_finite() and high.is_finite()):
        raise ValueError(f"Decimal range bounds must be finite: {range_}")

    if low == high:
        return const_gen(low)

    low_int, low_scale = _unscaled(low)
    high_int, high_scale = _unscaled(high)
    scale = max(low_scale, high_scale)
    low_units = low_int * 10 ** (scale - low_scale)
    high_units = high_int * 10 ** (scale - high_scale)

    first = 0 if range_.min_closed else 1
    last = high_units - low_units - (0 if range_.max_closed else 1)
    if first > last:
        scale += 1
        low_units *= 10
        high_units *= 10
        last = high_units - low_units - (0 if range_.max_closed else 1)

    offset_gen = big_integer_gen(Range.closed(first, last))
    return Generator(lambda rng: _from_unscaled(low_units + offset_gen.get(rng), scale))


def math_context_gen() -> Generator[decimal.Context]:
    """Contexts with a precision in `[1, 256]` and any rounding mode."""
    precision_gen = integer_gen(IntRange.closed(1, 256))
    rounding_gen = one_of(
        [
            decimal.ROUND_UP,
            decimal.ROUND_DOWN,
            decimal.ROUND_CEILING,
            decimal.ROUND_FLOOR,
            decimal.ROUND_HALF_UP,
            decimal.ROUND_HALF_DOWN,
            decimal.ROUND_HALF_EVEN,
            decimal.ROUND_05UP,
        ]
    )
    return Generator(lambda rng: decimal.Context(prec=precision_gen.get(rng), rounding=rounding_gen.get(rng)))
