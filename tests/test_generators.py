from __future__ import annotations

import random

import pytest

from randcheck.exceptions import MaxFilterLoopError
from randcheck.generators import (
    Generator,
    co_generator,
    coin,
    const_gen,
    filter_gen,
    nullable,
    one_gen_of,
    one_of,
    selection,
    tuple_gen,
)
from randcheck.generators.numbers import integer_gen
from randcheck.ranges import IntRange


def _draws(gen: Generator, seed: int = 0, count: int = 1000) -> list:
    rng = random.Random(seed)
    return [gen.get(rng) for _ in range(count)]


def test_generators_are_repeatable_for_the_same_source_state() -> None:
    gen = tuple_gen(integer_gen(), one_of("abc"), coin(0.3))
    assert _draws(gen, seed=42, count=50) == _draws(gen, seed=42, count=50)


def test_const_gen_ignores_the_source() -> None:
    rng = random.Random(1)
    state = rng.getstate()
    assert const_gen("x").get(rng) == "x"
    assert rng.getstate() == state


def test_one_of_rejects_empty_universe() -> None:
    with pytest.raises(ValueError, match="empty universe"):
        one_of([])


def test_one_of_covers_universe() -> None:
    assert set(_draws(one_of([1, 2, 3]))) == {1, 2, 3}


def test_one_gen_of_draws_from_picked_generator() -> None:
    gen = one_gen_of([const_gen("a"), const_gen("b")])
    assert set(_draws(gen, count=200)) == {"a", "b"}


def test_coin_validates_probability() -> None:
    with pytest.raises(ValueError, match="within \\[0, 1\\]"):
        coin(1.5)
    with pytest.raises(ValueError, match="within \\[0, 1\\]"):
        coin(-0.1)


def test_coin_extremes() -> None:
    assert all(_draws(coin(1.0)))
    assert not any(_draws(coin(0.0)))


def test_nullable_does_not_consume_delegate_when_null() -> None:
    calls = []

    def _counting(rng: random.Random) -> int:
        calls.append(1)
        return 7

    values = _draws(nullable(Generator(_counting), 1.0), count=20)
    assert values == [None] * 20
    assert calls == []

    assert _draws(Generator(_counting).nullable(0.0), count=5) == [7] * 5


def test_selection_uses_bool_generator() -> None:
    gen = selection(const_gen("yes"), const_gen("no"), const_gen(True))
    assert set(_draws(gen, count=10)) == {"yes"}
    gen = selection(const_gen("yes"), const_gen("no"), const_gen(False))
    assert set(_draws(gen, count=10)) == {"no"}


def test_filter_only_yields_matching_values() -> None:
    gen = integer_gen(IntRange.closed(0, 100)).filter(lambda value: value % 2 == 0)
    assert all(value % 2 == 0 for value in _draws(gen))


def test_filter_raises_after_max_loop() -> None:
    draws = []

    def _counting(rng: random.Random) -> int:
        draws.append(1)
        return 1

    gen = filter_gen(Generator(_counting), lambda value: False, max_loop=50)
    with pytest.raises(MaxFilterLoopError, match="Generated 50 values"):
        gen.get(random.Random(0))
    assert len(draws) == 50


def test_map_and_flat_map() -> None:
    doubled = integer_gen(IntRange.closed(1, 5)).map(lambda value: value * 2)
    assert set(_draws(doubled)) == {2, 4, 6, 8, 10}

    nested = integer_gen(IntRange.closed(1, 3)).flat_map(lambda size: const_gen("x" * size))
    assert set(_draws(nested)) == {"x", "xx", "xxx"}


def test_co_generator_is_deterministic_and_restores_state() -> None:
    output = integer_gen()
    rng = random.Random(5)
    before = rng.getstate()

    first = co_generator("input", output).get(rng)
    assert rng.getstate() == before

    rng.random()
    second = co_generator("input", output).get(rng)
    assert first == second


def test_co_generator_restores_state_when_output_fails() -> None:
    def _boom(rng: random.Random) -> int:
        rng.random()
        raise RuntimeError("boom")

    rng = random.Random(3)
    before = rng.getstate()
    with pytest.raises(RuntimeError, match="boom"):
        co_generator(1, Generator(_boom)).get(rng)
    assert rng.getstate() == before


def test_co_generator_accepts_unhashable_inputs() -> None:
    output = integer_gen()
    rng = random.Random(0)
    assert co_generator([1, 2], output).get(rng) == co_generator([1, 2], output).get(rng)


def test_tuple_gen_draws_in_order() -> None:
    gen = tuple_gen(const_gen(1), const_gen("a"))
    assert gen.get(random.Random(0)) == (1, "a")
