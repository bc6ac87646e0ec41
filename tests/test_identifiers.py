from __future__ import annotations

import collections.abc
import typing
from typing import Annotated, Callable, Dict, List

import pytest

from randcheck.identifiers import (
    Int32,
    NoneType,
    TypeIdentifier,
    contains_wildcard,
    fetch_wildcard_resolution,
    from_annotation,
    param_id,
    replace,
    type_id,
    wildcard,
)


def test_identifiers_compare_structurally() -> None:
    assert param_id(list, int) == param_id(list, type_id(int))
    assert hash(param_id(dict, str, int)) == hash(param_id(dict, str, int))
    assert param_id(dict, str, int) != param_id(dict, int, str)
    assert type_id(list) != param_id(list, int)


def test_wildcards_compare_by_identity() -> None:
    first = wildcard("T")
    second = wildcard("T")
    assert first == first
    assert first != second
    assert param_id(list, first) != param_id(list, second)
    assert first.is_wildcard
    assert not type_id(int).is_wildcard


def test_contains_wildcard() -> None:
    assert contains_wildcard(param_id(dict, str, param_id(list, wildcard("T"))))
    assert not contains_wildcard(param_id(dict, str, param_id(list, int)))


def test_replace_substitutes_wildcards() -> None:
    key, value = wildcard("K"), wildcard("V")
    template = param_id(dict, key, param_id(list, value))
    resolved = replace(template, {key: type_id(str), value: type_id(int)})
    assert resolved == param_id(dict, str, param_id(list, int))


def test_replace_raises_for_unmapped_wildcard() -> None:
    with pytest.raises(KeyError, match="No resolution"):
        replace(param_id(list, wildcard("T")), {})


def test_fetch_wildcard_resolution() -> None:
    key, value = wildcard("K"), wildcard("V")
    resolution = fetch_wildcard_resolution(
        param_id(dict, key, param_id(list, value)),
        param_id(dict, str, param_id(list, int)),
    )
    assert resolution == {key: type_id(str), value: type_id(int)}


def test_fetch_wildcard_resolution_rejects_mismatch() -> None:
    with pytest.raises(ValueError, match="does not match"):
        fetch_wildcard_resolution(param_id(list, wildcard("T")), param_id(set, int))

    same = wildcard("T")
    with pytest.raises(ValueError, match="matches both"):
        fetch_wildcard_resolution(param_id(dict, same, same), param_id(dict, str, int))


def test_from_annotation() -> None:
    assert from_annotation(int) == type_id(int)
    assert from_annotation(None) == type_id(NoneType)
    assert from_annotation(Int32) == type_id(Int32)
    assert from_annotation(list[int]) == param_id(list, int)
    assert from_annotation(List[int]) == param_id(list, int)
    assert from_annotation(Dict[str, List[int]]) == param_id(dict, str, param_id(list, int))
    assert from_annotation(typing.Sequence[int]) == param_id(collections.abc.Sequence, int)
    assert from_annotation(Annotated[int, "meta"]) == type_id(int)


def test_from_annotation_flattens_callables() -> None:
    identifier = from_annotation(Callable[[int, str], bool])
    assert identifier == TypeIdentifier(
        collections.abc.Callable, (type_id(int), type_id(str), type_id(bool))
    )
    assert from_annotation(Callable[[], int]) == param_id(collections.abc.Callable, int)


def test_from_annotation_rejects_unsupported_hints() -> None:
    with pytest.raises(TypeError, match="Union"):
        from_annotation(typing.Optional[int])
    with pytest.raises(TypeError, match="Unsupported"):
        from_annotation("int")
    with pytest.raises(TypeError, match="Variadic"):
        from_annotation(tuple[int, ...])


def test_str() -> None:
    assert str(param_id(dict, str, param_id(list, int))) == "dict[str, list[int]]"
