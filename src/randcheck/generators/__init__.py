from .base import (
    MAX_FILTER_LOOP,
    Generator,
    co_generator,
    coin,
    const_gen,
    filter_gen,
    flat_map_gen,
    map_gen,
    nullable,
    one_gen_of,
    one_of,
    selection,
    tuple_gen,
)
from .collections import (
    DEFAULT_MAX_TRY,
    deque_gen,
    dict_gen,
    frozenset_gen,
    list_gen,
    mutable_key_based_collection_gen,
    set_gen,
)
from .functions import function_gen, predicate_gen, supplier_gen
from .numbers import (
    big_decimal_gen,
    big_integer_gen,
    double_gen,
    integer_gen,
    long_gen,
    math_context_gen,
    special_double_gen,
)
from .text import bytes_gen, word_gen

__all__ = [
    "MAX_FILTER_LOOP",
    "DEFAULT_MAX_TRY",
    "Generator",
    "co_generator",
    "coin",
    "const_gen",
    "filter_gen",
    "flat_map_gen",
    "map_gen",
    "nullable",
    "one_gen_of",
    "one_of",
    "selection",
    "tuple_gen",
    "deque_gen",
    "dict_gen",
    "frozenset_gen",
    "list_gen",
    "mutable_key_based_collection_gen",
    "set_gen",
    "function_gen",
    "predicate_gen",
    "supplier_gen",
    "big_decimal_gen",
    "big_integer_gen",
    "double_gen",
    "integer_gen",
    "long_gen",
    "math_context_gen",
    "special_double_gen",
    "bytes_gen",
    "word_gen",
]
