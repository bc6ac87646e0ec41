from .invoker import assume, check_runner, function_invoker
from .modifiers import (
    SPECIAL_DOUBLES,
    Alias,
    Exclude,
    Extra,
    Filter,
    IncludeNaN,
    InRange,
    Modifier,
    Nullable,
    apply_modifiers,
)
from .resolver import ParameterShape, ShapeResolver, signature_shapes

__all__ = [
    "assume",
    "check_runner",
    "function_invoker",
    "SPECIAL_DOUBLES",
    "Alias",
    "Exclude",
    "Extra",
    "Filter",
    "IncludeNaN",
    "InRange",
    "Modifier",
    "Nullable",
    "apply_modifiers",
    "ParameterShape",
    "ShapeResolver",
    "signature_shapes",
]
