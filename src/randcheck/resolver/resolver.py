from __future__ import annotations

import inspect
import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from randcheck.generators.base import Generator, tuple_gen
from randcheck.identifiers import Identifier, from_annotation
from randcheck.registry.base import Registry
from randcheck.resolver.modifiers import Alias, Modifier, apply_modifiers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterShape:
    name: str
    identifier: Identifier
    modifiers: Tuple[Modifier, ...] = field(default=())

    @property
    def effective_identifier(self) -> Identifier:
        """The identifier to look up, after any `Alias`."""
        identifier = self.identifier
        for modifier in self.modifiers:
            if isinstance(modifier, Alias):
                identifier = modifier.identifier
        return identifier


def signature_shapes(func: Callable[..., Any]) -> List[ParameterShape]:
    """
    Read the parameter shapes of `func` from its type hints.

    Modifiers are taken from `Annotated` metadata; metadata that is not a
    modifier is ignored. Every positional parameter must be annotated.
    """
    hints = typing.get_type_hints(func, include_extras=True)
    shapes: List[ParameterShape] = []
    for name, param in inspect.signature(func).parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD, param.KEYWORD_ONLY):
            continue
        if name not in hints:
            raise TypeError(f"Parameter {name!r} of {getattr(func, '__qualname__', func)} has no type hint")
        hint = hints[name]
        modifiers: Tuple[Modifier, ...] = ()
        if typing.get_origin(hint) is typing.Annotated:
            modifiers = tuple(meta for meta in hint.__metadata__ if isinstance(meta, Modifier))
        shapes.append(ParameterShape(name, from_annotation(hint), modifiers))
    return shapes


class ShapeResolver:
    """Resolves generators for check parameters against a registry."""

    def __init__(self, registry: Registry):
        self.registry = registry

    signature_shapes = staticmethod(signature_shapes)

    def parameter_gen(self, shape: ParameterShape) -> Optional[Generator[Any]]:
        identifier = shape.effective_identifier
        gen = self.registry.lookup(identifier)
        if gen is None:
            logger.debug("Parameter %s: no generator for %s", shape.name, identifier)
            return None
        return apply_modifiers(gen, identifier, shape.modifiers)

    def parameters_gen(self, shapes: Sequence[ParameterShape]) -> Optional[Generator[Tuple[Any, ...]]]:
        """Generator of argument tuples, or None if any parameter is unresolved."""
        gens: List[Generator[Any]] = []
        for shape in shapes:
            gen = self.parameter_gen(shape)
            if gen is None:
                return None
            gens.append(gen)
        return tuple_gen(*gens)

    def unresolved(self, shapes: Sequence[ParameterShape]) -> List[ParameterShape]:
        return [shape for shape in shapes if self.parameter_gen(shape) is None]