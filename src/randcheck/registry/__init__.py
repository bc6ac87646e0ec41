from .base import (
    EMPTY_REGISTRY,
    AlternativeRegistry,
    DynamicEntry,
    DynamicRegistry,
    EmptyRegistry,
    MapRegistry,
    Registry,
    RegistryBuilder,
    all_resolved,
    alternatives,
    from_hierarchy,
)
from .defaults import DEFAULT_MAX_SIZE, default_registry, ieee_context_gen

__all__ = [
    "EMPTY_REGISTRY",
    "AlternativeRegistry",
    "DynamicEntry",
    "DynamicRegistry",
    "EmptyRegistry",
    "MapRegistry",
    "Registry",
    "RegistryBuilder",
    "all_resolved",
    "alternatives",
    "from_hierarchy",
    "DEFAULT_MAX_SIZE",
    "default_registry",
    "ieee_context_gen",
]
