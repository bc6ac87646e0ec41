"""
Random source and registry factories, referenced from configuration by type
name. Implementations register themselves with a class decorator and declare
their options as a nested pydantic `Config` model.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel, ConfigDict, Field

from randcheck.generators.collections import DEFAULT_MAX_TRY
from randcheck.registry.base import Registry
from randcheck.registry.defaults import DEFAULT_MAX_SIZE, default_registry

logger = logging.getLogger(__name__)


class RandomSourceFactory(ABC):
    type_name: str = ""

    class Config(BaseModel):
        model_config = ConfigDict(extra="forbid")

    def __init__(self, config: BaseModel):
        self.config = config

    @abstractmethod
    def create(self) -> random.Random:
        raise NotImplementedError


class RegistryFactory(ABC):
    type_name: str = ""

    class Config(BaseModel):
        model_config = ConfigDict(extra="forbid")

    def __init__(self, config: BaseModel):
        self.config = config

    @abstractmethod
    def create(self) -> Registry:
        raise NotImplementedError


_RANDOM_FACTORIES: Dict[str, Type[RandomSourceFactory]] = {}
_REGISTRY_FACTORIES: Dict[str, Type[RegistryFactory]] = {}


def register_random_factory(type_name: str):
    """Class decorator for registering RandomSourceFactory implementations."""

    def _decorator(cls: Type[RandomSourceFactory]) -> Type[RandomSourceFactory]:
        if type_name in _RANDOM_FACTORIES:
            raise ValueError(f"Random factory '{type_name}' already registered")
        cls.type_name = type_name
        _RANDOM_FACTORIES[type_name] = cls
        return cls

    return _decorator


def register_registry_factory(type_name: str):
    """Class decorator for registering RegistryFactory implementations."""

    def _decorator(cls: Type[RegistryFactory]) -> Type[RegistryFactory]:
        if type_name in _REGISTRY_FACTORIES:
            raise ValueError(f"Registry factory '{type_name}' already registered")
        cls.type_name = type_name
        _REGISTRY_FACTORIES[type_name] = cls
        return cls

    return _decorator


def create_random_factory(type_name: str, config: Mapping[str, Any] | None = None) -> RandomSourceFactory:
    cls = _RANDOM_FACTORIES.get(type_name)
    if cls is None:
        available = ", ".join(sorted(_RANDOM_FACTORIES)) or "<none>"
        raise ValueError(f"Unknown random factory '{type_name}'. Available: {available}")
    return cls(cls.Config.model_validate(dict(config or {})))


def create_registry_factory(type_name: str, config: Mapping[str, Any] | None = None) -> RegistryFactory:
    cls = _REGISTRY_FACTORIES.get(type_name)
    if cls is None:
        available = ", ".join(sorted(_REGISTRY_FACTORIES)) or "<none>"
        raise ValueError(f"Unknown registry factory '{type_name}'. Available: {available}")
    return cls(cls.Config.model_validate(dict(config or {})))


def list_random_factories() -> Dict[str, Type[RandomSourceFactory]]:
    return dict(_RANDOM_FACTORIES)


def list_registry_factories() -> Dict[str, Type[RegistryFactory]]:
    return dict(_REGISTRY_FACTORIES)


@register_random_factory("seeded")
class SeededRandomFactory(RandomSourceFactory):
    """Every created source starts from the same seed, so runs are reproducible."""

    class Config(BaseModel):
        model_config = ConfigDict(extra="forbid")

        seed: int = 0

    def create(self) -> random.Random:
        return random.Random(self.config.seed)


@register_random_factory("system")
class SystemRandomFactory(RandomSourceFactory):
    """Seeds each created source from the OS entropy pool and logs the seed."""

    def create(self) -> random.Random:
        seed = random.SystemRandom().getrandbits(64)
        logger.info("Random source seeded with %d", seed)
        return random.Random(seed)


@register_registry_factory("default")
class DefaultRegistryFactory(RegistryFactory):
    class Config(BaseModel):
        model_config = ConfigDict(extra="forbid")

        max_size: int = Field(DEFAULT_MAX_SIZE, ge=0)
        max_try: int = Field(DEFAULT_MAX_TRY, gt=0)

    def create(self) -> Registry:
        return default_registry(self.config.max_size, self.config.max_try)
