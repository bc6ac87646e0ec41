from __future__ import annotations

import random
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from randcheck.config.factories import create_random_factory, create_registry_factory
from randcheck.registry.base import Registry


class RandomSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field("seeded", min_length=1)
    config: Dict[str, Any] = Field(default_factory=dict)


class RegistrySettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field("default", min_length=1)
    config: Dict[str, Any] = Field(default_factory=dict)


class TestConfigOverrides(BaseModel):
    """Partial runner settings; unset fields keep the value they override."""

    __test__ = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    nb_run: Optional[int] = Field(None, gt=0)
    accept_skip_rate: Optional[float] = Field(None, ge=0.0, le=1.0)
    random: Optional[RandomSettings] = None
    registry: Optional[RegistrySettings] = None


class TestRunnerConfiguration(BaseModel):
    __test__ = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    nb_run: int = Field(100, gt=0)
    accept_skip_rate: float = Field(0.0, ge=0.0, le=1.0)
    random: RandomSettings = Field(default_factory=RandomSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)

    def with_overrides(self, overrides: Optional[TestConfigOverrides]) -> "TestRunnerConfiguration":
        if overrides is None:
            return self
        update = {
            name: getattr(overrides, name)
            for name in TestConfigOverrides.model_fields
            if getattr(overrides, name) is not None
        }
        return self.model_copy(update=update)

    def create_random_factory(self) -> Callable[[], random.Random]:
        return create_random_factory(self.random.type, self.random.config).create

    def create_registry(self) -> Registry:
        return create_registry_factory(self.registry.type, self.registry.config).create()


class RunConfig(BaseModel):
    """
    Runner settings for a whole suite.

    `defaults` apply to every check, `groups` to the checks of a named group
    and `checks` to a single check; the most specific block wins, field by
    field.
    """

    model_config = ConfigDict(extra="forbid")

    defaults: TestConfigOverrides = Field(default_factory=TestConfigOverrides)
    groups: Dict[str, TestConfigOverrides] = Field(default_factory=dict)
    checks: Dict[str, TestConfigOverrides] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_names(self) -> "RunConfig":
        for section in ("groups", "checks"):
            if any(not name.strip() for name in getattr(self, section)):
                raise ValueError(f"{section} names must not be blank")
        return self

    def resolve(self, group: Optional[str] = None, check: Optional[str] = None) -> TestRunnerConfiguration:
        configuration = TestRunnerConfiguration().with_overrides(self.defaults)
        if group is not None:
            configuration = configuration.with_overrides(self.groups.get(group))
        if check is not None:
            configuration = configuration.with_overrides(self.checks.get(check))
        return configuration
