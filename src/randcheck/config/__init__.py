from .factories import (
    DefaultRegistryFactory,
    RandomSourceFactory,
    RegistryFactory,
    SeededRandomFactory,
    SystemRandomFactory,
    create_random_factory,
    create_registry_factory,
    list_random_factories,
    list_registry_factories,
    register_random_factory,
    register_registry_factory,
)
from .loader import load_config
from .models import (
    RandomSettings,
    RegistrySettings,
    RunConfig,
    TestConfigOverrides,
    TestRunnerConfiguration,
)

__all__ = [
    "DefaultRegistryFactory",
    "RandomSourceFactory",
    "RegistryFactory",
    "SeededRandomFactory",
    "SystemRandomFactory",
    "create_random_factory",
    "create_registry_factory",
    "list_random_factories",
    "list_registry_factories",
    "register_random_factory",
    "register_registry_factory",
    "load_config",
    "RandomSettings",
    "RegistrySettings",
    "RunConfig",
    "TestConfigOverrides",
    "TestRunnerConfiguration",
]
