"""
randcheck package entry. Importing this package registers the built-in
random source factories (`seeded`, `system`) and registry factory (`default`).
"""

from .config import RunConfig, TestRunnerConfiguration, load_config
from .exceptions import (
    MaxFilterLoopError,
    NoRegisteredGenerator,
    RandcheckError,
    SkippedTestError,
    UnsatisfiedAssumption,
)
from .generators import Generator
from .identifiers import BigInt, Int32, Int64, Size, from_annotation, param_id, type_id, wildcard
from .ranges import DoubleRange, IntRange, LongRange, Range
from .registry import Registry, RegistryBuilder, default_registry
from .resolver import (
    Alias,
    Exclude,
    Extra,
    Filter,
    IncludeNaN,
    InRange,
    Nullable,
    assume,
    check_runner,
    function_invoker,
)
from .runner import RandomTestRunner, TestResult, TestRunner, TestState, random_runner

__all__ = [
    "RunConfig",
    "TestRunnerConfiguration",
    "load_config",
    "MaxFilterLoopError",
    "NoRegisteredGenerator",
    "RandcheckError",
    "SkippedTestError",
    "UnsatisfiedAssumption",
    "Generator",
    "BigInt",
    "Int32",
    "Int64",
    "Size",
    "from_annotation",
    "param_id",
    "type_id",
    "wildcard",
    "DoubleRange",
    "IntRange",
    "LongRange",
    "Range",
    "Registry",
    "RegistryBuilder",
    "default_registry",
    "Alias",
    "Exclude",
    "Extra",
    "Filter",
    "IncludeNaN",
    "InRange",
    "Nullable",
    "assume",
    "check_runner",
    "function_invoker",
    "RandomTestRunner",
    "TestResult",
    "TestRunner",
    "TestState",
    "random_runner",
]
