from .result import TestResult, TestState
from .random_runner import (
    Invoker,
    NamedTestRunner,
    RandomFactory,
    RandomTestRunner,
    TestRunner,
    failing_skipped,
    named_runner,
    random_runner,
)

__all__ = [
    "TestResult",
    "TestState",
    "Invoker",
    "NamedTestRunner",
    "RandomFactory",
    "RandomTestRunner",
    "TestRunner",
    "failing_skipped",
    "named_runner",
    "random_runner",
]
