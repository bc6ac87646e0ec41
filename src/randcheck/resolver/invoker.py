from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from randcheck.exceptions import NoRegisteredGenerator, UnsatisfiedAssumption
from randcheck.registry.base import Registry, alternatives
from randcheck.resolver.resolver import ShapeResolver, signature_shapes
from randcheck.runner.random_runner import Invoker, TestRunner, random_runner
from randcheck.runner.result import TestResult

logger = logging.getLogger(__name__)


def assume(condition: bool) -> None:
    """Skip the current trial unless `condition` holds."""
    if not condition:
        raise UnsatisfiedAssumption("Assumption not satisfied")


def function_invoker(func: Callable[..., Any]) -> Invoker:
    """
    Invoker calling `func(*arguments)`.

    A returned `TestResult` is used as is; any other return value is a
    success. `UnsatisfiedAssumption` skips the trial and any other exception
    fails it.
    """

    def _invoke(arguments: Tuple[Any, ...]) -> TestResult:
        try:
            outcome = func(*arguments)
        except UnsatisfiedAssumption:
            return TestResult.skipped()
        except Exception as exc:
            return TestResult.failure(exc)
        if isinstance(outcome, TestResult):
            return outcome
        return TestResult.ok()

    _invoke.__name__ = getattr(func, "__name__", "check")
    return _invoke


def check_runner(
    func: Callable[..., Any],
    configuration: Optional[Any] = None,
    *,
    registry: Optional[Registry] = None,
    name: Optional[str] = None,
) -> TestRunner:
    """
    Build the randomized runner of a type-hinted check function.

    `registry`, when given, is consulted before the configured one. Raises
    `NoRegisteredGenerator` naming every parameter without a generator.
    """
    from randcheck.config.models import TestRunnerConfiguration

    if configuration is None:
        configuration = TestRunnerConfiguration()
    check_name = name or getattr(func, "__qualname__", repr(func))

    configured = configuration.create_registry()
    resolver = ShapeResolver(configured if registry is None else alternatives(registry, configured))
    shapes = signature_shapes(func)
    arguments_gen = resolver.parameters_gen(shapes)
    if arguments_gen is None:
        missing = [f"{shape.name}: {shape.effective_identifier}" for shape in resolver.unresolved(shapes)]
        raise NoRegisteredGenerator(check_name, missing)

    logger.debug("Resolved %d parameters for %s", len(shapes), check_name)
    return random_runner(function_invoker(func), arguments_gen, configuration, name=check_name)
