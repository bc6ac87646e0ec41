from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from randcheck.exceptions import SkippedTestError
from randcheck.generators.base import Generator
from randcheck.runner.result import TestResult, TestState

if TYPE_CHECKING:
    from randcheck.config.models import TestRunnerConfiguration

logger = logging.getLogger(__name__)

Invoker = Callable[[Tuple[Any, ...]], TestResult]
RandomFactory = Callable[[], random.Random]


class TestRunner(ABC):
    __test__ = False

    @abstractmethod
    def run(self) -> TestResult:
        raise NotImplementedError


class RandomTestRunner(TestRunner):
    """
    Runs a check `nb_run` times on freshly generated arguments.

    One random source is created per run, so a seeded factory makes the whole
    run reproducible. The first failing trial ends the run. Errors raised
    while generating arguments are not check failures and propagate.
    """

    def __init__(
        self,
        invoker: Invoker,
        nb_run: int,
        arguments_gen: Generator[Tuple[Any, ...]],
        random_factory: RandomFactory,
    ):
        if nb_run <= 0:
            raise ValueError("nb_run must be > 0")
        self.invoker = invoker
        self.nb_run = nb_run
        self.arguments_gen = arguments_gen
        self.random_factory = random_factory

    def run(self) -> TestResult:
        rng = self.random_factory()
        result = TestResult.empty()

        for index in range(self.nb_run):
            arguments = self.arguments_gen.get(rng)
            status = self.invoker(arguments)
            logger.debug("Trial %d/%d: %s", index + 1, self.nb_run, status.state.value)

            if status.state is TestState.FAILURE:
                logger.info("Trial %d/%d failed with arguments %r: %s", index + 1, self.nb_run, arguments, status.cause)
                return status
            result = result.merge(status)
        return result

    def __repr__(self) -> str:
        return f"RandomTestRunner(nb_run={self.nb_run})"


class NamedTestRunner(TestRunner):
    def __init__(self, name: str, delegate: TestRunner):
        self.name = name
        self.delegate = delegate

    def run(self) -> TestResult:
        return self.delegate.run()

    def __str__(self) -> str:
        return self.name


class _FailingSkippedRunner(NamedTestRunner):
    def __init__(self, rate: float, delegate: TestRunner):
        super().__init__(f"FailingSkipped({delegate})", delegate)
        self.rate = rate

    def run(self) -> TestResult:
        result = self.delegate.run()
        if result.state is TestState.FAILURE or self.rate == 1.0:
            return result

        allowed = math.ceil(self.rate * result.nb_total)
        if result.nb_skipped > 0 and (self.rate == 0.0 or result.nb_skipped >= allowed):
            logger.warning(
                "%s skipped %d of %d trials (accepted skip rate %.3f)",
                self.delegate,
                result.nb_skipped,
                result.nb_total,
                self.rate,
            )
            return TestResult.failure(SkippedTestError(str(self.delegate), result.nb_skipped, result.nb_total))
        return result


class _LoggedRunner(NamedTestRunner):
    def run(self) -> TestResult:
        logger.info("Starting %s", self.name)
        result = self.delegate.run()
        logger.info(
            "Finished %s: %s (%d skipped / %d total)",
            self.name,
            result.state.value,
            result.nb_skipped,
            result.nb_total,
        )
        return result


def named_runner(name: str, runner: TestRunner) -> TestRunner:
    return NamedTestRunner(name, runner)


def failing_skipped(rate: float, runner: TestRunner) -> TestRunner:
    """
    Turn too many skipped trials into a failure.

    With `rate == 0` a single skip fails; with `0 < rate < 1` the run fails
    once `nb_skipped >= ceil(rate * nb_total)`; `rate == 1` accepts any
    number of skips.
    """
    if not 0.0 <= rate <= 1.0:
        raise ValueError(f"rate must be within [0, 1], got {rate}")
    return _FailingSkippedRunner(rate, runner)


def random_runner(
    invoker: Invoker,
    arguments_gen: Generator[Tuple[Any, ...]],
    configuration: Optional["TestRunnerConfiguration"] = None,
    name: Optional[str] = None,
) -> TestRunner:
    """Assemble a randomized runner, named and guarded by the configured skip rate."""
    if configuration is None:
        from randcheck.config.models import TestRunnerConfiguration

        configuration = TestRunnerConfiguration()

    runner = RandomTestRunner(
        invoker,
        configuration.nb_run,
        arguments_gen,
        configuration.create_random_factory(),
    )
    label = f"Randomized({name or getattr(invoker, '__name__', repr(invoker))})"
    return failing_skipped(configuration.accept_skip_rate, _LoggedRunner(label, runner))

