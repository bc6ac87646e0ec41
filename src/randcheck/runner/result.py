from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TestState(str, Enum):
    __test__ = False

    OK = "ok"
    FAILURE = "failure"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TestResult:
    """
    Outcome of one or many trials.

    Either a failure carrying its cause, or counters of skipped and total
    trials. A result with no trial at all is `empty()`.
    """

    __test__ = False

    nb_skipped: int = 0
    nb_total: int = 0
    cause: Optional[BaseException] = None
    suppressed: Tuple[BaseException, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.nb_skipped < 0 or self.nb_total < 0:
            raise ValueError("Result counters must be >= 0")
        if self.nb_skipped > self.nb_total:
            raise ValueError(
                f"Skipped trials ({self.nb_skipped}) cannot exceed total trials ({self.nb_total})"
            )

    @classmethod
    def empty(cls) -> "TestResult":
        return cls(0, 0)

    @classmethod
    def ok(cls) -> "TestResult":
        return cls(0, 1)

    @classmethod
    def skipped(cls) -> "TestResult":
        return cls(1, 1)

    @classmethod
    def failure(cls, cause: BaseException) -> "TestResult":
        if cause is None:
            raise ValueError("A failure needs a cause")
        return cls(0, 1, cause)

    @classmethod
    def when(cls, condition: bool) -> "TestResult":
        """`ok()` when the condition holds, `skipped()` otherwise."""
        return cls.ok() if condition else cls.skipped()

    @property
    def state(self) -> TestState:
        if self.cause is not None:
            return TestState.FAILURE
        if self.nb_total > 0 and self.nb_skipped == self.nb_total:
            return TestState.SKIPPED
        return TestState.OK

    @property
    def failure_cause(self) -> Optional[BaseException]:
        return self.cause

    def merge(self, other: "TestResult") -> "TestResult":
        """
        Combine two results.

        Counters add up. A failure wins over counters; of two failures the
        first cause is kept and the second one is recorded as suppressed.
        """
        if self.cause is not None and other.cause is not None:
            return TestResult(
                self.nb_skipped,
                self.nb_total,
                self.cause,
                self.suppressed + (other.cause,) + other.suppressed,
            )
        if self.cause is not None:
            return self
        if other.cause is not None:
            return other
        return TestResult(self.nb_skipped + other.nb_skipped, self.nb_total + other.nb_total)
