from __future__ import annotations

import pytest

from randcheck.runner.result import TestResult, TestState


def test_factories_and_states() -> None:
    assert (TestResult.ok().nb_skipped, TestResult.ok().nb_total) == (0, 1)
    assert (TestResult.skipped().nb_skipped, TestResult.skipped().nb_total) == (1, 1)
    assert (TestResult.empty().nb_skipped, TestResult.empty().nb_total) == (0, 0)

    assert TestResult.ok().state is TestState.OK
    assert TestResult.skipped().state is TestState.SKIPPED
    assert TestResult.empty().state is TestState.OK

    cause = AssertionError("boom")
    failure = TestResult.failure(cause)
    assert failure.state is TestState.FAILURE
    assert failure.failure_cause is cause


def test_when() -> None:
    assert TestResult.when(True) == TestResult.ok()
    assert TestResult.when(False) == TestResult.skipped()


def test_counters_are_validated() -> None:
    with pytest.raises(ValueError, match="cannot exceed"):
        TestResult(2, 1)
    with pytest.raises(ValueError, match=">= 0"):
        TestResult(-1, 1)


def test_merge_sums_counters() -> None:
    merged = TestResult.ok().merge(TestResult.skipped()).merge(TestResult.ok())
    assert (merged.nb_skipped, merged.nb_total) == (1, 3)
    assert merged.state is TestState.OK

    all_skipped = TestResult.skipped().merge(TestResult.skipped())
    assert all_skipped.state is TestState.SKIPPED


def test_merge_with_failure_yields_failure() -> None:
    failure = TestResult.failure(ValueError("x"))
    assert TestResult.ok().merge(failure) is failure
    assert failure.merge(TestResult.skipped()) is failure


def test_merge_two_failures_keeps_first_cause() -> None:
    first, second = ValueError("first"), ValueError("second")
    merged = TestResult.failure(first).merge(TestResult.failure(second))
    assert merged.failure_cause is first
    assert merged.suppressed == (second,)
