from __future__ import annotations


class RandcheckError(Exception):
    """Base class for errors raised by the generation engine itself."""


class MaxFilterLoopError(RandcheckError, RuntimeError):
    def __init__(self, max_loop: int):
        super().__init__(f"Generated {max_loop} values but none matched the filtering predicate")
        self.max_loop = max_loop


class NoRegisteredGenerator(RandcheckError, LookupError):
    def __init__(self, check_name: str, missing: list[str] | None = None):
        detail = f" (missing: {', '.join(missing)})" if missing else ""
        super().__init__(f"No registered generator for all parameters of {check_name}{detail}")
        self.check_name = check_name
        self.missing = list(missing or [])


class UnsatisfiedAssumption(RandcheckError):
    """Raised by `assume` to mark the current trial as skipped."""


class SkippedTestError(AssertionError):
    def __init__(self, test_name: str, nb_skipped: int, nb_total: int):
        super().__init__(
            f"Test {test_name} was skipped {nb_skipped} times on a total of {nb_total} runs"
        )
        self.nb_skipped = nb_skipped
        self.nb_total = nb_total
