"""Exception hierarchy for discovery, measurement and reporting.

Configuration errors are detected before a candidate runs; invocation errors
happen while it runs. Both are per-callable: the runner reports them and moves
on to the next candidate.
"""


class BenchmarkError(Exception):
    """Base exception for microbench errors."""

    pass


# -----------------------------------------------------------------------------
# Configuration (detected before execution)
# -----------------------------------------------------------------------------


class BenchmarkConfigurationError(BenchmarkError):
    """Raised when a candidate cannot be benchmarked as declared."""

    def __init__(self, method: str, reason: str) -> None:
        self.method = method
        self.reason = reason
        super().__init__(f"{reason}: {method}")


class NotStaticError(BenchmarkConfigurationError):
    """Raised when the candidate needs a receiver (instance or class method)."""

    def __init__(self, method: str) -> None:
        super().__init__(method, "Benchmarked callable is not static")


class HasParametersError(BenchmarkConfigurationError):
    """Raised when the candidate has required parameters."""

    def __init__(self, method: str, parameters: list[str]) -> None:
        self.parameters = parameters
        super().__init__(
            method, f"Benchmarked callable requires parameters ({', '.join(parameters)})"
        )


class UnsupportedCallableError(BenchmarkConfigurationError):
    """Raised when calling the candidate would not run its body.

    Coroutine, generator and async generator functions only build an object
    when called, so timing the call says nothing about the body.
    """

    def __init__(self, method: str, kind: str) -> None:
        self.kind = kind
        super().__init__(method, f"Benchmarked callable is a {kind}")


class IterationCountError(BenchmarkConfigurationError):
    """Raised when iteration counts are negative or leave nothing to measure."""

    def __init__(self, method: str, detail: str) -> None:
        self.detail = detail
        super().__init__(method, f"Invalid number of iterations ({detail})")


class HookResolutionError(BenchmarkConfigurationError):
    """Raised when a before/after-each hook cannot be resolved."""

    def __init__(self, method: str, identifier: str, detail: str) -> None:
        self.identifier = identifier
        self.detail = detail
        super().__init__(method, f"Cannot resolve hook '{identifier}' ({detail})")


# -----------------------------------------------------------------------------
# Invocation (raised while executing)
# -----------------------------------------------------------------------------


class BenchmarkInvocationError(BenchmarkError):
    """Raised when the candidate or one of its hooks raises during measurement."""

    def __init__(self, method: str, iteration: int, phase: str) -> None:
        self.method = method
        self.iteration = iteration
        self.phase = phase
        super().__init__(
            f"{method} failed during {phase} iteration {iteration}"
        )


# -----------------------------------------------------------------------------
# Discovery queries
# -----------------------------------------------------------------------------


class ScannerError(BenchmarkError):
    """Base exception for scanner query errors."""

    pass


class CandidateNotFoundError(ScannerError):
    """Raised when a requested candidate is not found."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Benchmark candidate not found: '{name}'")


# -----------------------------------------------------------------------------
# Run report state
# -----------------------------------------------------------------------------


class RunReportError(BenchmarkError):
    """Base exception for run report state errors."""

    pass


class RunNotStartedError(RunReportError):
    """Raised when querying derived fields of a run that never started."""

    def __init__(self) -> None:
        super().__init__("Run not started.")


class RunNotEndedError(RunReportError):
    """Raised when querying derived fields of a run that has not ended."""

    def __init__(self) -> None:
        super().__init__("Run not ended.")
