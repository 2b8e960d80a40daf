"""Benchmark runner: discovers candidates, measures them and builds the report.

Usage:
    from microbench.benchmarks.runner import BenchmarkRunner

    runner = BenchmarkRunner(print_progress=True)
    report = runner.run_all()
    print(runner)

One bad candidate never stops the run: configuration problems are written to
the diagnostic stream (stderr by default), failures while running are logged,
and the runner moves on to the next candidate.
"""

import sys
from collections.abc import Mapping
from typing import Any, TextIO

from microbench.benchmarks.candidate import BenchmarkCandidate
from microbench.benchmarks.errors import (
    BenchmarkConfigurationError,
    BenchmarkInvocationError,
    HasParametersError,
    HookResolutionError,
    IterationCountError,
    NotStaticError,
    UnsupportedCallableError,
)
from microbench.benchmarks.instance import measure
from microbench.benchmarks.report import RunReport
from microbench.benchmarks.scanner import BenchmarkScanner
from microbench.models.benchmark_models import BenchmarkInstance
from microbench.utils.logger import Logger

NOT_STATIC_MESSAGE = "Only static methods allowed for benchmarking."
HAS_PARAMETERS_MESSAGE = "Methods with parameters are not allowed for benchmarking."
UNSUPPORTED_CALLABLE_MESSAGE = (
    "Coroutine and generator functions are not allowed for benchmarking."
)
HOOK_PROBLEM_MESSAGE = (
    "Problems with methods to be executed before or after each iteration."
)
ITERATION_COUNT_MESSAGE = (
    "Number of iterations cannot be negative and at least one measured "
    "iteration is required."
)
INVOCATION_FAILURE_MESSAGE = "Exception raised while benchmarking."

DIAGNOSTIC_MESSAGES: dict[type[BenchmarkConfigurationError], str] = {
    NotStaticError: NOT_STATIC_MESSAGE,
    HasParametersError: HAS_PARAMETERS_MESSAGE,
    UnsupportedCallableError: UNSUPPORTED_CALLABLE_MESSAGE,
    HookResolutionError: HOOK_PROBLEM_MESSAGE,
    IterationCountError: ITERATION_COUNT_MESSAGE,
}


class BenchmarkRunner:
    """Runs every discovered benchmark and collects the results.

    Example:
        >>> runner = BenchmarkRunner(scanner=BenchmarkScanner(root="examples"))
        >>> report = runner.run_all()
        >>> report.emit_stdout()
    """

    def __init__(
        self,
        print_progress: bool = False,
        scanner: BenchmarkScanner | None = None,
        defaults: Mapping[str, Any] | None = None,
        output: TextIO | None = None,
        diagnostics: TextIO | None = None,
        stop_on_error: bool = False,
    ) -> None:
        """Initialize the runner.

        Args:
            print_progress: If True, print each callable's name as it starts
                and a blank separator once the run is over.
            scanner: Where candidates come from. Defaults to a scanner of the
                current working directory.
            defaults: Run-wide iteration defaults (see RunDefaults).
            output: Stream for progress lines (default: sys.stdout at run time).
            diagnostics: Stream for invalid-method messages (default:
                sys.stderr at run time).
            stop_on_error: If True, stop at the first candidate that fails.
        """
        self.print_progress = print_progress
        self.stop_on_error = stop_on_error
        self._scanner = scanner
        self._defaults = dict(defaults or {})
        self._output = output
        self._diagnostics = diagnostics
        self._report = RunReport()
        self._log = Logger.for_component("benchmarks.runner")

    @property
    def scanner(self) -> BenchmarkScanner:
        """The candidate scanner, created on first use."""
        if self._scanner is None:
            self._scanner = BenchmarkScanner()
        return self._scanner

    @property
    def report(self) -> RunReport:
        """Report of the latest run (in "no run" state before run_all)."""
        return self._report

    @property
    def results(self) -> list[BenchmarkInstance]:
        """Sorted results of the latest run."""
        return self._report.results

    def run_all(self) -> RunReport:
        """Benchmark every discovered candidate.

        Returns:
            The completed RunReport, results sorted by tested method.
        """
        output = self._output or sys.stdout
        report = RunReport()
        self._report = report
        report.start()

        candidates = self.scanner.get_all_candidates()
        self._log.info(f"Benchmarking {len(candidates)} candidate(s)")

        for candidate in candidates:
            if self.print_progress:
                output.write(f"Benchmarking method {candidate.qualname}\n")
                output.flush()

            result = self._run_candidate(candidate, report)
            if result is not None:
                report.add_result(result)
            elif self.stop_on_error:
                self._log.warning("Stopping run after first failure")
                break

        report.finalize()
        self._log.info(
            f"Run complete: {len(report.results)} benchmarked, "
            f"{len(report.diagnostics)} invalid"
        )
        if self.print_progress:
            output.write("\n\n")
            output.flush()
        return report

    def _run_candidate(
        self, candidate: BenchmarkCandidate, report: RunReport
    ) -> BenchmarkInstance | None:
        """Measure one candidate, recording any failure in the report."""
        method = str(candidate)
        try:
            return measure(candidate, self._defaults)
        except BenchmarkConfigurationError as e:
            message = DIAGNOSTIC_MESSAGES.get(type(e), str(e))
            diagnostic = report.add_diagnostic(method, message, str(e))
            stream = self._diagnostics or sys.stderr
            stream.write(f"{diagnostic}\n")
            stream.flush()
            self._log.debug(f"Invalid method {method}: {e}")
        except BenchmarkInvocationError as e:
            report.add_diagnostic(method, INVOCATION_FAILURE_MESSAGE, str(e.__cause__ or e))
            self._log.error(f"{e}: {e.__cause__!r}", exc_info=e)
        return None

    def format_report(self) -> str:
        """Render the report of the latest run."""
        return self._report.to_text()

    def __str__(self) -> str:
        return self.format_report()
