"""Run report: results and diagnostics of one benchmarking run.

Usage:
    from microbench.benchmarks.report import RunReport

    report = RunReport()
    report.start()
    report.add_result(instance)
    report.add_diagnostic(str(candidate), "Only static methods allowed...")
    report.finalize()

    report.emit_stdout()
"""

import sys
import time
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from io import StringIO
from pathlib import Path
from typing import TextIO

from microbench.benchmarks.errors import RunNotEndedError, RunNotStartedError
from microbench.models.benchmark_models import BenchmarkInstance

BANNER_WIDTH = 83


@dataclass(frozen=True)
class Diagnostic:
    """A candidate that could not be benchmarked."""

    method: str
    message: str
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.message}\n\tInvalid method: {self.method}"


def format_duration(duration: timedelta) -> str:
    """Format a duration as HH:MM:SS.mmm, clamping negative values to zero.

    Example:
        >>> format_duration(timedelta(hours=1, minutes=2, seconds=3, milliseconds=4))
        '01:02:03.004'
    """
    total_ms = max(0, int(duration / timedelta(milliseconds=1)))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


class RunReport:
    """Results collected during one run, with start/end metadata.

    A report that was never started renders as "No test performed." and
    raises on derived fields such as ``duration``.

    Example:
        >>> report = RunReport()
        >>> str(report).rstrip().endswith("No test performed.")
        True
    """

    def __init__(self) -> None:
        """Initialize an empty report in the "no run" state."""
        self._results: list[BenchmarkInstance] = []
        self._diagnostics: list[Diagnostic] = []
        self._started_at: datetime | None = None
        self._ended_at: datetime | None = None
        self._started_ns: int | None = None
        self._ended_ns: int | None = None

    def start(self) -> None:
        """Mark the run as started, discarding anything collected before."""
        self._results.clear()
        self._diagnostics.clear()
        self._started_at = datetime.now(UTC)
        self._started_ns = time.monotonic_ns()
        self._ended_at = None
        self._ended_ns = None

    def add_result(self, result: BenchmarkInstance) -> None:
        """Add a measurement result."""
        self._results.append(result)

    def add_diagnostic(self, method: str, message: str, detail: str = "") -> Diagnostic:
        """Record a candidate that could not be benchmarked."""
        diagnostic = Diagnostic(method=method, message=message, detail=detail)
        self._diagnostics.append(diagnostic)
        return diagnostic

    def finalize(self) -> None:
        """Mark the run as complete and sort the results."""
        self._results.sort()
        self._ended_at = datetime.now(UTC)
        self._ended_ns = time.monotonic_ns()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def results(self) -> list[BenchmarkInstance]:
        """Measurement results (sorted once the run is finalized)."""
        return list(self._results)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Candidates that could not be benchmarked."""
        return list(self._diagnostics)

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def ended_at(self) -> datetime | None:
        return self._ended_at

    @property
    def is_started(self) -> bool:
        return self._started_at is not None

    @property
    def is_ended(self) -> bool:
        return self._ended_at is not None

    @property
    def duration(self) -> timedelta:
        """Elapsed time of the run, measured with a monotonic clock.

        Raises:
            RunNotStartedError: If the run never started.
            RunNotEndedError: If the run has not ended yet.
        """
        if self._started_ns is None:
            raise RunNotStartedError()
        if self._ended_ns is None:
            raise RunNotEndedError()
        return timedelta(microseconds=(self._ended_ns - self._started_ns) // 1000)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_text(self) -> str:
        """Render the human-readable report."""
        output = StringIO()
        title = " BENCHMARK SUMMARY "
        output.write("=" * BANNER_WIDTH + "\n")
        output.write(f"{title:=^{BANNER_WIDTH}}\n")
        output.write("=" * BANNER_WIDTH + "\n\n")

        if not self.is_started:
            output.write("No test performed.\n")
            return output.getvalue()

        count = len(self._results)
        output.write(f"{count} methods benchmarked\n\n")
        output.write(f"Test started at:\t{self._started_at}\n")
        if self.is_ended:
            output.write(f"Test ended at:\t\t{self._ended_at}\n")
            output.write(
                f"Test duration:\t\t{format_duration(self.duration)}\t(HH:mm:ss.SSS)\n"
            )
        output.write("\n")

        output.write(f"Benchmarked method{'s' if count != 1 else ''}:\n")
        for i, result in enumerate(self._results, start=1):
            output.write(f"\t{i})\t{result.tested_method}\n")
        output.write("\n" + "-" * BANNER_WIDTH + "\n")

        for i, result in enumerate(self._results, start=1):
            output.write(f"\n{i}) {result}")

        return output.getvalue()

    def emit(self, output: str | Path | TextIO) -> None:
        """Write the text report to a file path or stream."""
        content = self.to_text()
        if isinstance(output, str | Path):
            Path(output).write_text(content)
        else:
            output.write(content)
            if output is not sys.stdout and output is not sys.stderr:
                output.flush()

    def emit_stdout(self) -> None:
        """Write the text report to stdout."""
        self.emit(sys.stdout)

    def __str__(self) -> str:
        return self.to_text()

    def __len__(self) -> int:
        """Return number of results."""
        return len(self._results)

    def __contains__(self, method: str) -> bool:
        """Check if a method has a result."""
        return any(result.tested_method == method for result in self._results)
